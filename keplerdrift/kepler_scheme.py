from __future__ import annotations
import logging
from .errors import DegenerateOrbitError, KeplerConvergenceError
from .integration_scheme_base import IntegrationScheme, StepReport
from .kepler_solver import kepler_step
from .simulation_state import SimulationState

"""
This module implements the Kepler drift scheme for systems dominated by a central mass. The KeplerScheme class advances every particle except the central one (index 0) along its two-body orbit about particle 0 for one global timestep, using the integrator's universal variable solver. part1 is a placeholder where external forces may act; part2 performs the drift. The drift is staged on a copy of the state: every particle reads only its own pre-step row and the central row, so one particle's failure cannot disturb another, and the caller decides from the returned StepReport whether to commit the staged state. No pairwise gravity between orbiting particles is computed.
"""

log = logging.getLogger(__name__)


class KeplerScheme(IntegrationScheme):

	def _kepler_drift(self, dt: float) -> tuple[SimulationState, StepReport]:
		state = self.integ.state
		solver = self.integ._uv_solver

		stage = SimulationState()
		stage.restore(state.snapshot())
		stage.dt = float(dt)

		report = StepReport(t=state.t)
		for i in range(1, stage.n_particles):
			try:
				sol = kepler_step(stage, i, solver)
			except (DegenerateOrbitError, KeplerConvergenceError) as exc:
				log.debug("particle %d failed: %s", i, exc)
				report.failures[i] = exc
				continue
			report.iterations[i] = sol.iterations
		return stage, report

	def part2(self, dt: float) -> tuple[SimulationState, StepReport]:
		return self._kepler_drift(dt)
