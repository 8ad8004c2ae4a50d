from __future__ import annotations
import logging
from typing import TYPE_CHECKING
from .errors import IntegrationAbortedError
from .integration_scheme_base import IntegrationScheme, StepReport
from .kepler_scheme import KeplerScheme
from .kepler_solver import UniversalVariableKeplerSolver

if TYPE_CHECKING:
	from .sim_config import SimConfig
	from .simulation_state import SimulationState

"""
This central module implements the Integrator class that drives one tick of a central-mass simulation. It owns the universal variable solver configured from SimConfig and the KeplerScheme, exposes the two phase entry points part1 and part2, and applies the per-particle failure policy. Under the "abort" policy a tick with any failed particle commits nothing, leaves the clock untouched and raises IntegrationAbortedError carrying every failure; under "skip" the particles that advanced are committed, the failed ones keep their pre-step state and the failures are logged and returned in the StepReport. The global time is advanced exactly once per tick, after all particle updates have been committed.

"""

log = logging.getLogger(__name__)


class Integrator:

	def __init__(self, state: "SimulationState", cfg: "SimConfig") -> None:
		self.state = state
		self.cfg = cfg
		self.failure_policy = cfg.failure_policy

		self._last_report: StepReport | None = None

		self._uv_solver = UniversalVariableKeplerSolver.from_config(cfg)
		self._scheme: IntegrationScheme = KeplerScheme(self)

	@property
	def solver(self) -> UniversalVariableKeplerSolver:
		return self._uv_solver

	@property
	def last_report(self) -> StepReport | None:
		return self._last_report

	def part1(self) -> None:
		self._scheme.part1()

	def part2(self) -> StepReport:
		state = self.state
		dt = float(state.dt)
		stage, report = self._scheme.part2(dt)

		if report.failures and self.failure_policy == "abort":
			report.committed = False
			self._last_report = report
			raise IntegrationAbortedError(report.failures, state.t)

		state.pos = stage.pos
		state.vel = stage.vel

		for i, exc in sorted(report.failures.items()):
			log.warning("[skip] particle %d not advanced at t=%r: %s", i, state.t, exc)

		state.t += dt
		report.t = state.t
		self._last_report = report
		return report

	def step(self) -> StepReport:
		self.part1()
		return self.part2()
