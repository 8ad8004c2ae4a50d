"""
This module implements KeplerSimulation, the user-facing owner of a central-mass
system.

A KeplerSimulation holds the SimulationState (particles and clock) and the Integrator,
and runs the tick sequence part1, optional additional_forces hook, part2. The hook is
any callable taking the simulation; it runs between the two phases and may modify
particle velocities through the views, standing in for the external force layer.
Helpers add particles, integrate to a target time with fixed steps, and take or
restore snapshots.
"""

from __future__ import annotations
import logging
import math
from typing import Callable, List, Sequence

from .body import Particle
from .body_view import ParticleView
from .errors import InvalidStateError
from .integration_scheme_base import StepReport
from .integrator import Integrator
from .sim_config import SimConfig
from .simulation_state import SimulationState

log = logging.getLogger(__name__)


class KeplerSimulation:

	def __init__(
		self,
		particles: Sequence[Particle] | None = None,
		*,
		masses=None,
		positions=None,
		velocities=None,
		dt: float | None = None,
		config: SimConfig | None = None,
	) -> None:
		self.cfg = config.copy() if config is not None else SimConfig()
		if dt is None:
			dt = self.cfg.initial_dt
		self._state = SimulationState(dt=dt)

		if particles is not None or masses is not None:
			ok = self._state.build_state(
				list(particles) if particles is not None else None,
				masses,
				positions,
				velocities,
			)
			if not ok and self.cfg.validate_state:
				raise InvalidStateError("initial state rejected (see log for details)")

		self._integrator = Integrator(self._state, self.cfg)
		self.additional_forces: Callable[["KeplerSimulation"], None] | None = None

	@property
	def state(self) -> SimulationState:
		return self._state

	@property
	def integrator(self) -> Integrator:
		return self._integrator

	@property
	def t(self) -> float:
		return self._state.t

	@t.setter
	def t(self, value: float) -> None:
		self._state.t = float(value)

	@property
	def dt(self) -> float:
		return self._state.dt

	@dt.setter
	def dt(self, value: float) -> None:
		self._state.dt = float(value)

	@property
	def n_particles(self) -> int:
		return self._state.n_particles

	@property
	def particles(self) -> List[ParticleView]:
		return list(self._state)

	def add(self, particle: Particle | None = None, **kwargs) -> ParticleView:
		if particle is None:
			particle = Particle(**kwargs)
		if not self._state.add_particle(particle):
			raise InvalidStateError(f"cannot add {particle!r}")
		return self._state[self._state.n_particles - 1]

	def step(self) -> StepReport:
		self._integrator.part1()
		if self.additional_forces is not None:
			self.additional_forces(self)
		return self._integrator.part2()

	def steps(self, n: int) -> List[StepReport]:
		return [self.step() for _ in range(int(n))]

	def integrate(self, t_end: float) -> List[StepReport]:
		dt = self._state.dt
		if dt == 0.0:
			raise ValueError("dt must be non-zero")
		n = int(math.floor((float(t_end) - self._state.t) / dt + 1e-9))
		if n <= 0:
			return []
		log.debug("integrating %d steps of dt=%r to t=%r", n, dt, t_end)
		return self.steps(n)

	def snapshot(self) -> dict:
		return self._state.snapshot()

	def restore(self, snap: dict) -> None:
		self._state.restore(snap)
