"""
This module manages the internal state representation for central-mass simulations.

The SimulationState class maintains numpy arrays for masses, positions and velocities
together with the global time t and timestep dt. Row 0 is the central mass; every other
row is a particle orbiting it. It provides property accessors with shape validation,
indexable ParticleView access, state initialization from Particle lists or raw arrays,
appending single particles, and snapshot/restore of the complete state including the
clock. The state is owned by the simulation driver; the Kepler step borrows it to
mutate one non-central row at a time.
"""

from __future__ import annotations
import logging
import numpy as np
from typing import Iterator, List, Sequence, TYPE_CHECKING

from .body_view import ParticleView
from .simulation_validator import SimulationValidator

if TYPE_CHECKING:
    from .body import Particle

log = logging.getLogger(__name__)



class SimulationState:

	def __init__(self, dt: float = 0.01, t: float = 0.0):
		self.n_particles: int = 0
		self.t: float = float(t)
		self.dt: float = float(dt)
		self._mass: np.ndarray = np.empty(0, dtype=np.float64)
		self._pos: np.ndarray = np.empty((0, 3), dtype=np.float64)
		self._vel: np.ndarray = np.empty((0, 3), dtype=np.float64)

	@property
	def pos(self) -> np.ndarray:
		return self._pos

	@property
	def vel(self) -> np.ndarray:
		return self._vel

	@property
	def mass(self) -> np.ndarray:
		return self._mass

	@property
	def central_mass(self) -> float:
		if self.n_particles == 0:
			return 0.0
		return float(self._mass[0])


	@pos.setter
	def pos(self, value: np.ndarray) -> None:
		arr = np.asarray(value, dtype=np.float64)
		if arr.ndim == 1:
			arr = arr.reshape(-1, 3)
		if arr.shape != self._pos.shape:
			raise ValueError(f"shape mismatch when assigning to pos: "
							 f"expected {self._pos.shape}, got {arr.shape}")
		self._pos[...] = arr

	@vel.setter
	def vel(self, value: np.ndarray) -> None:
		arr = np.asarray(value, dtype=np.float64)
		if arr.ndim == 1:
			arr = arr.reshape(-1, 3)
		if arr.shape != self._vel.shape:
			raise ValueError(f"shape mismatch when assigning to vel: "
							 f"expected {self._vel.shape}, got {arr.shape}")
		self._vel[...] = arr

	@mass.setter
	def mass(self, value: np.ndarray) -> None:
		arr = np.asarray(value, dtype=np.float64).ravel()
		if arr.shape != self._mass.shape:
			raise ValueError(f"shape mismatch when assigning to mass: "
							 f"expected {self._mass.shape}, got {arr.shape}")
		self._mass[...] = arr

	def __len__(self) -> int:
		return self.n_particles

	def __getitem__(self, i: int) -> ParticleView:
		i = int(i)
		if i < 0:
			i += self.n_particles
		if not 0 <= i < self.n_particles:
			raise IndexError(f"particle index {i} out of range")
		return ParticleView(self, i)

	def __iter__(self) -> Iterator[ParticleView]:
		for i in range(self.n_particles):
			yield ParticleView(self, i)

	def build_state(
		self,
		particles: List["Particle"] | None = None,
		masses: Sequence[float] | None = None,
		positions=None,
		velocities=None,
	) -> bool:
		if particles is None:
			if masses is None or positions is None:
				return False

			masses = list(masses)
			positions = list(positions)
			if velocities is None:
				velocities = [(0.0, 0.0, 0.0)] * len(masses)
			else:
				velocities = list(velocities)

			if len(positions) != len(masses) or len(velocities) != len(masses):
				return False

			mass = np.asarray(masses, dtype=np.float64)
			pos = np.asarray(positions, dtype=np.float64)
			vel = np.asarray(velocities, dtype=np.float64)
		else:
			mass = np.array([p.mass for p in particles], dtype=np.float64)
			pos = np.array([p.position for p in particles], dtype=np.float64).reshape(-1, 3)
			vel = np.array([p.velocity for p in particles], dtype=np.float64).reshape(-1, 3)

		if not SimulationValidator.state_is_valid(mass, pos, vel):
			SimulationValidator.report_invalid_state("build_state", mass, pos, vel)
			return False

		self.n_particles = int(mass.size)
		self._mass = mass.copy()
		self._pos = pos.reshape(-1, 3).copy()
		self._vel = vel.reshape(-1, 3).copy()
		return True

	def add_particle(self, particle: "Particle") -> bool:
		mass = np.append(self._mass, particle.mass)
		pos = np.vstack([self._pos, np.asarray(particle.position, dtype=np.float64)])
		vel = np.vstack([self._vel, np.asarray(particle.velocity, dtype=np.float64)])
		if not SimulationValidator.state_is_valid(mass, pos, vel):
			SimulationValidator.report_invalid_state("add_particle", mass, pos, vel)
			return False
		self._mass = mass
		self._pos = pos
		self._vel = vel
		self.n_particles = int(mass.size)
		return True

	def snapshot(self) -> dict:
		return {
			"t": self.t,
			"dt": self.dt,
			"masses": self._mass.copy(),
			"positions": self._pos.copy(),
			"velocities": self._vel.copy(),
		}

	def restore(self, snap: dict) -> None:
		self._mass = np.asarray(snap["masses"], dtype=np.float64).copy()
		self._pos = np.asarray(snap["positions"], dtype=np.float64).reshape(-1, 3).copy()
		self._vel = np.asarray(snap["velocities"], dtype=np.float64).reshape(-1, 3).copy()
		self.n_particles = int(self._mass.size)
		self.t = float(snap.get("t", self.t))
		self.dt = float(snap.get("dt", self.dt))
		log.debug("restored state with %d particles at t=%r", self.n_particles, self.t)
