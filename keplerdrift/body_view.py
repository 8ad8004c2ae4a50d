"""
This module implements ParticleView, a proxy class providing Particle-like access to
individual particles stored in the simulation state's numpy arrays.

The class uses properties with getters and setters to map attribute access (mass, x, y,
z, vx, vy, vz) directly to the appropriate array indices in the parent state, so a
Kepler step applied to the arrays is immediately visible through the view and edits
made through the view are seen by the next step. The view assumes the parent state
keeps valid array structures and that the particle index remains within bounds.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .simulation_state import SimulationState




def _component(array_name: str, col: int) -> property:
	def getter(self) -> float:
		return float(getattr(self._state, array_name)[self._i, col])

	def setter(self, v: float) -> None:
		getattr(self._state, array_name)[self._i, col] = float(v)

	return property(getter, setter)


class ParticleView:
	__slots__ = ("_state", "_i")

	def __init__(self, state: "SimulationState", idx: int) -> None:
		self._state = state
		self._i = int(idx)

	@property
	def index(self) -> int:
		return self._i

	@property
	def mass(self) -> float:
		return float(self._state.mass[self._i])
	@mass.setter
	def mass(self, v: float) -> None:
		self._state.mass[self._i] = float(v)

	x = _component("pos", 0)
	y = _component("pos", 1)
	z = _component("pos", 2)
	vx = _component("vel", 0)
	vy = _component("vel", 1)
	vz = _component("vel", 2)

	@property
	def position(self) -> np.ndarray:
		return self._state.pos[self._i].copy()

	@property
	def velocity(self) -> np.ndarray:
		return self._state.vel[self._i].copy()

	def __repr__(self) -> str:
		return (f"Particle(mass={self.mass}, x={self.x}, y={self.y}, z={self.z}, "
				f"vx={self.vx}, vy={self.vy}, vz={self.vz})")
