"""
This module provides validation utilities for central-mass simulation states.

The SimulationValidator class offers static methods to check state validity (a
positive finite central mass, non-negative finite masses for the orbiting particles,
finite three-dimensional positions and velocities of matching shape, no particle
sitting on the central mass) and to report detailed diagnostics for invalid states
through the module logger. The validation runs when a SimulationState is built, before
any Kepler step can hit a degenerate orbit.
"""

from __future__ import annotations
import logging
import math
from typing import Sequence, Tuple
import numpy as np

log = logging.getLogger(__name__)



Vec3 = Tuple[float, float, float]


class SimulationValidator:
	@staticmethod
	def state_is_valid(
		masses: Sequence[float],
		positions: Sequence[Vec3],
		velocities: Sequence[Vec3],
	) -> bool:

		if masses is None or positions is None or velocities is None:
			return False

		m = np.asarray(masses, dtype=float).ravel()
		r = np.asarray(positions, dtype=float)
		v = np.asarray(velocities, dtype=float)

		if r.ndim != 2 or v.ndim != 2 or r.shape != v.shape:
			return False
		if r.shape[0] != m.size or r.shape[1] != 3:
			return False
		if m.size == 0:
			return False

		if not (m[0] > 0.0 and math.isfinite(m[0])):
			return False
		for m_i in m[1:]:
			if not (m_i >= 0.0 and math.isfinite(m_i)):
				return False

		if not np.all(np.isfinite(r)) or not np.all(np.isfinite(v)):
			return False

		rel = r[1:] - r[0]
		if rel.size and np.any(np.einsum("ij,ij->i", rel, rel) == 0.0):
			return False

		return True

	@staticmethod
	def report_invalid_state(
		label: str,
		masses=None,
		positions=None,
		velocities=None,
	) -> None:

		log.warning("[invalid] %s", label)
		if masses is not None:
			m = np.asarray(masses, dtype=float).ravel()
			log.warning("masses %s", m)
			if m.size and not (m[0] > 0.0 and math.isfinite(m[0])):
				log.warning("  central mass %r must be positive and finite", m[0])
		if positions is not None:
			r = np.asarray(positions, dtype=float)
			log.warning("positions %s", r)
			if r.ndim == 2 and r.shape[1] != 3:
				log.warning("  positions have %d dimensions (expected 3)", r.shape[1])
			elif r.ndim == 2 and r.shape[0] > 1:
				rel = r[1:] - r[0]
				for i in np.flatnonzero(np.einsum("ij,ij->i", rel, rel) == 0.0):
					log.warning("  particle %d coincides with the central mass", i + 1)
		if velocities is not None:
			v = np.asarray(velocities, dtype=float)
			log.warning("velocities %s", v)
			if v.ndim == 2 and v.shape[1] != 3:
				log.warning("  velocities have %d dimensions (expected 3)", v.shape[1])
