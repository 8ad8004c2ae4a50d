"""
This module generates test-particle systems around a central mass.

The InitialConditionGenerator class draws orbital elements (semi-major axis, either
uniform or log-uniform; eccentricity; inclination; node, argument of pericentre and
true anomaly uniform on the circle) and converts them to states relative to the
central mass with state_from_elements. The GeneratorConfig dataclass encapsulates the
ranges. Methods include generate_single for one system, generate_batch for several,
create_simulation for direct KeplerSimulation instantiation, and validate_system for a
quick summary of a generated system's invariants. Orbiting particles are massless; the
central mass sits at the origin at rest.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Tuple, List, Dict, Optional

from .diagnostics import Diagnostics
from .physics_utils import state_from_elements
from .sim_config import SimConfig
from .simulation import KeplerSimulation




@dataclass
class GeneratorConfig:
	central_mass: float = 1.0
	a_range: Tuple[float, float] = (0.5, 5.0)
	use_log_a: bool = True
	e_range: Tuple[float, float] = (0.0, 0.5)
	max_inclination: float = 0.0
	seed: Optional[int] = None


class InitialConditionGenerator:

	def __init__(self, config: GeneratorConfig | None = None):
		self.config: GeneratorConfig = config or GeneratorConfig()
		if self.config.seed is not None:
			np.random.seed(self.config.seed)


	def _generate_semi_major_axes(self, n: int) -> np.ndarray:
		lo, hi = self.config.a_range
		if self.config.use_log_a:
			return np.exp(np.random.uniform(np.log(lo), np.log(hi), n))
		return np.random.uniform(lo, hi, n)

	def _generate_eccentricities(self, n: int) -> np.ndarray:
		lo, hi = self.config.e_range
		return np.random.uniform(lo, hi, n)

	def generate_single(self, n_particles: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
		n_orb = max(int(n_particles) - 1, 0)
		mu = float(self.config.central_mass)
		a = self._generate_semi_major_axes(n_orb)
		e = self._generate_eccentricities(n_orb)
		inc = np.random.uniform(0.0, self.config.max_inclination, n_orb)
		angles = np.random.uniform(0.0, 2.0 * np.pi, (n_orb, 3))

		m = np.zeros(n_orb + 1)
		m[0] = mu
		p = np.zeros((n_orb + 1, 3))
		v = np.zeros((n_orb + 1, 3))
		for k in range(n_orb):
			Omega, omega, f = angles[k]
			p[k + 1], v[k + 1] = state_from_elements(mu, a[k], e[k], inc[k], Omega, omega, f)
		return m, p, v

	def generate_batch(
		self, n_systems: int, n_particles_range: Tuple[int, int] = (2, 6)
	) -> List[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
		out: list = []
		for _ in range(n_systems):
			n = np.random.randint(n_particles_range[0], n_particles_range[1] + 1)
			out.append(self.generate_single(n))
		return out

	def create_simulation(
		self,
		n_particles: int,
		*,
		dt: float | None = None,
		config: SimConfig | None = None,
	) -> KeplerSimulation:
		m, p, v = self.generate_single(n_particles)
		return KeplerSimulation(masses=m, positions=p, velocities=v, dt=dt, config=config)

	def validate_system(
		self,
		masses: np.ndarray,
		positions: np.ndarray,
		velocities: np.ndarray,
	) -> Dict[str, float]:
		sim = KeplerSimulation(masses=masses, positions=positions, velocities=velocities)
		frame = Diagnostics(sim).to_frame()
		return {
			"n_orbiting": int(len(frame)),
			"n_bound": int((frame["energy"] < 0.0).sum()),
			"min_a": float(frame["a"].min()) if len(frame) else np.nan,
			"max_e": float(frame["e"].max()) if len(frame) else np.nan,
		}
