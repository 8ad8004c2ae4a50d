"""
This module implements Kepler's equation solver using Stiefel-Scheifele universal
variables.

The UniversalVariableKeplerSolver class advances a particle's position and velocity
relative to a fixed central mass by one timestep. It reduces the relative state to the
orbital scalars r0, v2, beta, eta and zeta, solves r0 X + eta G2 + zeta G3 = dt for the
universal anomaly X by a bounded Newton (or optional Householder) iteration started at
X = 0, and applies the Gauss f and g functions built from the converged G1..G3. The
same formulation covers elliptic, parabolic and hyperbolic orbits. The solve never
loops without bound: it returns an AnomalySolution that records whether it converged,
and the step methods turn a failed solve into KeplerConvergenceError. Degenerate
geometry (a particle sitting on the central mass, non-finite state) raises
DegenerateOrbitError. kepler_step applies the propagation in place to one particle of
a SimulationState, in the frame of particle 0.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

import numpy as np

from .errors import (
	DegenerateOrbitError,
	KeplerConvergenceError,
	StumpffReductionError,
)
from .integrator_constants import IntegratorConstants
from .stumpff import universal_g

if TYPE_CHECKING:
	from .sim_config import SimConfig
	from .simulation_state import SimulationState

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitalScalars:
	r0: float
	v2: float
	beta: float
	eta: float
	zeta: float
	mu: float


@dataclass(frozen=True)
class AnomalySolution:
	x: float
	iterations: int
	converged: bool
	reason: str = "converged"


def _as_vec3(a, name: str) -> np.ndarray:
	arr = np.asarray(a, dtype=float)
	if arr.shape != (3,):
		raise ValueError(f"{name} must have shape (3,), got {arr.shape}")
	return arr


class UniversalVariableKeplerSolver:
	def __init__(
		self,
		max_iterations: int = IntegratorConstants.MAX_NEWTON_ITERATIONS,
		tolerance: float = IntegratorConstants.NEWTON_TOLERANCE,
		update: str = "newton",
		max_reduction_depth: int = IntegratorConstants.MAX_REDUCTION_DEPTH,
	) -> None:
		if update not in ("newton", "householder"):
			raise ValueError(f"unknown anomaly update {update!r}")
		self.max_iterations = int(max_iterations)
		self.tolerance = float(tolerance)
		self.update = update
		self.max_reduction_depth = int(max_reduction_depth)

	@classmethod
	def from_config(cls, cfg: "SimConfig") -> "UniversalVariableKeplerSolver":
		return cls(
			max_iterations=cfg.max_newton_iterations,
			tolerance=cfg.newton_tolerance,
			update=cfg.anomaly_update,
			max_reduction_depth=cfg.max_reduction_depth,
		)

	def _g(self, n: int, beta: float, X: float) -> float:
		return universal_g(n, beta, X, self.max_reduction_depth)

	def scalars(self, r, v, mu: float) -> OrbitalScalars:
		r = _as_vec3(r, "r")
		v = _as_vec3(v, "v")
		mu = float(mu)
		if not (np.all(np.isfinite(r)) and np.all(np.isfinite(v)) and math.isfinite(mu)):
			raise DegenerateOrbitError("non-finite state or central mass")
		x, y, z = float(r[0]), float(r[1]), float(r[2])
		vx, vy, vz = float(v[0]), float(v[1]), float(v[2])

		r0 = math.sqrt(x * x + y * y + z * z)
		if r0 == 0.0:
			raise DegenerateOrbitError("particle coincides with the central mass (r0 = 0)")
		v2 = vx * vx + vy * vy + vz * vz
		beta = 2.0 * mu / r0 - v2
		eta = x * vx + y * vy + z * vz
		zeta = mu - beta * r0
		return OrbitalScalars(r0=r0, v2=v2, beta=beta, eta=eta, zeta=zeta, mu=mu)

	def solve(self, sc: OrbitalScalars, dt: float) -> AnomalySolution:
		dt = float(dt)
		r0, eta, zeta, beta = sc.r0, sc.eta, sc.zeta, sc.beta
		householder = self.update == "householder"

		X = 0.0
		for it in range(1, self.max_iterations + 1):
			if not math.isfinite(beta * X * X):
				log.debug("anomaly solve overflowed the Stumpff argument at X=%r", X)
				return AnomalySolution(X, it, False, "non_finite")
			try:
				G1 = self._g(1, beta, X)
				G2 = self._g(2, beta, X)
				G3 = self._g(3, beta, X)
				G0 = self._g(0, beta, X) if householder else 0.0
			except StumpffReductionError:
				log.debug("anomaly solve left the reducible range at X=%r", X)
				return AnomalySolution(X, it, False, "reduction_depth")

			s = r0 * X + eta * G2 + zeta * G3 - dt
			sp = r0 + eta * G1 + zeta * G2
			if householder:
				spp = eta * G0 + zeta * G1
				den = sp * sp - 0.5 * s * spp
			else:
				den = sp
			if den == 0.0:
				return AnomalySolution(X, it, False, "zero_derivative")
			if householder:
				dX = -(s * sp) / den
			else:
				dX = -s / den

			X += dX
			if not (math.isfinite(X) and math.isfinite(dX)):
				return AnomalySolution(X, it, False, "non_finite")
			if dX == 0.0 or (X != 0.0 and abs(dX / X) < self.tolerance):
				return AnomalySolution(X, it, True)

		log.debug("anomaly solve hit the iteration cap (%d), X=%r", self.max_iterations, X)
		return AnomalySolution(X, self.max_iterations, False, "max_iterations")

	def _gauss_fg(
		self,
		r: np.ndarray,
		v: np.ndarray,
		sc: OrbitalScalars,
		X: float,
		dt: float,
	) -> Tuple[np.ndarray, np.ndarray]:
		M = sc.mu
		G1 = self._g(1, sc.beta, X)
		G2 = self._g(2, sc.beta, X)
		G3 = self._g(3, sc.beta, X)

		rn = sc.r0 + sc.eta * G1 + sc.zeta * G2
		if rn == 0.0 or not math.isfinite(rn):
			raise DegenerateOrbitError(f"propagated radius is degenerate (r={rn!r})")
		f = 1.0 - M * G2 / sc.r0
		g = dt - M * G3
		fd = -M * G1 / (sc.r0 * rn)
		gd = 1.0 - M * G2 / rn

		r_new = f * r + g * v
		# fd multiplies the pre-step position
		v_new = fd * r + gd * v
		return r_new, v_new

	def advance(self, r, v, mu: float, dt: float):
		r = _as_vec3(r, "r")
		v = _as_vec3(v, "v")
		dt = float(dt)
		sc = self.scalars(r, v, mu)
		sol = self.solve(sc, dt)
		if not sol.converged:
			raise KeplerConvergenceError(sol)
		r_new, v_new = self._gauss_fg(r, v, sc, sol.x, dt)
		return r_new, v_new, sol

	def step(self, r, v, mu: float, dt: float) -> Tuple[np.ndarray, np.ndarray]:
		r_new, v_new, _ = self.advance(r, v, mu, dt)
		return r_new, v_new

	def propagate(self, r, v, mu, dt):
		r = np.asarray(r, dtype=float)
		v = np.asarray(v, dtype=float)
		mu = float(mu)
		dt = float(dt)
		if r.ndim == 1:
			return self.step(r, v, mu, dt)
		out_r = []
		out_v = []
		for ri, vi in zip(r, v):
			rn, vn = self.step(ri, vi, mu, dt)
			out_r.append(rn)
			out_v.append(vn)
		return np.array(out_r), np.array(out_v)


def kepler_step(
	state: "SimulationState",
	i: int,
	solver: UniversalVariableKeplerSolver | None = None,
) -> AnomalySolution:
	i = int(i)
	if i == 0:
		raise ValueError("particle 0 is the central mass and is never advanced")
	if not 0 < i < state.n_particles:
		raise IndexError(f"particle index {i} out of range for {state.n_particles} particles")
	if solver is None:
		solver = UniversalVariableKeplerSolver()

	M = float(state.mass[0])
	c_pos = state.pos[0]
	c_vel = state.vel[0]
	r = state.pos[i] - c_pos
	v = state.vel[i] - c_vel
	try:
		r_new, v_new, sol = solver.advance(r, v, M, state.dt)
	except DegenerateOrbitError as exc:
		raise DegenerateOrbitError(f"particle {i}: {exc}", index=i) from None
	except KeplerConvergenceError as exc:
		raise KeplerConvergenceError(exc.solution, index=i) from None

	state.pos[i] = c_pos + r_new
	state.vel[i] = c_vel + v_new
	return sol


__all__ = [
	"OrbitalScalars",
	"AnomalySolution",
	"UniversalVariableKeplerSolver",
	"kepler_step",
]
