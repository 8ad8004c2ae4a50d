from __future__ import annotations
import numpy as np
import pandas as pd
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .simulation import KeplerSimulation
    from .simulation_state import SimulationState

"""
This module computes the two-body invariants that a Kepler drift must conserve. specific_energy and specific_angular_momentum evaluate v^2/2 - mu/r and r x v for relative states, and the Diagnostics class applies them to every orbiting particle of a simulation, measured in the frame of particle 0. It also derives the osculating semi-major axis and eccentricity, collects everything into a pandas DataFrame via to_frame, and compares two such frames with relative_drift so long runs can be checked for energy and angular momentum drift. Particles that coincide with the central mass produce non-finite rows rather than errors, since diagnostics must never interrupt a run.

"""


def specific_energy(r: np.ndarray, v: np.ndarray, mu: float) -> np.ndarray:
	r = np.atleast_2d(np.asarray(r, dtype=float))
	v = np.atleast_2d(np.asarray(v, dtype=float))
	rn = np.sqrt(np.einsum("ij,ij->i", r, r))
	v2 = np.einsum("ij,ij->i", v, v)
	with np.errstate(divide="ignore"):
		return 0.5 * v2 - float(mu) / rn


def specific_angular_momentum(r: np.ndarray, v: np.ndarray) -> np.ndarray:
	r = np.atleast_2d(np.asarray(r, dtype=float))
	v = np.atleast_2d(np.asarray(v, dtype=float))
	return np.cross(r, v)


class Diagnostics:

	def __init__(self, simulation: "KeplerSimulation | SimulationState"):
		self._state = getattr(simulation, "state", simulation)

	def _relative(self):
		st = self._state
		return st.pos[1:] - st.pos[0], st.vel[1:] - st.vel[0], st.central_mass

	def energy(self) -> np.ndarray:
		r, v, mu = self._relative()
		return specific_energy(r, v, mu)

	def angular_momentum(self) -> np.ndarray:
		r, v, _ = self._relative()
		return specific_angular_momentum(r, v)

	def semi_major_axis(self) -> np.ndarray:
		_, _, mu = self._relative()
		eps = self.energy()
		with np.errstate(divide="ignore"):
			return -mu / (2.0 * eps)

	def eccentricity(self) -> np.ndarray:
		r, v, mu = self._relative()
		h = specific_angular_momentum(r, v)
		rn = np.sqrt(np.einsum("ij,ij->i", r, r))
		with np.errstate(divide="ignore", invalid="ignore"):
			e_vec = np.cross(v, h) / mu - r / rn[:, None]
		return np.sqrt(np.einsum("ij,ij->i", e_vec, e_vec))

	def to_frame(self) -> pd.DataFrame:
		n = self._state.n_particles
		if n < 2:
			return pd.DataFrame(columns=["particle", "t", "energy", "h", "a", "e"])
		h = self.angular_momentum()
		return pd.DataFrame({
			"particle": np.arange(1, n),
			"t": np.full(n - 1, float(self._state.t)),
			"energy": self.energy(),
			"h": np.sqrt(np.einsum("ij,ij->i", h, h)),
			"a": self.semi_major_axis(),
			"e": self.eccentricity(),
		})

	@staticmethod
	def relative_drift(reference: pd.DataFrame, current: pd.DataFrame) -> pd.DataFrame:
		ref = reference.set_index("particle")
		cur = current.set_index("particle")
		cols = ["energy", "h"]
		drift = (cur[cols] - ref[cols]).abs() / ref[cols].abs()
		return drift.rename(columns={"energy": "energy_drift", "h": "h_drift"}).reset_index()
