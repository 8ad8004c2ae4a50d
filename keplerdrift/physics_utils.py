import math
import numpy as np
from typing import Tuple

"""
This module provides orbit helpers for central-mass systems. to_central_frame shifts positions and velocities so that particle 0 sits at the origin at rest, the frame the Kepler step works in. circular_speed and orbital_period give the circular velocity and Keplerian period for a gravitational parameter, and state_from_elements builds a relative position and velocity from semi-major axis, eccentricity, inclination, node, argument of pericentre and true anomaly (bound and unbound orbits; a is negative for hyperbolae). All functions assume G = 1, so the central mass is the gravitational parameter.


"""

def to_central_frame(
	positions: np.ndarray, velocities: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
	pos = np.asarray(positions, dtype=float)
	vel = np.asarray(velocities, dtype=float)
	if pos.shape[0] == 0:
		return pos.copy(), vel.copy()
	return pos - pos[0], vel - vel[0]


def circular_speed(mu: float, r: float) -> float:
	return math.sqrt(float(mu) / float(r))


def orbital_period(mu: float, a: float) -> float:
	a = float(a)
	if a <= 0.0:
		return math.inf
	return 2.0 * math.pi * math.sqrt(a * a * a / float(mu))


def state_from_elements(
	mu: float,
	a: float,
	e: float,
	inc: float = 0.0,
	Omega: float = 0.0,
	omega: float = 0.0,
	f: float = 0.0,
) -> Tuple[np.ndarray, np.ndarray]:
	mu = float(mu)
	if e == 1.0:
		raise ValueError("parabolic orbits need a pericentre distance, not a semi-major axis")
	p = a * (1.0 - e * e)
	if p <= 0.0:
		raise ValueError(f"semi-latus rectum must be positive (a={a}, e={e})")
	r = p / (1.0 + e * math.cos(f))
	if r <= 0.0:
		raise ValueError(f"true anomaly {f} is outside the hyperbola's asymptotes")

	r_pf = np.array([r * math.cos(f), r * math.sin(f), 0.0])
	h = math.sqrt(mu / p)
	v_pf = np.array([-h * math.sin(f), h * (e + math.cos(f)), 0.0])

	cO, sO = math.cos(Omega), math.sin(Omega)
	ci, si = math.cos(inc), math.sin(inc)
	cw, sw = math.cos(omega), math.sin(omega)
	rot = np.array([
		[cO * cw - sO * sw * ci, -cO * sw - sO * cw * ci, sO * si],
		[sO * cw + cO * sw * ci, -sO * sw + cO * cw * ci, -cO * si],
		[sw * si, cw * si, ci],
	])
	return rot @ r_pf, rot @ v_pf
