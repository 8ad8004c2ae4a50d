"""
This module evaluates the generalized Stumpff functions c_n(z) used by the universal
variable Kepler solver.

c_n_series sums the defining power series c_n(z) = sum_j (-z)^j / (n+2j)! directly
from a fixed inverse-factorial table, stopping early once a new term no longer changes
the running sum at double precision. stumpff_c (exported as c) keeps that series
well-conditioned for large arguments by applying the four-fold reduction identities:
the orders needed at z/4 are evaluated recursively and recombined into the requested
order, so every series evaluation ends up with an argument of at most 0.5. Even orders
are rebuilt from c4, odd orders from c5. universal_g wraps the result into the Kepler
universal functions G_n(beta, X) = X^n c_n(beta X^2). Order and argument checks raise
the exceptions defined in errors.
"""

from __future__ import annotations
import math
import operator
from typing import Callable, Dict, Tuple

from .errors import StumpffOrderError, StumpffReductionError
from .integrator_constants import IntegratorConstants


_INV_FACT = IntegratorConstants.INV_FACTORIAL
_MAX_TERMS = IntegratorConstants.SERIES_MAX_TERMS
_REL_TOL = IntegratorConstants.SERIES_REL_TOL
_THRESHOLD = IntegratorConstants.REDUCTION_THRESHOLD
_MAX_SERIES_ORDER = IntegratorConstants.MAX_SERIES_ORDER
_MAX_REDUCED_ORDER = IntegratorConstants.MAX_REDUCED_ORDER


def _check_order(n, limit: int) -> int:
	if isinstance(n, bool):
		raise StumpffOrderError(n, limit)
	try:
		k = operator.index(n)
	except TypeError:
		raise StumpffOrderError(n, limit) from None
	if k < 0 or k > limit:
		raise StumpffOrderError(n, limit)
	return k


def c_n_series(n: int, z: float) -> float:
	n = _check_order(n, _MAX_SERIES_ORDER)
	z = float(z)
	c_n = 0.0
	for j in range(_MAX_TERMS):
		term = (-z) ** j * _INV_FACT[n + 2 * j]
		c_n += term
		if c_n != 0.0 and abs(term / c_n) < _REL_TOL:
			break
	return c_n


_Memo = Dict[Tuple[int, float], float]


def _quarter_c4(z: float, depth: int, memo: _Memo) -> float:
	q = z / 4.0
	return _stumpff(3, q, depth, memo) * (1.0 + _stumpff(1, q, depth, memo)) / 8.0


def _quarter_c5(z: float, depth: int, memo: _Memo) -> float:
	q = z / 4.0
	return (
		_stumpff(5, q, depth, memo)
		+ _stumpff(4, q, depth, memo)
		+ _stumpff(3, q, depth, memo) * _stumpff(2, q, depth, memo)
	) / 16.0


def _fourfold_c0(z, depth, memo):
	cn2 = 0.5 - z * _quarter_c4(z, depth, memo)
	return 1.0 - z * cn2


def _fourfold_c1(z, depth, memo):
	cn3 = 1.0 / 6.0 - z * _quarter_c5(z, depth, memo)
	return 1.0 - z * cn3


def _fourfold_c2(z, depth, memo):
	return 0.5 - z * _quarter_c4(z, depth, memo)


def _fourfold_c3(z, depth, memo):
	return 1.0 / 6.0 - z * _quarter_c5(z, depth, memo)


_FOURFOLD: Dict[int, Callable[[float, int, _Memo], float]] = {
	0: _fourfold_c0,
	1: _fourfold_c1,
	2: _fourfold_c2,
	3: _fourfold_c3,
	4: _quarter_c4,
	5: _quarter_c5,
}


def _stumpff(n: int, z: float, depth: int, memo: _Memo) -> float:
	key = (n, z)
	hit = memo.get(key)
	if hit is not None:
		return hit
	if z > _THRESHOLD:
		if n > _MAX_REDUCED_ORDER:
			raise StumpffOrderError(
				n,
				_MAX_REDUCED_ORDER,
				f"Stumpff order {n} has no four-fold reduction (z={z!r} > {_THRESHOLD})",
			)
		if depth <= 0:
			raise StumpffReductionError(f"argument reduction depth exhausted for c{n}(z={z!r})")
		val = _FOURFOLD[n](z, depth - 1, memo)
	else:
		val = c_n_series(n, z)
	memo[key] = val
	return val


def stumpff_c(
	n: int,
	z: float,
	max_depth: int = IntegratorConstants.MAX_REDUCTION_DEPTH,
) -> float:
	n = _check_order(n, _MAX_SERIES_ORDER)
	z = float(z)
	if not math.isfinite(z):
		raise StumpffReductionError(f"non-finite Stumpff argument z={z!r}")
	return _stumpff(n, z, int(max_depth), {})


c = stumpff_c


def universal_g(
	n: int,
	beta: float,
	X: float,
	max_depth: int = IntegratorConstants.MAX_REDUCTION_DEPTH,
) -> float:
	X = float(X)
	return X ** n * stumpff_c(n, beta * X * X, max_depth)


__all__ = ["c_n_series", "stumpff_c", "c", "universal_g"]
