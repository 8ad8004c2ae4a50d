from __future__ import annotations

import math

from .sim_config import SimConfig

"""
This module centralizes numerical constants and configuration defaults for the Kepler drift. The IntegratorConstants class holds the inverse-factorial lookup table used by the Stumpff series, the series term cap and early-exit threshold, the argument threshold above which the four-fold reduction is applied, the supported Stumpff orders, and solver defaults sourced from SimConfig. The table covers 0! through 34!, which together with the 13-term cap bounds the orders the series evaluator may be asked for.


"""


def _inverse_factorials(count: int) -> tuple:
    return tuple(1.0 / float(math.factorial(k)) for k in range(count))


class IntegratorConstants:
    _cfg = SimConfig()

    INV_FACTORIAL = _inverse_factorials(35)

    SERIES_MAX_TERMS   = 13
    SERIES_REL_TOL     = 1.0e-17
    REDUCTION_THRESHOLD = 0.5

    MAX_SERIES_ORDER   = 8
    MAX_REDUCED_ORDER  = 5

    MAX_NEWTON_ITERATIONS = int(getattr(_cfg, "max_newton_iterations", 100))
    NEWTON_TOLERANCE      = float(getattr(_cfg, "newton_tolerance", 1.0e-15))
    MAX_REDUCTION_DEPTH   = int(getattr(_cfg, "max_reduction_depth", 30))


__all__ = ["IntegratorConstants"]
