"""
Exception hierarchy for the Kepler drift.

Every failure raised by this package derives from KeplerError. Contract
violations (asking the Stumpff evaluator for an order it does not support,
handing the simulation an invalid initial state) also derive from ValueError
so callers that only care about bad arguments can catch those. Numerical
failures of a single particle's step (degenerate geometry, a universal
anomaly solve that does not converge) carry enough context for the step
driver to collect them per particle and apply its failure policy.
"""

from __future__ import annotations
from typing import Dict, TYPE_CHECKING

if TYPE_CHECKING:
	from .kepler_solver import AnomalySolution


class KeplerError(Exception):
	"""Base class for all keplerdrift errors."""


class StumpffOrderError(KeplerError, ValueError):
	def __init__(self, n, limit: int, message: str | None = None) -> None:
		self.n = n
		self.limit = limit
		super().__init__(message or f"Stumpff order {n!r} outside supported range 0..{limit}")


class StumpffReductionError(KeplerError):
	pass


class DegenerateOrbitError(KeplerError):
	def __init__(self, message: str, *, index: int | None = None) -> None:
		self.index = index
		super().__init__(message)


class KeplerConvergenceError(KeplerError):
	def __init__(self, solution: "AnomalySolution", *, index: int | None = None) -> None:
		self.solution = solution
		self.index = index
		where = f" for particle {index}" if index is not None else ""
		super().__init__(
			f"universal anomaly failed to converge{where} after "
			f"{solution.iterations} iterations ({solution.reason}, X={solution.x!r})"
		)


class InvalidStateError(KeplerError, ValueError):
	pass


class IntegrationAbortedError(KeplerError):
	def __init__(self, failures: Dict[int, KeplerError], t: float) -> None:
		self.failures = dict(failures)
		self.t = t
		idx = ", ".join(str(i) for i in sorted(self.failures))
		super().__init__(f"step at t={t!r} aborted; failed particles: {idx}")


__all__ = [
	"KeplerError",
	"StumpffOrderError",
	"StumpffReductionError",
	"DegenerateOrbitError",
	"KeplerConvergenceError",
	"InvalidStateError",
	"IntegrationAbortedError",
]
