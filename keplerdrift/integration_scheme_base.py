"""
This abstract base class defines the interface for integration schemes driven once per
simulation tick.

The IntegrationScheme class splits a tick into part1, the point before externally
supplied forces are applied, and part2, the point after them. Both phases default to
doing nothing; a concrete scheme such as KeplerScheme fills in the phase it needs. The
base also provides the StepReport record that part2 hands back: the time reached,
the anomaly iteration count of every advanced particle, and the error of every
particle that could not be advanced. The class assumes the parent integrator holds a valid
SimulationState.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import KeplerError
    from .integrator import Integrator
    from .simulation_state import SimulationState


@dataclass
class StepReport:
	t: float
	iterations: Dict[int, int] = field(default_factory=dict)
	failures: Dict[int, "KeplerError"] = field(default_factory=dict)
	committed: bool = True

	@property
	def ok(self) -> bool:
		return not self.failures


class IntegrationScheme:
	def __init__(self, integrator: "Integrator") -> None:
		self.integ = integrator

	def part1(self) -> None:
		pass

	def part2(self, dt: float) -> tuple["SimulationState", StepReport]:
		raise NotImplementedError
