from __future__ import annotations
from dataclasses import dataclass

"""
This central configuration module defines all simulation parameters through the SimConfig dataclass. Key parameters include the global timestep, the iteration cap and relative tolerance of the universal-anomaly solver, the depth limit of the Stumpff argument reduction, the anomaly update rule, and the per-particle failure policy applied by the step driver. Three fields (force_is_velocity_dependent, integrator_epsilon, integrator_min_dt) exist only for interface compatibility with sibling integration schemes and have no effect on the Kepler drift. The class provides a copy method for configuration inheritance and validates choice fields against allowed options.

"""
_ALLOWED_POLICIES = {
    "abort",
    "skip",
}

_ALLOWED_UPDATES = {
    "newton",
    "householder",
}

@dataclass
class SimConfig:
    initial_dt: float = 0.01
    max_newton_iterations: int = 100
    newton_tolerance: float = 1e-15
    anomaly_update: str = "newton"
    max_reduction_depth: int = 30
    failure_policy: str = "abort"
    validate_state: bool = True
    force_is_velocity_dependent: bool = True
    integrator_epsilon: float = 0.0
    integrator_min_dt: float = 0.0

    def __post_init__(self) -> None:
        if self.failure_policy not in _ALLOWED_POLICIES:
            raise ValueError(
                f"failure_policy must be one of {sorted(_ALLOWED_POLICIES)}, got {self.failure_policy!r}"
            )
        if self.anomaly_update not in _ALLOWED_UPDATES:
            raise ValueError(
                f"anomaly_update must be one of {sorted(_ALLOWED_UPDATES)}, got {self.anomaly_update!r}"
            )
        if int(self.max_newton_iterations) < 1:
            raise ValueError("max_newton_iterations must be at least 1")
        if int(self.max_reduction_depth) < 0:
            raise ValueError("max_reduction_depth must be non-negative")

    def copy(self) -> "SimConfig":
        new = object.__new__(SimConfig)
        new.__dict__ = dict(getattr(self, "__dict__", {}))
        return new
