"""
This initialization file serves as the main entry point for the keplerdrift package,
exposing all public APIs through a clean namespace.

It imports and re-exports the Stumpff function evaluators (c_n_series, stumpff_c and
its alias c, universal_g), the universal variable solver (UniversalVariableKeplerSolver,
OrbitalScalars, AnomalySolution, kepler_step), the particle and state classes
(Particle, ParticleView, SimulationState, SimulationValidator), the step driver
(IntegrationScheme, KeplerScheme, Integrator, StepReport, KeplerSimulation), the
configuration (SimConfig, IntegratorConstants), the exception hierarchy, orbit helpers,
diagnostics and the initial condition generator, so any major component can be
imported directly from the package root.
"""

from .sim_config import SimConfig
from .integrator_constants import IntegratorConstants
from .errors import (
    KeplerError,
    StumpffOrderError,
    StumpffReductionError,
    DegenerateOrbitError,
    KeplerConvergenceError,
    InvalidStateError,
    IntegrationAbortedError,
)

from .stumpff import c_n_series, stumpff_c, c, universal_g
from .kepler_solver import (
    OrbitalScalars,
    AnomalySolution,
    UniversalVariableKeplerSolver,
    kepler_step,
)

from .body import Particle
from .body_view import ParticleView
from .simulation_validator import SimulationValidator
from .simulation_state import SimulationState
from .integration_scheme_base import IntegrationScheme, StepReport
from .kepler_scheme import KeplerScheme
from .integrator import Integrator
from .simulation import KeplerSimulation

from .physics_utils import (
    to_central_frame,
    circular_speed,
    orbital_period,
    state_from_elements,
)
from .diagnostics import Diagnostics, specific_energy, specific_angular_momentum
from .initial_condition_generator import (
    InitialConditionGenerator,
    GeneratorConfig,
)


__all__ = [
    "SimConfig",
    "IntegratorConstants",
    "KeplerError",
    "StumpffOrderError",
    "StumpffReductionError",
    "DegenerateOrbitError",
    "KeplerConvergenceError",
    "InvalidStateError",
    "IntegrationAbortedError",
    "c_n_series",
    "stumpff_c",
    "c",
    "universal_g",
    "OrbitalScalars",
    "AnomalySolution",
    "UniversalVariableKeplerSolver",
    "kepler_step",
    "Particle",
    "ParticleView",
    "SimulationValidator",
    "SimulationState",
    "IntegrationScheme",
    "StepReport",
    "KeplerScheme",
    "Integrator",
    "KeplerSimulation",
    "to_central_frame",
    "circular_speed",
    "orbital_period",
    "state_from_elements",
    "Diagnostics",
    "specific_energy",
    "specific_angular_momentum",
    "InitialConditionGenerator",
    "GeneratorConfig",
]
