"""
Pytest fixtures for the keplerdrift test suite.
"""

import numpy as np
import pytest

from keplerdrift import KeplerSimulation, Particle, SimConfig, UniversalVariableKeplerSolver


@pytest.fixture
def solver():
    return UniversalVariableKeplerSolver()


@pytest.fixture
def circular_state():
    """Unit circular orbit about M=1: beta=1, eta=0, zeta=0."""
    return np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0]), 1.0


@pytest.fixture
def eccentric_state():
    """Bound orbit with e ~ 0.44 and a ~ 1.79 about M=1."""
    return np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.2, 0.0]), 1.0


@pytest.fixture
def three_body_sim():
    """Central mass plus two orbiting test particles."""
    return KeplerSimulation(
        [
            Particle(mass=1.0),
            Particle(x=1.0, vy=1.0),
            Particle(x=-2.0, vy=-0.8, vz=0.1),
        ],
        dt=0.01,
    )


@pytest.fixture
def skip_config():
    return SimConfig(failure_policy="skip")
