"""
Tests for invariants, orbit helpers and the test-particle generator.
"""

import math

import numpy as np
import pandas as pd
import pytest

from keplerdrift import (
    Diagnostics,
    GeneratorConfig,
    InitialConditionGenerator,
    circular_speed,
    orbital_period,
    specific_energy,
    state_from_elements,
    to_central_frame,
)


class TestDiagnostics:

    def test_circular_invariants(self, three_body_sim):
        diag = Diagnostics(three_body_sim)
        assert diag.energy()[0] == pytest.approx(-0.5)
        assert np.linalg.norm(diag.angular_momentum()[0]) == pytest.approx(1.0)
        assert diag.semi_major_axis()[0] == pytest.approx(1.0)
        assert diag.eccentricity()[0] == pytest.approx(0.0, abs=1e-15)

    def test_frame(self, three_body_sim):
        frame = Diagnostics(three_body_sim).to_frame()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ["particle", "t", "energy", "h", "a", "e"]
        assert list(frame["particle"]) == [1, 2]
        assert (frame["t"] == 0.0).all()

    def test_drift_over_run(self, three_body_sim):
        ref = Diagnostics(three_body_sim).to_frame()
        three_body_sim.steps(1000)
        cur = Diagnostics(three_body_sim.state).to_frame()
        drift = Diagnostics.relative_drift(ref, cur)
        assert (drift["energy_drift"] < 1e-10).all()
        assert (drift["h_drift"] < 1e-10).all()

    def test_generated_system_conserves(self):
        gen = InitialConditionGenerator(GeneratorConfig(seed=3, max_inclination=0.5))
        sim = gen.create_simulation(5, dt=0.01)
        ref = Diagnostics(sim).to_frame()
        sim.steps(300)
        drift = Diagnostics.relative_drift(ref, Diagnostics(sim).to_frame())
        assert (drift[["energy_drift", "h_drift"]] < 1e-10).all().all()


class TestOrbitHelpers:

    def test_circular_from_elements(self):
        r, v = state_from_elements(1.0, 2.0, 0.0)
        assert np.linalg.norm(r) == pytest.approx(2.0)
        assert np.linalg.norm(v) == pytest.approx(circular_speed(1.0, 2.0))
        assert float(np.dot(r, v)) == pytest.approx(0.0, abs=1e-15)

    def test_pericentre(self):
        r, _ = state_from_elements(1.0, 1.0, 0.3)
        assert np.linalg.norm(r) == pytest.approx(0.7)

    def test_hyperbola(self):
        r, v = state_from_elements(1.0, -1.0, 2.0)
        assert np.linalg.norm(r) == pytest.approx(1.0)
        assert float(specific_energy(r, v, 1.0)[0]) == pytest.approx(0.5)

    def test_parabola_rejected(self):
        with pytest.raises(ValueError):
            state_from_elements(1.0, 1.0, 1.0)

    def test_period(self):
        assert orbital_period(1.0, 1.0) == pytest.approx(2.0 * math.pi)
        assert orbital_period(1.0, -1.0) == math.inf

    def test_central_frame(self):
        pos = np.array([[1.0, 1.0, 1.0], [2.0, 1.0, 1.0]])
        vel = np.array([[0.5, 0.0, 0.0], [0.5, 1.0, 0.0]])
        rp, rv = to_central_frame(pos, vel)
        assert np.array_equal(rp[0], [0.0, 0.0, 0.0])
        assert np.array_equal(rp[1], [1.0, 0.0, 0.0])
        assert np.array_equal(rv[1], [0.0, 1.0, 0.0])


class TestGenerator:

    def test_generate_single(self):
        gen = InitialConditionGenerator(GeneratorConfig(seed=1, central_mass=2.0))
        m, p, v = gen.generate_single(4)
        assert m.shape == (4,) and p.shape == (4, 3) and v.shape == (4, 3)
        assert m[0] == 2.0 and (m[1:] == 0.0).all()
        assert np.array_equal(p[0], np.zeros(3))

    def test_validate_system(self):
        gen = InitialConditionGenerator(GeneratorConfig(seed=2))
        summary = gen.validate_system(*gen.generate_single(6))
        assert summary["n_orbiting"] == 5
        assert summary["n_bound"] == 5
        assert summary["max_e"] < 0.5 + 1e-9

    def test_batch(self):
        gen = InitialConditionGenerator(GeneratorConfig(seed=4))
        batch = gen.generate_batch(3, (2, 4))
        assert len(batch) == 3
        assert all(2 <= len(m) <= 4 for m, _, _ in batch)
