"""
Tests for the step driver: part1/part2 ordering, the clock barrier, the
additional-forces hook, failure policies and state management.
"""

import logging
import math

import numpy as np
import pytest

from keplerdrift import (
    IntegrationAbortedError,
    InvalidStateError,
    KeplerConvergenceError,
    KeplerSimulation,
    Particle,
    ParticleView,
    SimConfig,
)


class TestStep:

    def test_single_step(self, three_body_sim):
        sim = three_body_sim
        report = sim.step()
        assert report.ok
        assert report.committed
        assert sim.t == 0.01
        assert report.t == sim.t
        assert set(report.iterations) == {1, 2}
        p1 = sim.particles[1]
        assert p1.x == pytest.approx(math.cos(0.01), abs=1e-14)
        assert p1.y == pytest.approx(math.sin(0.01), abs=1e-14)

    def test_central_particle_untouched(self, three_body_sim):
        sim = three_body_sim
        before = sim.snapshot()
        sim.steps(20)
        assert np.array_equal(sim.state.pos[0], before["positions"][0])
        assert np.array_equal(sim.state.vel[0], before["velocities"][0])

    def test_time_advances_once_per_step(self, three_body_sim):
        reports = three_body_sim.steps(10)
        assert len(reports) == 10
        assert three_body_sim.t == pytest.approx(0.1)
        assert [r.t for r in reports] == sorted(r.t for r in reports)

    def test_central_only(self):
        sim = KeplerSimulation([Particle(mass=2.0)], dt=0.5)
        report = sim.step()
        assert report.ok and report.iterations == {}
        assert sim.t == 0.5

    def test_full_orbit_through_driver(self):
        sim = KeplerSimulation([Particle(mass=1.0), Particle(x=1.0, vy=1.0)], dt=2.0 * math.pi / 1000)
        sim.steps(1000)
        p = sim.particles[1]
        assert abs(p.x - 1.0) < 1e-8 and abs(p.y) < 1e-8
        assert abs(p.vx) < 1e-8 and abs(p.vy - 1.0) < 1e-8

    def test_integrate_to_time(self, three_body_sim):
        reports = three_body_sim.integrate(1.0)
        assert len(reports) == 100
        assert three_body_sim.t == pytest.approx(1.0)
        assert three_body_sim.integrate(0.5) == []


class TestAdditionalForces:

    def test_hook_runs_before_drift(self, three_body_sim):
        seen = []

        def hook(sim):
            seen.append((sim.t, sim.particles[1].x))

        three_body_sim.additional_forces = hook
        three_body_sim.step()
        assert seen == [(0.0, 1.0)]

    def test_hook_changes_feed_the_drift(self, three_body_sim):
        def stop_particle(sim):
            p = sim.particles[1]
            p.vx = p.vy = p.vz = 0.0

        three_body_sim.additional_forces = stop_particle
        three_body_sim.step()
        p = three_body_sim.particles[1]
        assert p.x < 1.0
        assert p.y == 0.0
        assert p.vx < 0.0


class TestFailurePolicy:

    @staticmethod
    def _break_particle(sim, i):
        p = sim.particles[i]
        p.x, p.y, p.z = sim.particles[0].x, sim.particles[0].y, sim.particles[0].z

    def test_abort_commits_nothing(self, three_body_sim):
        sim = three_body_sim
        self._break_particle(sim, 2)
        before = sim.snapshot()
        with pytest.raises(IntegrationAbortedError) as info:
            sim.step()
        assert set(info.value.failures) == {2}
        assert info.value.failures[2].index == 2
        assert sim.t == 0.0
        assert np.array_equal(sim.state.pos, before["positions"])
        assert np.array_equal(sim.state.vel, before["velocities"])
        assert sim.integrator.last_report.committed is False

    def test_skip_advances_the_rest(self, skip_config, caplog):
        sim = KeplerSimulation(
            [Particle(mass=1.0), Particle(x=1.0, vy=1.0), Particle(x=-2.0, vy=-0.8)],
            dt=0.01,
            config=skip_config,
        )
        self._break_particle(sim, 2)
        frozen = sim.state.vel[2].copy()
        with caplog.at_level(logging.WARNING, logger="keplerdrift.integrator"):
            report = sim.step()
        assert set(report.failures) == {2}
        assert set(report.iterations) == {1}
        assert not report.ok and report.committed
        assert sim.t == 0.01
        assert sim.particles[1].y == pytest.approx(math.sin(0.01), abs=1e-14)
        assert np.array_equal(sim.state.vel[2], frozen)
        assert "particle 2" in caplog.text

    def test_convergence_failure_is_collected(self):
        sim = KeplerSimulation(
            [Particle(mass=1.0), Particle(x=1.0, vy=1.0)],
            dt=0.01,
            config=SimConfig(max_newton_iterations=1),
        )
        with pytest.raises(IntegrationAbortedError) as info:
            sim.step()
        assert isinstance(info.value.failures[1], KeplerConvergenceError)


class TestState:

    def test_particles_are_views(self, three_body_sim):
        views = three_body_sim.particles
        assert len(views) == 3
        assert all(isinstance(p, ParticleView) for p in views)
        views[2].vz = 0.25
        assert three_body_sim.state.vel[2, 2] == 0.25

    def test_snapshot_restore(self, three_body_sim):
        sim = three_body_sim
        snap = sim.snapshot()
        sim.steps(5)
        sim.restore(snap)
        assert sim.t == 0.0
        assert np.array_equal(sim.state.pos, snap["positions"])
        assert np.array_equal(sim.state.vel, snap["velocities"])

    def test_add_particles(self):
        sim = KeplerSimulation(dt=0.1)
        sim.add(mass=1.0)
        p = sim.add(x=1.0, vy=1.0)
        assert p.index == 1
        assert sim.n_particles == 2
        with pytest.raises(InvalidStateError):
            sim.add(Particle(x=0.0))

    def test_invalid_central_mass(self):
        with pytest.raises(InvalidStateError):
            KeplerSimulation([Particle(mass=-1.0), Particle(x=1.0)])
        with pytest.raises(ValueError):
            KeplerSimulation([Particle(mass=0.0), Particle(x=1.0)])

    def test_array_construction(self):
        sim = KeplerSimulation(
            masses=[1.0, 0.0],
            positions=[[0.0, 0.0, 0.0], [0.0, 3.0, 0.0]],
            velocities=[[0.0, 0.0, 0.0], [-0.5, 0.0, 0.0]],
            dt=0.2,
        )
        assert sim.dt == 0.2
        assert sim.particles[1].y == 3.0

    def test_dt_owned_by_simulation(self, three_body_sim):
        three_body_sim.dt = 0.02
        three_body_sim.step()
        assert three_body_sim.t == 0.02


class TestConfig:

    def test_bad_policy(self):
        with pytest.raises(ValueError):
            SimConfig(failure_policy="retry")

    def test_bad_update(self):
        with pytest.raises(ValueError):
            SimConfig(anomaly_update="secant")

    def test_copy_is_independent(self):
        cfg = SimConfig()
        other = cfg.copy()
        other.max_newton_iterations = 7
        assert cfg.max_newton_iterations == 100

    def test_compatibility_tunables(self):
        cfg = SimConfig()
        assert cfg.force_is_velocity_dependent is True
        assert cfg.integrator_epsilon == 0.0
        assert cfg.integrator_min_dt == 0.0

    def test_solver_follows_config(self):
        sim = KeplerSimulation(config=SimConfig(anomaly_update="householder", max_newton_iterations=12))
        assert sim.integrator.solver.update == "householder"
        assert sim.integrator.solver.max_iterations == 12
