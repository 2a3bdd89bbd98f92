"""Unit tests for the mechanics scenarios."""

import numpy as np
import pytest

from scisim.analysis.energy import record_energy
from scisim.core.simulation import TIME_STEP
from scisim.motion.freefall import FreeFallSimulation
from scisim.motion.inclined_plane import InclinedPlaneSimulation
from scisim.motion.pendulum import PendulumSimulation, corrected_period, small_angle_period
from scisim.motion.projectile import ProjectileSimulation, theoretical_max_height, theoretical_range


def run_until_stopped(sim, max_frames=5000):
    sim.start()
    frames = 0
    while sim.is_running and frames < max_frames:
        sim.update()
        frames += 1
    return frames


class TestFreeFall:
    """Tests for FreeFallSimulation."""

    def test_initial_position(self, canvas):
        sim = FreeFallSimulation(canvas)
        assert sim.position[1] == canvas.height - 300
        assert np.all(sim.velocity == 0)

    def test_speed_grows_linearly_without_drag(self):
        sim = FreeFallSimulation()
        sim.start()
        for _ in range(100):
            sim.update()
        assert np.isclose(sim.velocity[1], 9.8 * sim.time)
        assert np.isclose(sim.velocity[0], 0.0)

    def test_lands_and_stops(self):
        sim = FreeFallSimulation()
        run_until_stopped(sim)
        assert sim.landed
        assert not sim.is_running
        assert sim.position[1] == sim.ground_y - sim.radius
        assert np.all(sim.velocity == 0)
        assert sim.height == 0.0

    def test_update_after_landing_is_noop(self):
        sim = FreeFallSimulation()
        run_until_stopped(sim)
        time, position = sim.time, sim.position.copy()
        sim.update()
        assert sim.time == time
        assert np.array_equal(sim.position, position)

    def test_energy_conserved_without_drag(self):
        sim = FreeFallSimulation()
        trace = record_energy(sim, 300)
        assert sim.is_running  # still falling
        assert trace.relative_drift() < 0.01

    def test_drag_limits_speed(self):
        sim = FreeFallSimulation()
        sim.set_parameter("air_resistance", 0.1)
        sim.start()
        for _ in range(200):
            sim.update()
        terminal = np.sqrt(9.8 * 1.0 / 0.1)
        assert sim.velocity[1] < terminal
        assert sim.velocity[1] < 9.8 * sim.time

    def test_height_change_rebuilds(self, canvas):
        sim = FreeFallSimulation(canvas)
        sim.start()
        sim.update()
        sim.set_parameter("initial_height", 100)
        assert sim.time == 0.0
        assert sim.position[1] == canvas.height - 100

    def test_display_rows(self):
        sim = FreeFallSimulation()
        keys = [row.key for row in sim.data_to_display()]
        assert keys[0] == "time"
        for key in ("height", "speed", "acceleration", "total_energy"):
            assert key in keys


class TestProjectile:
    """Tests for ProjectileSimulation."""

    def test_theoretical_formulas(self):
        assert np.isclose(theoretical_max_height(40, 45, 9.8), 1600 * 0.5 / 19.6)
        assert np.isclose(theoretical_range(40, 45, 9.8), 1600 / 9.8)
        assert np.isclose(theoretical_range(40, 90, 9.8), 0.0, atol=1e-9)

    def test_launch_velocity(self):
        sim = ProjectileSimulation()
        assert np.isclose(sim.velocity[0], 40 * np.cos(np.pi / 4))
        assert np.isclose(sim.velocity[1], -40 * np.sin(np.pi / 4))

    def test_measured_apex_matches_theory(self):
        sim = ProjectileSimulation()
        run_until_stopped(sim)
        expected = theoretical_max_height(40, 45, 9.8)
        assert sim.max_height == pytest.approx(expected, rel=0.02)

    def test_lands_near_theoretical_range(self):
        sim = ProjectileSimulation()
        run_until_stopped(sim)
        expected = theoretical_range(40, 45, 9.8)
        assert sim.landed
        assert 0.98 * expected < sim.distance < 1.1 * expected

    def test_parameter_change_rebuilds(self):
        sim = ProjectileSimulation()
        sim.set_parameter("angle", 60)
        assert np.isclose(sim.velocity[0], 40 * np.cos(np.radians(60)))
        assert sim.max_height == 0.0
        assert sim.display_value("theoretical_max_height") == f"{theoretical_max_height(40, 60, 9.8):.2f}"


class TestPendulum:
    """Tests for PendulumSimulation."""

    def test_corrected_period(self):
        base = small_angle_period(150, 9.8)
        assert corrected_period(150, 9.8, 5) == base
        assert corrected_period(150, 9.8, 30) > base

    def test_measured_period_small_angle(self):
        sim = PendulumSimulation()
        sim.set_parameter("length", 50)
        sim.set_parameter("gravity", 20)
        sim.set_parameter("initial_angle", 5)
        sim.start()
        for _ in range(800):
            sim.update()
        assert sim.measured_period is not None
        assert sim.measured_period == pytest.approx(small_angle_period(50, 20), rel=0.02)

    def test_measured_period_reference_pendulum(self):
        # 150 px, 9.8, 5°: about four periods in 6000 frames
        sim = PendulumSimulation()
        sim.set_parameter("length", 150)
        sim.set_parameter("gravity", 9.8)
        sim.set_parameter("initial_angle", 5)
        sim.start()
        for _ in range(6000):
            sim.update()
        assert sim.measured_period == pytest.approx(small_angle_period(150, 9.8), rel=0.005)

    def test_no_period_before_two_reversals(self):
        sim = PendulumSimulation()
        sim.start()
        for _ in range(10):
            sim.update()
        assert sim.measured_period is None
        assert sim.display_value("measured_period") == "-"

    def test_energy_conserved_without_damping(self):
        sim = PendulumSimulation()
        trace = record_energy(sim, 1000)
        assert trace.relative_drift() < 0.01

    def test_damping_dissipates_energy(self):
        sim = PendulumSimulation()
        sim.set_parameter("damping", 0.05)
        trace = record_energy(sim, 1000)
        assert trace.total[-1] < 0.9 * trace.total[0]

    def test_bob_starts_at_initial_angle(self):
        sim = PendulumSimulation()
        offset = sim.bob_position - sim.pivot
        assert np.isclose(np.degrees(np.arctan2(offset[0], offset[1])), 30)
        assert np.isclose(np.hypot(*offset), 150)


class TestInclinedPlane:
    """Tests for InclinedPlaneSimulation."""

    def test_starts_at_top(self):
        sim = InclinedPlaneSimulation()
        assert np.isclose(sim.distance_along_plane, sim.plane_length)

    def test_normal_points_away_from_plane(self):
        sim = InclinedPlaneSimulation()
        assert np.isclose(sim.normal @ sim.along, 0.0)
        # Screen y grows downward, so "above the plane" is negative y
        assert sim.normal[1] < 0

    def test_forces(self):
        sim = InclinedPlaneSimulation()
        forces = sim.forces()
        theta = np.radians(30)
        assert np.isclose(forces["normal"], 9.8 * np.cos(theta))
        assert np.isclose(forces["parallel"], 9.8 * np.sin(theta))
        assert np.isclose(forces["friction"], 0.2 * 9.8 * np.cos(theta))
        assert np.isclose(forces["net"], forces["parallel"] - forces["friction"])

    def test_slides_with_expected_acceleration(self):
        sim = InclinedPlaneSimulation()
        sim.start()
        for _ in range(50):
            sim.update()
        theta = np.radians(30)
        expected = 9.8 * (np.sin(theta) - 0.2 * np.cos(theta))
        speed = np.hypot(*sim.velocity)
        assert np.isclose(speed, expected * sim.time, rtol=0.02)

    def test_static_friction_holds_block(self):
        sim = InclinedPlaneSimulation()
        sim.set_parameter("angle", 5)
        sim.set_parameter("friction_coef", 0.5)
        sim.start()
        for _ in range(100):
            sim.update()
        assert sim.at_rest
        assert np.isclose(sim.distance_along_plane, sim.plane_length)
        forces = sim.forces()
        assert np.isclose(forces["friction"], forces["parallel"])
        assert forces["net"] == 0.0

    def test_stops_at_bottom(self):
        sim = InclinedPlaneSimulation()
        frames = run_until_stopped(sim)
        assert frames < 5000
        assert not sim.is_running
        assert np.isclose(sim.distance_along_plane, 0.0, atol=1e-6)
        assert np.all(sim.velocity == 0)

    def test_time_step(self):
        sim = InclinedPlaneSimulation()
        sim.start()
        sim.update()
        assert sim.time == TIME_STEP

    def test_energy_conserved_without_friction(self):
        sim = InclinedPlaneSimulation()
        sim.set_parameter("friction_coef", 0)
        trace = record_energy(sim, 5000)
        assert not sim.is_running
        # The last sample is the stop at the bottom, where velocity is zeroed
        totals = trace.total[:-1]
        assert np.max(np.abs(totals - totals[0])) / totals[0] < 0.01
