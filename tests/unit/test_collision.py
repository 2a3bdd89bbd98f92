"""Unit tests for circular bodies and the collision scenario."""

import numpy as np
import pytest

from scisim.analysis.energy import record_energy
from scisim.motion.bodies import Body, reflect_off_walls, resolve_all, resolve_collision, total_momentum
from scisim.motion.collision import PIXELS_PER_METER, THROW_SCALE, CollisionSimulation


class TestBody:
    """Tests for Body."""

    def test_arrays_are_copied(self):
        position = np.array([1.0, 2.0])
        body = Body(position=position)
        position[0] = 99.0
        assert body.position[0] == 1.0

    def test_non_positive_mass_rejected(self):
        with pytest.raises(ValueError, match="mass"):
            Body(position=(0, 0), mass=0)

    def test_momentum_and_energy(self):
        body = Body(position=(0, 0), velocity=(3, 4), mass=2)
        assert np.allclose(body.momentum, [6, 8])
        assert np.isclose(body.kinetic_energy, 25.0)

    def test_overlaps(self):
        a = Body(position=(0, 0), radius=10)
        assert a.overlaps(Body(position=(15, 0), radius=10))
        assert not a.overlaps(Body(position=(25, 0), radius=10))


class TestResolveCollision:
    """Tests for the pairwise impulse response."""

    def test_elastic_conserves_momentum_and_energy(self):
        a = Body(position=(0, 0), velocity=(2, 0.5), mass=1.0, radius=10)
        b = Body(position=(15, 3), velocity=(-1, 0), mass=2.5, radius=10)
        p_before = total_momentum([a, b])
        ke_before = a.kinetic_energy + b.kinetic_energy

        assert resolve_collision(a, b, restitution=1.0)

        assert np.allclose(total_momentum([a, b]), p_before)
        assert np.isclose(a.kinetic_energy + b.kinetic_energy, ke_before)

    def test_equal_masses_swap_velocities_head_on(self):
        a = Body(position=(0, 0), velocity=(1, 0), radius=10)
        b = Body(position=(15, 0), velocity=(-1, 0), radius=10)
        resolve_collision(a, b, restitution=1.0)
        assert np.allclose(a.velocity, [-1, 0])
        assert np.allclose(b.velocity, [1, 0])

    def test_inelastic_loses_energy(self):
        a = Body(position=(0, 0), velocity=(1, 0), radius=10)
        b = Body(position=(15, 0), velocity=(-1, 0), radius=10)
        resolve_collision(a, b, restitution=0.0)
        assert np.allclose(a.velocity, b.velocity)
        assert np.allclose(total_momentum([a, b]), [0, 0])

    def test_overlap_removed_heavier_moves_less(self):
        a = Body(position=(0, 0), mass=1.0, radius=10)
        b = Body(position=(10, 0), mass=3.0, radius=10)
        resolve_collision(a, b, restitution=1.0)
        assert np.isclose(b.position[0] - a.position[0], 20.0)
        assert np.isclose(a.position[0], -7.5)
        assert np.isclose(b.position[0], 12.5)

    def test_separating_pair_gets_no_impulse(self):
        a = Body(position=(0, 0), velocity=(-1, 0), radius=10)
        b = Body(position=(15, 0), velocity=(1, 0), radius=10)
        assert not resolve_collision(a, b, restitution=1.0)
        assert np.allclose(a.velocity, [-1, 0])
        assert np.allclose(b.velocity, [1, 0])

    def test_coincident_centres_left_alone(self):
        a = Body(position=(5, 5), velocity=(1, 0))
        b = Body(position=(5, 5), velocity=(-1, 0))
        assert not resolve_collision(a, b, restitution=1.0)
        assert np.allclose(a.position, b.position)

    def test_distant_pair_untouched(self):
        a = Body(position=(0, 0), velocity=(1, 0), radius=10)
        b = Body(position=(100, 0), velocity=(-1, 0), radius=10)
        assert not resolve_collision(a, b, restitution=1.0)

    def test_resolve_all_counts_impulses(self):
        bodies = [
            Body(position=(0, 0), velocity=(1, 0), radius=10),
            Body(position=(15, 0), velocity=(-1, 0), radius=10),
            Body(position=(300, 300), radius=10),
        ]
        assert resolve_all(bodies, restitution=1.0) == 1


class TestWalls:
    """Tests for reflect_off_walls."""

    def test_reflects_with_restitution(self):
        body = Body(position=(-5, 50), velocity=(-10, 0), radius=10)
        assert reflect_off_walls(body, 100, 100, restitution=0.5)
        assert body.position[0] == 10
        assert body.velocity[0] == 5.0

    def test_resting_contact_zeroes_velocity(self):
        body = Body(position=(50, 95), velocity=(0, 0.1), radius=10)
        reflect_off_walls(body, 100, 100, restitution=1.0, resting_speed=0.2)
        assert body.position[1] == 90
        assert body.velocity[1] == 0.0

    def test_moving_away_keeps_velocity(self):
        body = Body(position=(105, 50), velocity=(-3, 0), radius=10)
        reflect_off_walls(body, 100, 100, restitution=1.0)
        assert body.position[0] == 90
        assert body.velocity[0] == -3

    def test_inside_untouched(self):
        body = Body(position=(50, 50), velocity=(1, 1), radius=10)
        assert not reflect_off_walls(body, 100, 100, restitution=1.0)


class TestCollisionSimulation:
    """Tests for CollisionSimulation."""

    def test_default_ball_count(self):
        sim = CollisionSimulation()
        assert len(sim.balls) == 5
        assert sim.display_value("ball_count") == "5"

    def test_balls_do_not_overlap_initially(self):
        sim = CollisionSimulation()
        for i, a in enumerate(sim.balls):
            for b in sim.balls[i + 1:]:
                assert not a.overlaps(b)

    def test_reset_is_reproducible(self):
        sim = CollisionSimulation(seed=7)
        first = [ball.position.copy() for ball in sim.balls]
        sim.start()
        for _ in range(20):
            sim.update()
        sim.reset()
        for ball, position in zip(sim.balls, first):
            assert np.allclose(ball.position, position)

    def test_seed_changes_layout(self):
        a = CollisionSimulation(seed=1)
        b = CollisionSimulation(seed=2)
        assert not np.allclose(a.balls[0].position, b.balls[0].position)

    def test_ball_count_rebuilds(self):
        sim = CollisionSimulation()
        sim.set_parameter("ball_count", 3)
        assert len(sim.balls) == 3

    @pytest.mark.parametrize("x", [400.0, 30.0])  # on the floor, and in the corner
    def test_resting_ball_stays_put(self, canvas, x):
        sim = CollisionSimulation(canvas)
        floor = canvas.height - 30.0
        sim.balls = [Body(position=(x, floor), velocity=(0, 0), radius=30)]
        sim.start()
        for _ in range(50):
            sim.update()
            assert np.array_equal(sim.balls[0].position, [x, floor])
            assert np.all(sim.balls[0].velocity == 0)

    def test_drag_and_throw(self):
        sim = CollisionSimulation()
        ball = Body(position=(400, 300), radius=30)
        sim.balls[0] = ball
        x, y = 400.0, 300.0
        sim.on_press(x, y)
        sim.on_drag(x + 5, y)
        sim.on_drag(x + 15, y)
        assert np.allclose(ball.position, [x + 15, y])
        sim.on_release(x + 15, y)
        assert np.allclose(ball.velocity, [10 * THROW_SCALE * PIXELS_PER_METER, 0])

    def test_drag_keeps_grab_offset(self):
        sim = CollisionSimulation()
        ball = Body(position=(400, 300), radius=30)
        sim.balls[0] = ball
        sim.on_press(410, 295)
        sim.on_drag(420, 295)
        assert np.allclose(ball.position, [410, 300])
        sim.on_drag(450, 345)
        assert np.allclose(ball.position, [440, 350])
        sim.on_release(450, 345)
        assert np.allclose(ball.velocity, [30 * THROW_SCALE * PIXELS_PER_METER, 50 * THROW_SCALE * PIXELS_PER_METER])

    def test_press_ignored_while_running(self):
        sim = CollisionSimulation()
        ball = sim.balls[0]
        sim.start()
        sim.on_press(*ball.position)
        assert sim._dragged is None

    def test_energy_reported_in_metres(self):
        sim = CollisionSimulation()
        report = sim.energies()
        expected = sum(
            0.5 * b.mass * (np.hypot(*b.velocity) / PIXELS_PER_METER) ** 2 for b in sim.balls
        )
        assert np.isclose(report.kinetic, expected)

    def test_elastic_energy_conserved_without_gravity(self):
        sim = CollisionSimulation()
        sim.set_parameter("restitution", 1)
        sim.set_parameter("friction", 0)
        sim.set_parameter("gravity", 0)
        trace = record_energy(sim, 600)
        assert trace.relative_drift() < 1e-9

    def test_elastic_energy_bounded_with_gravity(self):
        sim = CollisionSimulation()
        sim.set_parameter("restitution", 1)
        sim.set_parameter("friction", 0)
        trace = record_energy(sim, 300)
        assert trace.relative_drift() < 0.05
