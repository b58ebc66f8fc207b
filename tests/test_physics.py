"""
Tests for avatar integration, bounds, obstacles and collision.
"""

import pytest

from flappy.flappy_core.physics_world import (
    BOUND_CEILING,
    BOUND_FLOOR,
    BOUND_NONE,
    PhysicsWorld,
    circle_intersects_rect,
)
from flappy.flappy_core.rng import GapSampler
from flappy.flappy_core.sim_state import Avatar, ObstaclePair, SimulationState


@pytest.fixture
def physics(config):
    return PhysicsWorld(config, seed=42)


@pytest.fixture
def state(config):
    return SimulationState.initial(config.avatar_start_y)


class TestIntegration:
    """Test semi-implicit Euler integration."""

    def test_jump_tick(self, physics):
        """Velocity is updated first, then position uses the new velocity."""
        avatar = Avatar(y=210.0, vy=-550.0)
        physics.integrate(avatar, 0.016)

        assert avatar.vy == pytest.approx(-521.2)
        assert avatar.y == pytest.approx(210.0 - 521.2 * 0.016)
        assert avatar.y < 210.0

    def test_zero_dt_is_noop(self, physics):
        avatar = Avatar(y=300.0, vy=42.0)
        physics.integrate(avatar, 0.0)
        assert avatar.y == 300.0
        assert avatar.vy == 42.0


class TestBounds:
    """Test ceiling and floor handling."""

    def test_floor_clamps_to_radius_above_floor(self, physics):
        """Floor contact pins the avatar at floor_y - radius and stops it."""
        avatar = Avatar(y=520.0, vy=100.0)
        assert physics.resolve_bounds(avatar) == BOUND_FLOOR
        assert avatar.y == 516.0
        assert avatar.vy == 0.0

    def test_exactly_touching_floor_counts(self, physics):
        avatar = Avatar(y=516.0, vy=0.0)
        assert physics.resolve_bounds(avatar) == BOUND_FLOOR

    def test_ceiling_clamps_without_ending(self, physics):
        """The ceiling pushes the avatar back and zeroes its velocity."""
        avatar = Avatar(y=5.0, vy=-300.0)
        assert physics.resolve_bounds(avatar) == BOUND_CEILING
        assert avatar.y == 14.0
        assert avatar.vy == 0.0

    def test_inside_band_untouched(self, physics):
        avatar = Avatar(y=300.0, vy=12.0)
        assert physics.resolve_bounds(avatar) == BOUND_NONE
        assert avatar.y == 300.0
        assert avatar.vy == 12.0


class TestCircleRect:
    """Test the closest-point overlap query."""

    def test_circle_below_rect_misses(self):
        assert not circle_intersects_rect(90, 500, 14, 100, 0, 70, 400)

    def test_circle_near_corner_hits(self):
        assert circle_intersects_rect(90, 405, 14, 100, 0, 70, 400)

    def test_touching_counts_as_overlap(self):
        assert circle_intersects_rect(86, 200, 14, 100, 0, 70, 400)

    def test_center_inside_rect(self):
        assert circle_intersects_rect(120, 100, 14, 100, 0, 70, 400)


class TestSpawner:
    """Test the spawn timer."""

    def test_spawns_when_interval_elapses(self, physics, state):
        assert physics.tick_spawner(state, 1.0, interval=1.35, gap=170.0) is None
        assert state.spawn_timer == pytest.approx(1.0)

        pipe = physics.tick_spawner(state, 0.4, interval=1.35, gap=170.0)
        assert pipe is not None
        assert state.spawn_timer == 0.0
        assert state.obstacles == [pipe]
        assert pipe.x == pytest.approx(470.0)
        assert not pipe.scored

    def test_gap_center_stays_inside_band(self, physics, state):
        for _ in range(200):
            pipe = physics.tick_spawner(state, 2.0, interval=1.35, gap=170.0)
            assert 165.0 <= pipe.gap_center_y <= 365.0


class TestObstacleMovement:
    """Test movement and pruning."""

    def test_moves_left_by_speed_times_dt(self, physics, state):
        state.obstacles = [ObstaclePair(x=300.0, gap_center_y=250.0)]
        physics.advance_obstacles(state, 0.5, 220.0)
        assert state.obstacles[0].x == pytest.approx(190.0)

    def test_prunes_only_fully_offscreen(self, physics, state):
        """An obstacle stays while any part of it is on screen."""
        state.obstacles = [
            ObstaclePair(x=-70.0, gap_center_y=250.0),
            ObstaclePair(x=-69.0, gap_center_y=250.0),
            ObstaclePair(x=200.0, gap_center_y=250.0),
        ]
        removed = physics.advance_obstacles(state, 0.0, 220.0)
        assert removed == 1
        assert [p.x for p in state.obstacles] == [-69.0, 200.0]

    def test_preserves_spawn_order(self, physics, state):
        state.obstacles = [ObstaclePair(x=x, gap_center_y=250.0) for x in (10.0, 200.0, 400.0)]
        physics.advance_obstacles(state, 0.1, 100.0)
        xs = [p.x for p in state.obstacles]
        assert xs == sorted(xs)


class TestCollision:
    """Test obstacle collision queries."""

    def test_inside_gap_is_safe(self, physics, state):
        state.avatar.y = 250.0
        state.obstacles = [ObstaclePair(x=60.0, gap_center_y=250.0)]
        assert physics.first_collision(state, 170.0) is None

    def test_hits_top_segment(self, physics, state):
        state.avatar.y = 150.0
        state.obstacles = [ObstaclePair(x=60.0, gap_center_y=250.0)]
        assert physics.first_collision(state, 170.0) is state.obstacles[0]

    def test_hits_bottom_segment(self, physics, state):
        state.avatar.y = 340.0
        state.obstacles = [ObstaclePair(x=60.0, gap_center_y=250.0)]
        assert physics.first_collision(state, 170.0) is state.obstacles[0]

    def test_first_hit_in_spawn_order_wins(self, physics, state):
        state.avatar.y = 100.0
        first = ObstaclePair(x=60.0, gap_center_y=300.0)
        second = ObstaclePair(x=80.0, gap_center_y=300.0)
        state.obstacles = [first, second]
        assert physics.first_collision(state, 170.0) is first

    def test_segments_span_ceiling_to_floor(self, physics):
        top, bottom = physics.segments(ObstaclePair(x=10.0, gap_center_y=250.0), 170.0)
        assert top == (10.0, 0.0, 70.0, 165.0)
        assert bottom == (10.0, 335.0, 70.0, 195.0)


class TestGapSampler:
    """Test seeded gap placement."""

    def test_same_seed_same_sequence(self):
        a = GapSampler(80.0, 530.0, seed=7)
        b = GapSampler(80.0, 530.0, seed=7)
        assert [a.sample_center(170.0) for _ in range(5)] == [b.sample_center(170.0) for _ in range(5)]

    def test_reset_replays_sequence(self):
        sampler = GapSampler(80.0, 530.0, seed=3)
        first = [sampler.sample_center(150.0) for _ in range(3)]
        sampler.reset()
        assert [sampler.sample_center(150.0) for _ in range(3)] == first

    def test_state_roundtrip(self):
        sampler = GapSampler(80.0, 530.0, seed=11)
        saved = sampler.get_state()
        expected = sampler.sample_center(170.0)
        sampler.set_state(saved)
        assert sampler.sample_center(170.0) == expected

    def test_oversized_gap_collapses_to_midpoint(self):
        sampler = GapSampler(80.0, 530.0, seed=1)
        assert sampler.center_range(500.0) == (265.0, 265.0)
        assert sampler.sample_center(500.0) == 265.0
