"""
Tests for the score-driven difficulty ramp.
"""

import pytest

from flappy.flappy_core.difficulty import DifficultyModel, clamp


@pytest.fixture
def difficulty(config):
    return DifficultyModel(config)


class TestClamp:
    """Test the clamp helper."""

    def test_inside_range_unchanged(self):
        assert clamp(5, 0, 10) == 5

    def test_clamps_both_ends(self):
        assert clamp(-1, 0, 10) == 0
        assert clamp(11, 0, 10) == 10


class TestDifficultyRamp:
    """Test each ramp against its configured constants."""

    def test_score_zero_uses_base_values(self, difficulty):
        """A fresh run plays at the base speed, gap and interval."""
        assert difficulty.pipe_speed(0) == pytest.approx(220.0)
        assert difficulty.pipe_gap(0) == pytest.approx(170.0)
        assert difficulty.spawn_interval(0) == pytest.approx(1.35)

    def test_linear_in_the_middle(self, difficulty):
        """Score 10 is on the linear part of every ramp."""
        assert difficulty.pipe_speed(10) == pytest.approx(280.0)
        assert difficulty.pipe_gap(10) == pytest.approx(158.0)
        assert difficulty.spawn_interval(10) == pytest.approx(1.25)

    def test_saturates_at_limits(self, difficulty):
        """Very high scores stay at the configured limits."""
        assert difficulty.pipe_speed(1000) == pytest.approx(360.0)
        assert difficulty.pipe_gap(1000) == pytest.approx(135.0)
        assert difficulty.spawn_interval(1000) == pytest.approx(1.10)

    def test_ramps_saturate_at_different_scores(self, difficulty):
        """Speed caps at 24, spawn interval at 25, gap at 30."""
        assert difficulty.pipe_speed(23) < 360.0
        assert difficulty.pipe_speed(24) == pytest.approx(360.0)
        assert difficulty.spawn_interval(24) > 1.10
        assert difficulty.spawn_interval(25) == pytest.approx(1.10)
        assert difficulty.pipe_gap(29) > 135.0
        assert difficulty.pipe_gap(30) == pytest.approx(135.0)

    def test_monotonic(self, difficulty):
        """Harder never turns easier as the score grows."""
        prev = difficulty.levels(0)
        for score in range(1, 60):
            cur = difficulty.levels(score)
            assert cur.pipe_speed >= prev.pipe_speed
            assert cur.pipe_gap <= prev.pipe_gap
            assert cur.spawn_interval <= prev.spawn_interval
            prev = cur

    def test_negative_score_treated_as_zero(self, difficulty):
        assert difficulty.levels(-5) == difficulty.levels(0)
