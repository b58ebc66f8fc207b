"""
Tests for the clamped frame clock and frame driver.
"""

import pytest

from flappy.flappy_core.driver import MAX_DT, FrameClock, FrameDriver
from flappy.flappy_core.sim_state import Phase


@pytest.fixture
def clock():
    return FrameClock(MAX_DT, time_source=lambda: 0.0)


class TestFrameClock:
    """Test dt measurement and clamping."""

    def test_normal_frame(self, clock):
        assert clock.tick(0.016) == pytest.approx(0.016)

    def test_long_stall_is_clamped(self, clock):
        """A stall turns into a single max_dt step."""
        assert clock.tick(2.5) == MAX_DT

    def test_backwards_time_gives_zero(self, clock):
        clock.tick(1.0)
        assert clock.tick(0.5) == 0.0

    def test_restart(self, clock):
        clock.restart(10.0)
        assert clock.tick(10.01) == pytest.approx(0.01)

    def test_uses_time_source(self):
        times = iter([0.0, 0.02])
        clock = FrameClock(time_source=lambda: next(times))
        assert clock.tick() == pytest.approx(0.02)


class TestFrameDriver:
    """Test one update plus one render per frame."""

    def test_renders_every_frame(self, game, clock):
        frames = []
        driver = FrameDriver(game, frames.append, clock)

        driver.frame(0.016)
        driver.frame(0.032)

        assert len(frames) == 2
        assert driver.frames == 2
        assert frames[-1].phase is Phase.START

    def test_stall_advances_by_max_dt(self, game, clock):
        driver = FrameDriver(game, lambda snapshot: None, clock)
        game.start_run()

        driver.frame(30.0)

        assert driver.last_tick.dt == MAX_DT
        assert game.state.avatar.vy == pytest.approx(-550.0 + 1800.0 * MAX_DT)

    def test_default_clock_uses_config_max_dt(self, game):
        driver = FrameDriver(game, lambda snapshot: None)
        assert driver.clock.max_dt == game.config.physics.max_dt
