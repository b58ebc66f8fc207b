"""
Tests for the simulation state value.
"""

import pytest

from flappy.flappy_core.sim_state import ObstaclePair, Phase, SimulationState


@pytest.fixture
def state():
    return SimulationState.initial(210.0)


class TestObstaclePair:
    """Test obstacle geometry helpers."""

    def test_trailing_edge(self):
        assert ObstaclePair(x=15.0, gap_center_y=250.0).trailing_edge(70.0) == 85.0


class TestSimulationState:
    """Test run bookkeeping."""

    def test_initial_is_start_screen(self, state):
        assert state.phase is Phase.START
        assert not state.is_playing
        assert state.avatar.y == 210.0

    def test_is_playing_follows_phase(self, state):
        state.phase = Phase.PLAYING
        assert state.is_playing
        state.phase = Phase.GAME_OVER
        assert not state.is_playing

    def test_reset_run_keeps_phase(self, state):
        state.phase = Phase.GAME_OVER
        state.score = 4
        state.spawn_timer = 0.7
        state.avatar.vy = 120.0
        state.obstacles = [ObstaclePair(x=100.0, gap_center_y=250.0)]

        state.reset_run(210.0)

        assert state.phase is Phase.GAME_OVER
        assert state.score == 0
        assert state.spawn_timer == 0.0
        assert state.avatar.vy == 0.0
        assert state.obstacles == []
