"""
Tests for Gymnasium environment API.
"""

import dataclasses

import numpy as np
import pytest

from flappy.flappy_core.env_gym import ACTION_FLAP, ACTION_IDLE, FlappyEnv
from flappy.flappy_core.sim_state import Phase


@pytest.fixture
def env():
    env = FlappyEnv()
    yield env
    env.close()


class TestFlappyEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)

    def test_reset_starts_playing_at_rest(self, env):
        obs, info = env.reset(seed=42)
        assert env.game.phase is Phase.PLAYING
        assert float(obs["avatar_vy"]) == 0.0
        assert info["score"] == 0

    def test_observation_in_space(self, env):
        obs, _ = env.reset(seed=42)
        assert env.observation_space.contains(obs)

        obs, *_ = env.step(ACTION_FLAP)
        assert env.observation_space.contains(obs)

    def test_step_returns_five_values(self, env):
        """Step should return (obs, reward, terminated, truncated, info)."""
        env.reset(seed=42)

        result = env.step(ACTION_IDLE)

        assert isinstance(result, tuple)
        assert len(result) == 5

        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert isinstance(reward, float)
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)

    def test_flap_action_jumps(self, env):
        env.reset(seed=42)
        obs, *_ = env.step(ACTION_FLAP)
        assert float(obs["avatar_vy"]) < 0.0

    def test_accepts_numpy_action(self, env):
        env.reset(seed=42)
        obs, *_ = env.step(np.array(1))
        assert float(obs["avatar_vy"]) < 0.0

    def test_idle_falls_to_floor(self, env):
        """Doing nothing ends the episode on the floor."""
        env.reset(seed=42)
        for _ in range(200):
            _, reward, terminated, truncated, info = env.step(ACTION_IDLE)
            if terminated or truncated:
                break

        assert terminated
        assert not truncated
        assert info["end_reason"] == "floor"
        assert reward == 0.0

    def test_truncates_at_max_steps(self, config):
        short = dataclasses.replace(config, env=dataclasses.replace(config.env, max_steps=3))
        env = FlappyEnv(config=short)
        env.reset(seed=1)

        results = [env.step(ACTION_IDLE) for _ in range(3)]

        assert [r[3] for r in results] == [False, False, True]
        assert not results[-1][2]
        env.close()

    def test_reset_seed_is_reproducible(self, env):
        env.reset(seed=7)
        first = env.game.physics.sampler.sample_center(170.0)
        env.reset(seed=7)
        assert env.game.physics.sampler.sample_center(170.0) == first

    def test_reset_clears_previous_episode(self, env):
        env.reset(seed=42)
        for _ in range(200):
            _, _, terminated, _, _ = env.step(ACTION_IDLE)
            if terminated:
                break
        obs, _ = env.reset()
        assert env.game.phase is Phase.PLAYING
        assert not obs["obstacle_mask"].any()


class TestImageObservations:
    """Test rendered observations."""

    def test_image_obs_shape(self):
        env = FlappyEnv(image_obs=True)
        obs, _ = env.reset(seed=42)
        assert obs["board_rgb"].shape == (300, 200, 3)
        assert obs["board_rgb"].dtype == np.uint8
        env.close()

    def test_rgb_array_render(self):
        env = FlappyEnv(render_mode="rgb_array", image_width=100, image_height=150)
        env.reset(seed=42)
        frame = env.render()
        assert frame.shape == (150, 100, 3)
        env.close()

    def test_headless_render_returns_none(self, env):
        env.reset(seed=42)
        assert env.render() is None
