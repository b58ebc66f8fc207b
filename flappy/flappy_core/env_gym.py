"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the game with a fixed timestep.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from flappy.flappy_core.config_loader import GameConfig, load_config
from flappy.flappy_core.controller import Command, PhaseController
from flappy.flappy_core.game import CoreGame
from flappy.flappy_core.persistence import MemoryBestScoreStore
from flappy.flappy_core.sim_state import Phase
from flappy.flappy_core.state_snapshot import GameSnapshot

ACTION_IDLE = 0
ACTION_FLAP = 1


class FlappyEnv(gym.Env):
    """
    The game as a Gymnasium environment.

    Action Space:
        Discrete(2). 0 = do nothing, 1 = primary action (flap).

    Observation Space:
        Dict of avatar state, difficulty, the next obstacle's gap and padded
        obstacle arrays. Optionally an RGB image.

    Reward:
        Points scored during the step.

    Episodes start in PLAYING without an initial jump and terminate on
    GAME_OVER.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_obs: bool = False,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        config: Optional[GameConfig] = None,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            image_obs: If True, include board_rgb in observations.
            image_width: Override observation image width.
            image_height: Override observation image height.
            config: Already-loaded configuration; takes precedence over config_path.
        """
        super().__init__()

        self._config = config if config is not None else load_config(config_path)

        self.render_mode = render_mode
        self._image_obs = image_obs
        self._img_width = image_width or self._config.observation.image_width
        self._img_height = image_height or self._config.observation.image_height

        self._dt = self._config.env.dt
        self._frame_skip = self._config.env.frame_skip
        self._max_steps = self._config.env.max_steps
        self._steps = 0

        # Agents never touch the player's saved best score
        self._game = CoreGame(config=self._config, store=MemoryBestScoreStore())
        self._controller = PhaseController(self._game)

        # Renderers (lazy)
        self._rgb_renderer = None
        self._screen_renderer = None

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        board = self._config.board
        diff = self._config.difficulty
        max_obs = self._config.observation.max_obstacles
        far = float(board.width + self._config.obstacles.width)

        obs_dict = {
            "phase": spaces.Discrete(3),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),

            "avatar_y": spaces.Box(low=0, high=board.height, shape=(), dtype=np.float32),
            "avatar_vy": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),

            "pipe_speed": spaces.Box(low=diff.base_speed, high=diff.max_speed, shape=(), dtype=np.float32),
            "pipe_gap": spaces.Box(low=diff.min_gap, high=diff.base_gap, shape=(), dtype=np.float32),
            "spawn_interval": spaces.Box(
                low=diff.min_spawn_every, high=diff.base_spawn_every, shape=(), dtype=np.float32
            ),

            "next_dx": spaces.Box(low=-far, high=far, shape=(), dtype=np.float32),
            "next_gap_top": spaces.Box(low=0, high=board.height, shape=(), dtype=np.float32),
            "next_gap_bottom": spaces.Box(low=0, high=board.height, shape=(), dtype=np.float32),

            "obstacle_x": spaces.Box(low=-far, high=far, shape=(max_obs,), dtype=np.float32),
            "obstacle_gap_y": spaces.Box(low=0, high=board.height, shape=(max_obs,), dtype=np.float32),
            "obstacle_scored": spaces.MultiBinary(max_obs),
            "obstacle_mask": spaces.MultiBinary(max_obs),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment and start a run.

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.reset(seed=seed)
        self._game.start_run(with_impulse=False)
        self._steps = 0

        obs = self._snapshot_to_obs(self._game.snapshot())
        info = self._game.get_info()
        info["delta_score"] = 0
        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Apply an action and advance ``frame_skip`` fixed ticks.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())

        if int(action) == ACTION_FLAP and self._game.phase is Phase.PLAYING:
            self._controller.handle(Command.PRIMARY_ACTION)

        points = 0
        end_reason = ""
        for _ in range(self._frame_skip):
            tick = self._game.update(self._dt)
            points += tick.points
            if tick.ended:
                end_reason = tick.end_reason
                break

        self._steps += 1
        terminated = self._game.phase is Phase.GAME_OVER
        truncated = not terminated and self._steps >= self._max_steps

        obs = self._snapshot_to_obs(self._game.snapshot())
        info = self._game.get_info()
        info["delta_score"] = points
        info["end_reason"] = end_reason

        if self.render_mode == "human":
            self.render()

        return obs, float(points), terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        obs = snapshot.to_obs_dict(self._config.observation.max_obstacles)
        if self._image_obs:
            obs["board_rgb"] = self._render_to_array(snapshot)
        return obs

    def _render_to_array(self, snapshot: GameSnapshot) -> np.ndarray:
        if self._rgb_renderer is None:
            from flappy.flappy_core.render_solid import SolidRenderer
            self._rgb_renderer = SolidRenderer(self._config)
        return self._rgb_renderer.render(snapshot, self._img_width, self._img_height)

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array(self._game.snapshot())

        if self.render_mode == "human":
            import pygame
            from flappy.flappy_core.render_full_pygame import PygameRenderer
            if self._screen_renderer is None:
                self._screen_renderer = PygameRenderer(self._config)
            self._screen_renderer.render_to_screen(self._game.snapshot())
            pygame.event.pump()
            pygame.display.flip()
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        for renderer in (self._rgb_renderer, self._screen_renderer):
            if renderer is not None:
                renderer.close()
        self._rgb_renderer = None
        self._screen_renderer = None

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
