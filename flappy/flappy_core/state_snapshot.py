"""
State Snapshot
==============

Read-only view of the game handed to renderers and agents each frame.

Renderers get a frozen ``GameSnapshot``; nothing in it aliases the live
simulation state. ``to_obs_dict`` packs the same data into fixed-size numpy
arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from flappy.flappy_core.sim_state import Phase

# Stable integer codes for Phase in observations
PHASE_CODES = {
    Phase.START: 0,
    Phase.PLAYING: 1,
    Phase.GAME_OVER: 2,
}


@dataclass(frozen=True)
class ObstacleView:
    """Immutable copy of one obstacle."""
    x: float
    gap_center_y: float
    scored: bool


@dataclass(frozen=True)
class GameSnapshot:
    """
    Complete game state for one frame.

    Difficulty values are the ones in effect for the current score.
    """
    # Core state
    phase: Phase
    score: int
    best_score: int
    muted: bool

    # Avatar
    avatar_x: float
    avatar_y: float
    avatar_vy: float
    avatar_radius: float

    # Obstacles, in spawn order
    obstacles: Tuple[ObstacleView, ...]

    # Difficulty
    pipe_speed: float
    pipe_gap: float
    spawn_interval: float

    # Board info (for layout and normalization)
    board_width: float
    board_height: float
    floor_y: float
    pipe_width: float

    def next_obstacle(self) -> Optional[ObstacleView]:
        """Nearest obstacle whose trailing edge is still ahead of the avatar."""
        for pipe in self.obstacles:
            if pipe.x + self.pipe_width >= self.avatar_x - self.avatar_radius:
                return pipe
        return None

    def to_obs_dict(self, max_obstacles: int) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs_x = np.zeros(max_obstacles, dtype=np.float32)
        obs_gap_y = np.zeros(max_obstacles, dtype=np.float32)
        obs_scored = np.zeros(max_obstacles, dtype=bool)
        obs_mask = np.zeros(max_obstacles, dtype=bool)

        count = min(len(self.obstacles), max_obstacles)
        for i in range(count):
            pipe = self.obstacles[i]
            obs_x[i] = pipe.x
            obs_gap_y[i] = pipe.gap_center_y
            obs_scored[i] = pipe.scored
            obs_mask[i] = True

        nxt = self.next_obstacle()
        if nxt is not None:
            next_dx = nxt.x - self.avatar_x
            next_gap_top = nxt.gap_center_y - self.pipe_gap / 2
            next_gap_bottom = nxt.gap_center_y + self.pipe_gap / 2
        else:
            # No obstacle ahead yet: report the spawn point and a centered gap
            next_dx = self.board_width + self.pipe_width - self.avatar_x
            next_gap_top = self.floor_y / 2 - self.pipe_gap / 2
            next_gap_bottom = self.floor_y / 2 + self.pipe_gap / 2

        return {
            # Core state
            "phase": np.array(PHASE_CODES[self.phase], dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),

            # Avatar
            "avatar_y": np.array(self.avatar_y, dtype=np.float32),
            "avatar_vy": np.array(self.avatar_vy, dtype=np.float32),

            # Difficulty
            "pipe_speed": np.array(self.pipe_speed, dtype=np.float32),
            "pipe_gap": np.array(self.pipe_gap, dtype=np.float32),
            "spawn_interval": np.array(self.spawn_interval, dtype=np.float32),

            # Next obstacle
            "next_dx": np.array(next_dx, dtype=np.float32),
            "next_gap_top": np.array(next_gap_top, dtype=np.float32),
            "next_gap_bottom": np.array(next_gap_bottom, dtype=np.float32),

            # Obstacle arrays
            "obstacle_x": obs_x,
            "obstacle_gap_y": obs_gap_y,
            "obstacle_scored": obs_scored,
            "obstacle_mask": obs_mask,
        }
