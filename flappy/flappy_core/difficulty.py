"""
Difficulty Model
================

Maps the live run score to obstacle speed, gap height and spawn interval.

Every value is an independent clamp of a linear ramp, so the three curves
saturate at different scores. Nothing here is cached; the game reads the
values once at the start of each tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flappy.flappy_core.config_loader import GameConfig, get_config


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` into ``[lo, hi]``."""
    return max(lo, min(value, hi))


@dataclass(frozen=True)
class DifficultyLevels:
    """Difficulty values for a single score."""
    pipe_speed: float        # px/s obstacles travel left
    pipe_gap: float          # Vertical passage height
    spawn_interval: float    # Seconds between spawns


class DifficultyModel:
    """
    Stateless difficulty ramp.

    - pipe_speed grows with score up to max_speed
    - pipe_gap shrinks with score down to min_gap
    - spawn_interval shrinks with score down to min_spawn_every
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize difficulty model.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._d = config.difficulty

    def pipe_speed(self, score: int) -> float:
        d = self._d
        s = max(0, score)
        return clamp(d.base_speed + s * d.speed_per_point, d.base_speed, d.max_speed)

    def pipe_gap(self, score: int) -> float:
        d = self._d
        s = max(0, score)
        return clamp(d.base_gap - s * d.gap_shrink_per_point, d.min_gap, d.base_gap)

    def spawn_interval(self, score: int) -> float:
        d = self._d
        s = max(0, score)
        return clamp(
            d.base_spawn_every - s * d.spawn_accel_per_point,
            d.min_spawn_every,
            d.base_spawn_every
        )

    def levels(self, score: int) -> DifficultyLevels:
        """All three difficulty values for ``score``."""
        return DifficultyLevels(
            pipe_speed=self.pipe_speed(score),
            pipe_gap=self.pipe_gap(score),
            spawn_interval=self.spawn_interval(score)
        )
