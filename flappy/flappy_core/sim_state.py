"""
Simulation State
================

The single mutable value the simulation works on: avatar, live obstacles,
spawn timer, score and phase. Physics, scoring and the phase controller
receive it explicitly; nothing is kept in module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Phase(Enum):
    """Discrete game mode."""
    START = "START"
    PLAYING = "PLAYING"
    GAME_OVER = "GAME_OVER"


@dataclass
class Avatar:
    """Vertical state of the avatar. Its x is fixed by configuration."""
    y: float
    vy: float = 0.0


@dataclass
class ObstaclePair:
    """
    One obstacle column with a passable gap.

    ``x`` is the left edge; the trailing edge is ``x + width``.
    """
    x: float
    gap_center_y: float
    scored: bool = False

    def trailing_edge(self, width: float) -> float:
        return self.x + width


@dataclass
class SimulationState:
    """Everything that changes while the game runs."""
    avatar: Avatar
    obstacles: List[ObstaclePair] = field(default_factory=list)
    spawn_timer: float = 0.0
    score: int = 0
    phase: Phase = Phase.START

    @classmethod
    def initial(cls, start_y: float) -> "SimulationState":
        """Fresh state at the start screen."""
        return cls(avatar=Avatar(y=start_y))

    def reset_run(self, start_y: float) -> None:
        """
        Put the run back to its starting values.

        Phase is left alone; callers choose START or PLAYING.
        """
        self.avatar.y = start_y
        self.avatar.vy = 0.0
        self.obstacles = []
        self.spawn_timer = 0.0
        self.score = 0

    @property
    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING
