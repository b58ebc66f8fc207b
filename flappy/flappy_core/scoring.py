"""
Scoring System
==============

Awards a point per obstacle passed and keeps the persisted best score.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from flappy.flappy_core.persistence import BestScoreStore, MemoryBestScoreStore
from flappy.flappy_core.sim_state import ObstaclePair, SimulationState

logger = logging.getLogger(__name__)


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    obstacle: ObstaclePair
    score_after: int
    new_best: bool

    def __repr__(self) -> str:
        suffix = ", new_best" if self.new_best else ""
        return f"ScoreEvent(score={self.score_after}{suffix})"


class ScoreTracker:
    """
    Scores passed obstacles and maintains the best score.

    The best score is loaded from the store once, at construction, and
    written back every time it improves. It never decreases except through
    ``clear_best``.
    """

    def __init__(
        self,
        store: Optional[BestScoreStore] = None,
        avatar_x: float = 90.0,
        pipe_width: float = 70.0
    ):
        """
        Initialize score tracker.

        Args:
            store: Best score storage. In-memory if None.
            avatar_x: Fixed horizontal coordinate of the avatar.
            pipe_width: Obstacle width, used to find the trailing edge.
        """
        if store is None:
            store = MemoryBestScoreStore()

        self._store = store
        self._avatar_x = avatar_x
        self._pipe_width = pipe_width
        self._best: int = store.load()

    @property
    def best_score(self) -> int:
        """Best score across all runs."""
        return self._best

    @property
    def store(self) -> BestScoreStore:
        return self._store

    def is_passed(self, pipe: ObstaclePair) -> bool:
        """True once the trailing edge is strictly left of the avatar."""
        return pipe.trailing_edge(self._pipe_width) < self._avatar_x

    def record(self, score: int) -> bool:
        """
        Offer a score as the new best.

        Returns:
            True if the best improved (and was saved).
        """
        if score <= self._best:
            return False
        self._best = score
        self._store.save(score)
        return True

    def apply_passes(self, state: SimulationState) -> List[ScoreEvent]:
        """
        Score every obstacle that has just been passed.

        Each obstacle scores at most once; ``scored`` is never reset.

        Returns:
            One event per point awarded, in obstacle order.
        """
        events: List[ScoreEvent] = []
        for pipe in state.obstacles:
            if pipe.scored or not self.is_passed(pipe):
                continue
            pipe.scored = True
            state.score += 1
            new_best = self.record(state.score)
            events.append(ScoreEvent(obstacle=pipe, score_after=state.score, new_best=new_best))
        return events

    def clear_best(self) -> None:
        """Forget the best score, in memory and in storage."""
        self._best = 0
        self._store.clear()
        logger.info("Best score cleared")
