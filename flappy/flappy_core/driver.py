"""
Frame Driver
============

Variable-timestep loop glue: measure elapsed time, clamp it, update the
game, hand a snapshot to the renderer.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from flappy.flappy_core.game import CoreGame, TickResult
from flappy.flappy_core.state_snapshot import GameSnapshot

MAX_DT = 0.05


class FrameClock:
    """
    Elapsed time between ticks, clamped to ``max_dt``.

    A long stall (window dragged, process suspended) becomes a single
    ``max_dt`` step instead of a jump that could carry the avatar through
    an obstacle or the floor.
    """

    def __init__(
        self,
        max_dt: float = MAX_DT,
        time_source: Callable[[], float] = time.perf_counter
    ):
        self._max_dt = max_dt
        self._time_source = time_source
        self._last = time_source()

    @property
    def max_dt(self) -> float:
        return self._max_dt

    def tick(self, now: Optional[float] = None) -> float:
        """Seconds since the previous tick, in ``[0, max_dt]``."""
        if now is None:
            now = self._time_source()
        dt = min(self._max_dt, max(0.0, now - self._last))
        self._last = now
        return dt

    def restart(self, now: Optional[float] = None) -> None:
        self._last = self._time_source() if now is None else now


class FrameDriver:
    """
    Runs Update then Render once per frame.

    Args:
        game: The game to drive.
        render: Called with each frame's snapshot.
        clock: Elapsed-time source. One clamped to the game's max_dt if None.
    """

    def __init__(
        self,
        game: CoreGame,
        render: Callable[[GameSnapshot], None],
        clock: Optional[FrameClock] = None
    ):
        self._game = game
        self._render = render
        self._clock = clock if clock is not None else FrameClock(game.config.physics.max_dt)
        self._frames = 0
        self.last_tick: Optional[TickResult] = None

    @property
    def frames(self) -> int:
        return self._frames

    @property
    def clock(self) -> FrameClock:
        return self._clock

    def frame(self, now: Optional[float] = None) -> GameSnapshot:
        """Advance one frame and return the snapshot that was rendered."""
        dt = self._clock.tick(now)
        self.last_tick = self._game.update(dt)
        snapshot = self._game.snapshot()
        self._render(snapshot)
        self._frames += 1
        return snapshot
