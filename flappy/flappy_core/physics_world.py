"""
Physics World
=============

Avatar integration, board bounds, obstacle spawning/movement and the
circle-vs-rectangle collision query.

All methods take the ``SimulationState`` they act on; the world itself only
holds configuration and the gap sampler.
"""

from __future__ import annotations

from typing import Optional, Tuple

from flappy.flappy_core.config_loader import GameConfig, get_config
from flappy.flappy_core.rng import GapSampler
from flappy.flappy_core.sim_state import Avatar, ObstaclePair, SimulationState


# Results of resolving the avatar against the board bounds
BOUND_NONE = 0
BOUND_CEILING = 1
BOUND_FLOOR = 2


def circle_intersects_rect(
    cx: float,
    cy: float,
    r: float,
    rx: float,
    ry: float,
    rw: float,
    rh: float
) -> bool:
    """
    Closest-point circle/rectangle overlap test.

    The circle center is clamped into the rectangle and the squared distance
    to that point is compared with ``r ** 2``. Touching counts as overlap.
    """
    closest_x = max(rx, min(cx, rx + rw))
    closest_y = max(ry, min(cy, ry + rh))
    dx = cx - closest_x
    dy = cy - closest_y
    return dx * dx + dy * dy <= r * r


class PhysicsWorld:
    """
    Kinematic world for one avatar and a row of obstacle columns.

    Handles:
    - Gravity/velocity integration
    - Ceiling and floor clamping
    - Obstacle spawning on a timer
    - Obstacle movement and pruning
    - Collision queries against obstacle segments
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        """
        Initialize physics world.

        Args:
            config: Game configuration. Uses default if None.
            seed: Seed for gap placement.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._gravity = config.physics.gravity
        self._avatar_x = config.avatar.x
        self._radius = config.avatar.radius
        self._floor_y = config.floor_y
        self._board_width = float(config.board.width)
        self._pipe_width = config.obstacles.width

        self._sampler = GapSampler(config.obstacles.margin, self._floor_y, seed)

    @property
    def sampler(self) -> GapSampler:
        return self._sampler

    @property
    def avatar_x(self) -> float:
        return self._avatar_x

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def floor_y(self) -> float:
        return self._floor_y

    @property
    def pipe_width(self) -> float:
        return self._pipe_width

    @property
    def spawn_x(self) -> float:
        """Left edge of a freshly spawned obstacle, just past the right edge."""
        return self._board_width + self._pipe_width

    def integrate(self, avatar: Avatar, dt: float) -> None:
        """Semi-implicit Euler step under gravity."""
        avatar.vy += self._gravity * dt
        avatar.y += avatar.vy * dt

    def resolve_bounds(self, avatar: Avatar) -> int:
        """
        Clamp the avatar to the board.

        Returns:
            BOUND_FLOOR if the floor was reached (fatal), BOUND_CEILING if the
            avatar was pushed down from the ceiling, BOUND_NONE otherwise.
        """
        top = self._radius
        bottom = self._floor_y - self._radius

        result = BOUND_NONE
        if avatar.y < top:
            avatar.y = top
            avatar.vy = 0.0
            result = BOUND_CEILING
        if avatar.y >= bottom:
            avatar.y = bottom
            avatar.vy = 0.0
            result = BOUND_FLOOR
        return result

    def tick_spawner(self, state: SimulationState, dt: float, interval: float, gap: float) -> Optional[ObstaclePair]:
        """
        Advance the spawn timer and append an obstacle when it elapses.

        Returns:
            The spawned obstacle, or None.
        """
        state.spawn_timer += dt
        if state.spawn_timer < interval:
            return None

        state.spawn_timer = 0.0
        pipe = ObstaclePair(
            x=self.spawn_x,
            gap_center_y=self._sampler.sample_center(gap),
            scored=False
        )
        state.obstacles.append(pipe)
        return pipe

    def advance_obstacles(self, state: SimulationState, dt: float, speed: float) -> int:
        """
        Move every obstacle left and drop the ones fully off screen.

        Returns:
            Number of obstacles removed.
        """
        dx = speed * dt
        for pipe in state.obstacles:
            pipe.x -= dx

        before = len(state.obstacles)
        width = self._pipe_width
        state.obstacles = [p for p in state.obstacles if p.trailing_edge(width) > 0]
        return before - len(state.obstacles)

    def segments(self, pipe: ObstaclePair, gap: float) -> Tuple[Tuple[float, float, float, float], Tuple[float, float, float, float]]:
        """
        Top and bottom rectangles of an obstacle as (x, y, w, h).
        """
        gap_top = pipe.gap_center_y - gap / 2
        gap_bottom = pipe.gap_center_y + gap / 2
        top = (pipe.x, 0.0, self._pipe_width, gap_top)
        bottom = (pipe.x, gap_bottom, self._pipe_width, self._floor_y - gap_bottom)
        return top, bottom

    def hits_obstacle(self, avatar: Avatar, pipe: ObstaclePair, gap: float) -> bool:
        """True if the avatar circle overlaps either segment of ``pipe``."""
        top, bottom = self.segments(pipe, gap)
        cx, cy, r = self._avatar_x, avatar.y, self._radius
        return circle_intersects_rect(cx, cy, r, *top) or circle_intersects_rect(cx, cy, r, *bottom)

    def first_collision(self, state: SimulationState, gap: float) -> Optional[ObstaclePair]:
        """
        First obstacle, in spawn order, the avatar overlaps.

        The scan stops at the first hit.
        """
        for pipe in state.obstacles:
            if self.hits_obstacle(state.avatar, pipe, gap):
                return pipe
        return None
