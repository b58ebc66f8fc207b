"""
Core Game
=========

Main game orchestrator combining physics, difficulty, scoring and phases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flappy.flappy_core.audio import AudioCues, NullAudio
from flappy.flappy_core.config_loader import GameConfig, get_config
from flappy.flappy_core.difficulty import DifficultyLevels, DifficultyModel
from flappy.flappy_core.persistence import BestScoreStore
from flappy.flappy_core.physics_world import BOUND_FLOOR, PhysicsWorld
from flappy.flappy_core.scoring import ScoreEvent, ScoreTracker
from flappy.flappy_core.sim_state import Phase, SimulationState
from flappy.flappy_core.state_snapshot import GameSnapshot, ObstacleView

logger = logging.getLogger(__name__)

END_FLOOR = "floor"
END_OBSTACLE = "obstacle"


@dataclass
class TickResult:
    """Result of a single update."""
    phase: Phase
    dt: float = 0.0
    spawned: bool = False
    pruned: int = 0
    score_events: List[ScoreEvent] = field(default_factory=list)
    ended: bool = False
    end_reason: str = ""

    @property
    def points(self) -> int:
        return len(self.score_events)


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Simulation state (avatar, obstacles, timer, score, phase)
    - Physics world
    - Difficulty ramp
    - Scoring and best score
    - Audio cues

    One update = one variable-length tick. The update is a no-op outside
    the PLAYING phase.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        audio: Optional[AudioCues] = None,
        store: Optional[BestScoreStore] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for gap placement.
            audio: Cue sink. Silent if None.
            store: Best score storage. In-memory if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._audio = audio if audio is not None else NullAudio()

        # Initialize subsystems
        self._physics = PhysicsWorld(config, seed)
        self._difficulty = DifficultyModel(config)
        self._scorer = ScoreTracker(
            store=store,
            avatar_x=config.avatar.x,
            pipe_width=config.obstacles.width
        )

        self._start_y = config.avatar_start_y
        self._state = SimulationState.initial(self._start_y)
        self._runs_started = 0

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def state(self) -> SimulationState:
        """Live simulation state."""
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def score(self) -> int:
        """Current run score."""
        return self._state.score

    @property
    def best_score(self) -> int:
        return self._scorer.best_score

    @property
    def physics(self) -> PhysicsWorld:
        return self._physics

    @property
    def difficulty(self) -> DifficultyModel:
        return self._difficulty

    @property
    def scorer(self) -> ScoreTracker:
        return self._scorer

    @property
    def audio(self) -> AudioCues:
        return self._audio

    @property
    def runs_started(self) -> int:
        return self._runs_started

    @property
    def is_over(self) -> bool:
        return self._state.phase is Phase.GAME_OVER

    def levels(self) -> DifficultyLevels:
        """Difficulty values for the live score."""
        return self._difficulty.levels(self._state.score)

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Go back to the start screen with a fresh run.

        Args:
            seed: New gap seed. Keeps the current one if None.

        Returns:
            Snapshot of the start screen.
        """
        if seed is not None:
            self._seed = seed
            self._physics.sampler.reset(seed)
        self._state.reset_run(self._start_y)
        self._state.phase = Phase.START
        return self.snapshot()

    def start_run(self, with_impulse: bool = True) -> None:
        """Reset the run and enter PLAYING, optionally jumping straight away."""
        self._state.reset_run(self._start_y)
        self._state.phase = Phase.PLAYING
        self._runs_started += 1
        logger.info(f"Run {self._runs_started} started (best {self.best_score})")
        if with_impulse:
            self.flap()

    def flap(self) -> None:
        """Apply the upward impulse and play the jump cue."""
        self._state.avatar.vy = self._config.physics.jump_velocity
        self._audio.jump()

    def clear_best(self) -> None:
        self._scorer.clear_best()

    def _end_run(self, reason: str) -> None:
        state = self._state
        state.avatar.vy = 0.0
        state.phase = Phase.GAME_OVER
        self._scorer.record(state.score)
        self._audio.hit()
        logger.info(f"Run over ({reason}) with score {state.score}, best {self.best_score}")

    def update(self, dt: float) -> TickResult:
        """
        Advance the simulation by ``dt`` seconds.

        Order within a tick: integrate, ceiling, floor, spawn, move/prune,
        score, collide. A floor hit ends the tick early. Speed, gap and
        spawn interval come from the score at the start of the tick.

        Args:
            dt: Elapsed seconds, already clamped by the caller.

        Returns:
            TickResult describing what happened.
        """
        state = self._state
        if not state.is_playing:
            return TickResult(phase=state.phase)

        result = TickResult(phase=Phase.PLAYING, dt=dt)
        physics = self._physics

        # Read once per tick; a point scored below takes effect next tick
        levels = self._difficulty.levels(state.score)

        # Avatar
        physics.integrate(state.avatar, dt)
        if physics.resolve_bounds(state.avatar) == BOUND_FLOOR:
            self._end_run(END_FLOOR)
            result.phase = state.phase
            result.ended = True
            result.end_reason = END_FLOOR
            return result

        # Spawn before move so a new obstacle is never pruned on its first tick
        spawned = physics.tick_spawner(
            state,
            dt,
            interval=levels.spawn_interval,
            gap=levels.pipe_gap
        )
        result.spawned = spawned is not None
        result.pruned = physics.advance_obstacles(state, dt, levels.pipe_speed)

        # Scoring
        result.score_events = self._scorer.apply_passes(state)
        for _ in result.score_events:
            self._audio.score()

        hit = physics.first_collision(state, levels.pipe_gap)
        if hit is not None:
            self._end_run(END_OBSTACLE)
            result.ended = True
            result.end_reason = END_OBSTACLE

        result.phase = state.phase
        return result

    def snapshot(self) -> GameSnapshot:
        """Build the read-only view of the current frame."""
        state = self._state
        levels = self.levels()
        return GameSnapshot(
            phase=state.phase,
            score=state.score,
            best_score=self._scorer.best_score,
            muted=self._audio.is_muted(),
            avatar_x=self._physics.avatar_x,
            avatar_y=state.avatar.y,
            avatar_vy=state.avatar.vy,
            avatar_radius=self._physics.radius,
            obstacles=tuple(
                ObstacleView(x=p.x, gap_center_y=p.gap_center_y, scored=p.scored)
                for p in state.obstacles
            ),
            pipe_speed=levels.pipe_speed,
            pipe_gap=levels.pipe_gap,
            spawn_interval=levels.spawn_interval,
            board_width=float(self._config.board.width),
            board_height=float(self._config.board.height),
            floor_y=self._physics.floor_y,
            pipe_width=self._physics.pipe_width
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._state.score,
            "best_score": self._scorer.best_score,
            "phase": self._state.phase.value,
            "obstacles": len(self._state.obstacles),
            "runs_started": self._runs_started,
        }
