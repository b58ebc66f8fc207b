"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


@dataclass(frozen=True)
class BoardConfig:
    """Visible area geometry."""
    width: int                   # Board width in pixels
    height: int                  # Board height in pixels
    ground_height: int           # Height of the ground band at the bottom

    @property
    def floor_y(self) -> float:
        """Y coordinate of the top of the ground."""
        return float(self.height - self.ground_height)


@dataclass(frozen=True)
class PhysicsConfig:
    """Physics integration parameters."""
    gravity: float               # px/s^2
    jump_velocity: float         # px/s, negative is upwards
    max_dt: float                # Clamp for a single frame's elapsed time


@dataclass(frozen=True)
class AvatarConfig:
    """The falling avatar."""
    x: float                     # Fixed horizontal coordinate
    radius: float
    start_y_ratio: float         # Start height as a fraction of board height


@dataclass(frozen=True)
class ObstacleConfig:
    """Obstacle column geometry."""
    width: float
    margin: float                # Gap clearance from ceiling and floor
    cap_height: int
    cap_overhang: int


@dataclass(frozen=True)
class DifficultyConfig:
    """Score-driven difficulty ramp constants."""
    base_speed: float
    speed_per_point: float
    max_speed: float
    base_gap: float
    gap_shrink_per_point: float
    min_gap: float
    base_spawn_every: float
    spawn_accel_per_point: float
    min_spawn_every: float


@dataclass(frozen=True)
class PersistenceConfig:
    """Best score storage."""
    key: str                     # Versioned key the best score is stored under
    path: str                    # JSON file location (``~`` is expanded)

    @property
    def resolved_path(self) -> Path:
        return Path(os.path.expanduser(self.path))


@dataclass(frozen=True)
class AudioConfig:
    """Cue synthesis parameters."""
    sample_rate: int
    channels: int


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_obstacles: int
    image_width: int
    image_height: int


@dataclass(frozen=True)
class EnvConfig:
    """Agent environment stepping."""
    dt: float
    frame_skip: int
    max_steps: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    physics: PhysicsConfig
    avatar: AvatarConfig
    obstacles: ObstacleConfig
    difficulty: DifficultyConfig
    persistence: PersistenceConfig
    audio: AudioConfig
    observation: ObservationConfig
    env: EnvConfig

    @property
    def floor_y(self) -> float:
        """Y coordinate of the ground surface."""
        return self.board.floor_y

    @property
    def avatar_start_y(self) -> float:
        """Y coordinate the avatar is placed at when a run starts."""
        return self.board.height * self.avatar.start_y_ratio


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    board = config.board
    if board.width <= 0 or board.height <= 0:
        raise ValueError(f"Board size must be positive, got {board.width}x{board.height}")
    if not 0 <= board.ground_height < board.height:
        raise ValueError(
            f"ground_height ({board.ground_height}) must be in [0, height={board.height})"
        )

    if config.physics.max_dt <= 0:
        raise ValueError(f"max_dt must be positive, got {config.physics.max_dt}")

    if config.avatar.radius <= 0:
        raise ValueError(f"Avatar radius must be positive, got {config.avatar.radius}")
    start_y = config.avatar_start_y
    if not config.avatar.radius <= start_y <= config.floor_y - config.avatar.radius:
        raise ValueError(f"Avatar start y ({start_y}) is outside the playable band")

    if config.obstacles.width <= 0:
        raise ValueError(f"Obstacle width must be positive, got {config.obstacles.width}")

    d = config.difficulty
    if d.max_speed < d.base_speed:
        raise ValueError(f"max_speed ({d.max_speed}) must be >= base_speed ({d.base_speed})")
    if d.min_gap > d.base_gap:
        raise ValueError(f"min_gap ({d.min_gap}) must be <= base_gap ({d.base_gap})")
    if d.min_spawn_every > d.base_spawn_every:
        raise ValueError(
            f"min_spawn_every ({d.min_spawn_every}) must be <= "
            f"base_spawn_every ({d.base_spawn_every})"
        )
    if d.min_spawn_every <= 0:
        raise ValueError(f"min_spawn_every must be positive, got {d.min_spawn_every}")

    # The widest gap must fit between the margins or spawning has no valid range
    playable = config.floor_y - 2 * config.obstacles.margin
    if d.base_gap > playable:
        raise ValueError(
            f"base_gap ({d.base_gap}) does not fit between margins "
            f"(playable height {playable})"
        )

    if not config.persistence.key:
        raise ValueError("persistence.key must not be empty")

    if config.observation.max_obstacles < 1:
        raise ValueError(
            f"observation.max_obstacles must be >= 1, got {config.observation.max_obstacles}"
        )

    if config.env.dt <= 0 or config.env.frame_skip < 1:
        raise ValueError("env.dt must be positive and env.frame_skip >= 1")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"]),
        ground_height=int(board_data.get("ground_height", 70))
    )

    physics_data = raw["physics"]
    physics = PhysicsConfig(
        gravity=float(physics_data["gravity"]),
        jump_velocity=float(physics_data["jump_velocity"]),
        max_dt=float(physics_data.get("max_dt", 0.05))
    )

    avatar_data = raw["avatar"]
    avatar = AvatarConfig(
        x=float(avatar_data["x"]),
        radius=float(avatar_data["radius"]),
        start_y_ratio=float(avatar_data.get("start_y_ratio", 0.35))
    )

    obstacle_data = raw["obstacles"]
    obstacles = ObstacleConfig(
        width=float(obstacle_data["width"]),
        margin=float(obstacle_data["margin"]),
        cap_height=int(obstacle_data.get("cap_height", 18)),
        cap_overhang=int(obstacle_data.get("cap_overhang", 6))
    )

    diff_data = raw["difficulty"]
    difficulty = DifficultyConfig(
        base_speed=float(diff_data["base_speed"]),
        speed_per_point=float(diff_data["speed_per_point"]),
        max_speed=float(diff_data["max_speed"]),
        base_gap=float(diff_data["base_gap"]),
        gap_shrink_per_point=float(diff_data["gap_shrink_per_point"]),
        min_gap=float(diff_data["min_gap"]),
        base_spawn_every=float(diff_data["base_spawn_every"]),
        spawn_accel_per_point=float(diff_data["spawn_accel_per_point"]),
        min_spawn_every=float(diff_data["min_spawn_every"])
    )

    # Optional sections
    persist_data = raw.get("persistence", {})
    persistence = PersistenceConfig(
        key=str(persist_data.get("key", "flappy_best_score_v1")),
        path=str(persist_data.get("path", "~/.flappy_core/best_score.json"))
    )

    audio_data = raw.get("audio", {})
    audio = AudioConfig(
        sample_rate=int(audio_data.get("sample_rate", 44100)),
        channels=int(audio_data.get("channels", 8))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_obstacles=int(obs_data.get("max_obstacles", 6)),
        image_width=int(obs_data.get("image_width", 200)),
        image_height=int(obs_data.get("image_height", 300))
    )

    env_data = raw.get("env", {})
    env = EnvConfig(
        dt=float(env_data.get("dt", 1.0 / 60.0)),
        frame_skip=int(env_data.get("frame_skip", 1)),
        max_steps=int(env_data.get("max_steps", 20000))
    )

    config = GameConfig(
        board=board,
        physics=physics,
        avatar=avatar,
        obstacles=obstacles,
        difficulty=difficulty,
        persistence=persistence,
        audio=audio,
        observation=observation,
        env=env
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
