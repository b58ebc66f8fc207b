"""
Flappy Core - The game simulation and its boundaries.

This module provides the core game simulation, the phase controller that
interprets input commands, the frame driver, and the audio, persistence and
rendering collaborators.

Main exports:
- CoreGame: Game simulation (physics, obstacles, scoring, phases)
- PhaseController / Command: Input commands mapped to phase transitions
- FrameDriver / FrameClock: Variable-timestep loop with clamped dt
- FlappyEnv: Gymnasium environment with a fixed timestep
- GameConfig: Configuration loaded from game_config.yaml
"""

from flappy.flappy_core.config_loader import GameConfig, get_config, load_config
from flappy.flappy_core.sim_state import Phase
from flappy.flappy_core.game import CoreGame, TickResult
from flappy.flappy_core.controller import Command, PhaseController
from flappy.flappy_core.driver import FrameClock, FrameDriver
from flappy.flappy_core.audio import AudioCues, NullAudio, SynthAudio
from flappy.flappy_core.persistence import (
    BestScoreStore,
    JsonBestScoreStore,
    MemoryBestScoreStore,
)
from flappy.flappy_core.state_snapshot import GameSnapshot
from flappy.flappy_core.env_gym import FlappyEnv

__all__ = [
    "GameConfig",
    "get_config",
    "load_config",
    "Phase",
    "CoreGame",
    "TickResult",
    "Command",
    "PhaseController",
    "FrameClock",
    "FrameDriver",
    "AudioCues",
    "NullAudio",
    "SynthAudio",
    "BestScoreStore",
    "JsonBestScoreStore",
    "MemoryBestScoreStore",
    "GameSnapshot",
    "FlappyEnv",
]
