"""
Shared fixtures.
"""

import os

# Headless pygame for renderer and audio tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from flappy.flappy_core.audio import NullAudio
from flappy.flappy_core.config_loader import load_config
from flappy.flappy_core.game import CoreGame
from flappy.flappy_core.persistence import MemoryBestScoreStore


class RecordingAudio(NullAudio):
    """Silent audio that counts every call."""

    def __init__(self):
        super().__init__()
        self.cues = []
        self.unlocks = 0

    def jump(self) -> None:
        self.cues.append("jump")

    def score(self) -> None:
        self.cues.append("score")

    def hit(self) -> None:
        self.cues.append("hit")

    def unlock(self) -> None:
        self.unlocks += 1


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def store():
    return MemoryBestScoreStore()


@pytest.fixture
def game(config, audio, store):
    return CoreGame(config=config, seed=42, audio=audio, store=store)
