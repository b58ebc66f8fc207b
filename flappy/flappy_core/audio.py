"""
Audio Cues
==========

The audio boundary of the game: three cues (jump, score, hit), a mute flag
and a non-blocking unlock.

``SynthAudio`` synthesizes short beeps with numpy and plays them through
pygame's mixer. Opening the mixer can be slow or fail on machines without a
sound device, so it happens on a background thread started by ``unlock()``.
Cues requested before the mixer is ready, or while muted, are dropped.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional

import numpy as np
import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# Envelope floor used for the exponential ramps (silence, but non-zero)
_ENV_FLOOR = 0.0001


class UnlockState(Enum):
    """Progress of the audio unlock."""
    LOCKED = "locked"
    UNLOCKING = "unlocking"
    UNLOCKED = "unlocked"
    FAILED = "failed"


def oscillator(wave: str, freq: float, t: np.ndarray) -> np.ndarray:
    """Unit-amplitude waveform sampled at times ``t``."""
    phase = (t * freq) % 1.0
    if wave == "sine":
        return np.sin(2 * np.pi * freq * t)
    if wave == "square":
        return np.where(phase < 0.5, 1.0, -1.0)
    if wave == "triangle":
        return 4.0 * np.abs(phase - 0.5) - 1.0
    if wave == "sawtooth":
        return 2.0 * phase - 1.0
    raise ValueError(f"Unknown waveform: {wave}")


def render_tone(
    freq: float,
    duration: float,
    wave: str = "sine",
    gain: float = 0.05,
    ramp: float = 0.02,
    sample_rate: int = SAMPLE_RATE
) -> np.ndarray:
    """
    Render one enveloped beep as float32 samples in [-1, 1].

    The envelope rises exponentially to ``gain`` over ``ramp`` seconds and
    decays exponentially back to silence at ``duration``, which avoids
    clicks at either end.
    """
    n = max(1, int(sample_rate * duration))
    t = np.arange(n, dtype=np.float64) / sample_rate

    ramp = max(0.001, min(ramp, duration))
    env = np.empty(n, dtype=np.float64)
    attack = t < ramp
    env[attack] = _ENV_FLOOR * (gain / _ENV_FLOOR) ** (t[attack] / ramp)
    decay_len = max(duration - ramp, 1e-6)
    tail = ~attack
    env[tail] = gain * (_ENV_FLOOR / gain) ** ((t[tail] - ramp) / decay_len)

    return (oscillator(wave, freq, t) * env).astype(np.float32)


def mix(*parts: tuple, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """
    Mix ``(offset_seconds, samples)`` parts into a single buffer.
    """
    length = 0
    for offset, samples in parts:
        length = max(length, int(offset * sample_rate) + len(samples))
    out = np.zeros(length, dtype=np.float32)
    for offset, samples in parts:
        start = int(offset * sample_rate)
        out[start:start + len(samples)] += samples
    return np.clip(out, -1.0, 1.0)


def build_cue_samples(sample_rate: int = SAMPLE_RATE) -> Dict[str, np.ndarray]:
    """Float samples for every cue."""
    jump = render_tone(720, 0.07, "square", gain=0.045, ramp=0.01, sample_rate=sample_rate)
    ding = render_tone(980, 0.06, "sine", gain=0.05, ramp=0.01, sample_rate=sample_rate)
    dong = render_tone(1220, 0.05, "sine", gain=0.04, ramp=0.01, sample_rate=sample_rate)
    hit = render_tone(180, 0.12, "triangle", gain=0.08, ramp=0.01, sample_rate=sample_rate)
    return {
        "jump": jump,
        "score": mix((0.0, ding), (0.035, dong), sample_rate=sample_rate),
        "hit": hit,
    }


def to_int16_stereo(samples: np.ndarray) -> np.ndarray:
    """Convert mono float samples to interleaved 16-bit stereo."""
    mono = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    return np.ascontiguousarray(np.column_stack((mono, mono)))


class AudioCues(ABC):
    """
    Interface the game core talks to.

    Cue methods return nothing and must never raise. Mute handling is
    shared; subclasses supply the cues and the unlock.
    """

    def __init__(self):
        self._muted = False

    @abstractmethod
    def jump(self) -> None:
        pass

    @abstractmethod
    def score(self) -> None:
        pass

    @abstractmethod
    def hit(self) -> None:
        pass

    @abstractmethod
    def unlock(self) -> None:
        """Start making audio playable. Must return immediately."""
        pass

    @property
    @abstractmethod
    def unlock_state(self) -> UnlockState:
        pass

    def toggle_mute(self) -> bool:
        """Flip the mute flag and return the new value."""
        self._muted = not self._muted
        return self._muted

    def is_muted(self) -> bool:
        return self._muted

    def close(self) -> None:
        pass


class NullAudio(AudioCues):
    """Silent implementation for headless runs."""

    def jump(self) -> None:
        pass

    def score(self) -> None:
        pass

    def hit(self) -> None:
        pass

    def unlock(self) -> None:
        pass

    @property
    def unlock_state(self) -> UnlockState:
        return UnlockState.UNLOCKED


class SynthAudio(AudioCues):
    """
    Synthesized beeps through pygame.mixer.

    Usage:
        audio = SynthAudio()
        audio.unlock()      # returns immediately
        audio.jump()        # dropped until the mixer is up
    """

    def __init__(self, sample_rate: int = SAMPLE_RATE, channels: int = 8):
        super().__init__()
        self._sample_rate = sample_rate
        self._channels = channels
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._state = UnlockState.LOCKED
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def unlock_state(self) -> UnlockState:
        return self._state

    def unlock(self) -> None:
        with self._lock:
            if self._state in (UnlockState.UNLOCKING, UnlockState.UNLOCKED):
                return
            self._state = UnlockState.UNLOCKING

        self._thread = threading.Thread(
            target=self._unlock_worker,
            name="audio-unlock",
            daemon=True
        )
        self._thread.start()

    def wait_unlocked(self, timeout: Optional[float] = None) -> bool:
        """Block until the unlock finishes. For tools and tests only."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self._state is UnlockState.UNLOCKED

    def _unlock_worker(self) -> None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=self._sample_rate, size=-16, channels=2, buffer=512)
            pygame.mixer.set_num_channels(self._channels)
            frequency = pygame.mixer.get_init()[0]

            sounds = {}
            for name, samples in build_cue_samples(frequency).items():
                sounds[name] = pygame.mixer.Sound(buffer=to_int16_stereo(samples).tobytes())
            self._sounds = sounds
        except (pygame.error, OSError, ValueError) as e:
            logger.warning(f"Audio unlock failed, cues will be silent: {e}")
            self._state = UnlockState.FAILED
            return

        self._state = UnlockState.UNLOCKED
        logger.info(f"Audio unlocked at {frequency} Hz")

    def _play(self, name: str) -> None:
        if self._muted or self._state is not UnlockState.UNLOCKED:
            return
        sound = self._sounds.get(name)
        if sound is not None:
            sound.play()

    def jump(self) -> None:
        self._play("jump")

    def score(self) -> None:
        self._play("score")

    def hit(self) -> None:
        self._play("hit")

    def close(self) -> None:
        self._sounds.clear()
        if pygame.mixer.get_init():
            pygame.mixer.quit()
        self._state = UnlockState.LOCKED
