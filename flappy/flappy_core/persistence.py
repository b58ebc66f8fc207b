"""
Best Score Persistence
======================

Best-effort storage of a single non-negative integer under a versioned key.

Stores never raise: a missing, unreadable or corrupted value loads as 0 and a
failed write is logged and ignored.
"""

from __future__ import annotations

import json
import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flappy.flappy_core.config_loader import GameConfig, get_config

logger = logging.getLogger(__name__)


def coerce_score(raw: Any) -> int:
    """
    Interpret a stored value as a best score.

    Non-numeric, non-finite and negative values become 0; fractions are
    floored.
    """
    if isinstance(raw, bool):
        return 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    return int(math.floor(value))


class BestScoreStore(ABC):
    """Interface for best score storage."""

    @abstractmethod
    def load(self) -> int:
        """Stored best score, 0 if there is none."""
        pass

    @abstractmethod
    def save(self, value: int) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget the stored value."""
        pass


class MemoryBestScoreStore(BestScoreStore):
    """In-process store. Used by agents, benchmarks and tests."""

    def __init__(self, initial: int = 0):
        self._value: Optional[int] = coerce_score(initial) if initial else None
        self.saves = 0

    def load(self) -> int:
        return self._value if self._value is not None else 0

    def save(self, value: int) -> None:
        self._value = coerce_score(value)
        self.saves += 1

    def clear(self) -> None:
        self._value = None


class JsonBestScoreStore(BestScoreStore):
    """
    Keeps the best score in a small JSON document on disk.

    The file holds a mapping so unrelated keys written by other versions
    survive a save::

        {"flappy_best_score_v1": 42}
    """

    def __init__(
        self,
        path: Union[str, Path],
        key: str = "flappy_best_score_v1"
    ):
        """
        Initialize JSON store.

        Args:
            path: File to read and write. Parent directories are created on save.
            key: Versioned key the score lives under.
        """
        self._path = Path(path)
        self._key = key

    @classmethod
    def from_config(cls, config: Optional[GameConfig] = None) -> "JsonBestScoreStore":
        if config is None:
            config = get_config()
        return cls(config.persistence.resolved_path, config.persistence.key)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def key(self) -> str:
        return self._key

    def _read_document(self) -> Dict[str, Any]:
        with open(self._path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self._path}")
        return data

    def _write_document(self, data: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f)
        tmp_path.replace(self._path)

    def load(self) -> int:
        """Stored best score, or 0 on absence or any failure."""
        try:
            data = self._read_document()
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read best score from {self._path}: {e}")
            return 0
        return coerce_score(data.get(self._key))

    def save(self, value: int) -> None:
        """Write ``value`` under the key; failures are logged and ignored."""
        try:
            try:
                data = self._read_document()
            except (OSError, ValueError):
                data = {}
            data[self._key] = coerce_score(value)
            self._write_document(data)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not save best score to {self._path}: {e}")

    def clear(self) -> None:
        """Remove the key; the file is deleted once it is empty."""
        try:
            data = self._read_document()
        except FileNotFoundError:
            return
        except (OSError, ValueError):
            data = {}
        data.pop(self._key, None)
        try:
            if data:
                self._write_document(data)
            else:
                self._path.unlink()
        except OSError as e:
            logger.warning(f"Could not clear best score at {self._path}: {e}")
