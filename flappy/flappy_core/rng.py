"""
RNG - Gap Placement
===================

Seeded uniform sampling of obstacle gap centers.

A private ``random.Random`` keeps runs reproducible for a given seed
without touching the global generator.
"""

from __future__ import annotations

import random
from typing import Any, Optional, Tuple


class GapSampler:
    """
    Samples gap centers so the whole gap stays inside the playable band.

    The valid band for a gap of height ``gap`` is
    ``[margin + gap / 2, floor_y - margin - gap / 2]``.
    """

    def __init__(self, margin: float, floor_y: float, seed: Optional[int] = None):
        """
        Initialize gap sampler.

        Args:
            margin: Clearance kept between the gap and the ceiling/floor.
            floor_y: Y coordinate of the ground surface.
            seed: Random seed for reproducibility. Random if None.
        """
        self._margin = margin
        self._floor_y = floor_y
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def center_range(self, gap: float) -> Tuple[float, float]:
        """
        Get the valid gap center range for a gap height.

        Args:
            gap: Gap height in pixels.

        Returns:
            (min_center, max_center) tuple. Collapses to the midpoint if the
            gap is too tall to fit between the margins.
        """
        lo = self._margin + gap / 2
        hi = self._floor_y - self._margin - gap / 2
        if lo > hi:
            mid = self._floor_y / 2
            return (mid, mid)
        return (lo, hi)

    def sample_center(self, gap: float) -> float:
        """Draw a gap center uniformly from the valid range."""
        lo, hi = self.center_range(gap)
        return lo + self._rng.random() * (hi - lo)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the generator.

        Args:
            seed: New random seed. Reuses the current seed if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)

    def get_state(self) -> Any:
        """Opaque generator state for checkpointing."""
        return self._rng.getstate()

    def set_state(self, state: Any) -> None:
        """Restore state captured by ``get_state``."""
        self._rng.setstate(state)
