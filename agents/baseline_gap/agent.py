"""
Baseline Gap Agent - Flaps to stay level with the next gap.

This is a simple heuristic agent that reads the next obstacle's gap edges
from the observation and flaps whenever the avatar is both falling and
below a target height inside the gap.

Strategy:
- Aim slightly below the gap center, since a flap always carries the
  avatar upwards
- Flap only while falling, so consecutive flaps don't stack into the ceiling
- Do nothing outside the PLAYING phase
"""

import numpy as np
from typing import Any, Dict, Optional

ACTION_IDLE = 0
ACTION_FLAP = 1

PHASE_PLAYING = 1


class FlappyAgent:
    """
    Baseline agent that keeps the avatar near the next gap.

    Args:
        target_offset: Fraction of the gap height below the center to aim at.
        jitter: Maximum random change of the aim, in pixels.
        debug: If True, print decisions to stdout.
    """

    def __init__(self, target_offset: float = 0.15, jitter: float = 0.0, debug: bool = False):
        self.target_offset = target_offset
        self.jitter = jitter
        self.debug = debug
        self._rng = np.random.default_rng()

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset agent state for a new episode.

        Args:
            seed: Optional random seed for reproducibility.
        """
        if seed is not None:
            self._rng = np.random.default_rng(seed)

    def target_y(self, observation: Dict[str, Any]) -> float:
        """Height the agent tries to hold for the next gap."""
        top = float(observation["next_gap_top"])
        bottom = float(observation["next_gap_bottom"])
        target = (top + bottom) / 2 + (bottom - top) * self.target_offset
        if self.jitter > 0:
            target += self._rng.uniform(-self.jitter, self.jitter)
        return target

    def act(self, observation: Dict[str, Any], debug: bool = False) -> int:
        """
        Decide whether to flap.

        Args:
            observation: Dict of numpy arrays from the environment.
            debug: If True, print debug info for this step.

        Returns:
            1 to flap, 0 to do nothing.
        """
        if int(observation["phase"]) != PHASE_PLAYING:
            return ACTION_IDLE

        y = float(observation["avatar_y"])
        vy = float(observation["avatar_vy"])
        target = self.target_y(observation)

        action = ACTION_FLAP if (y > target and vy >= 0) else ACTION_IDLE

        if debug or self.debug:
            print(f"[Gap Agent] y={y:.1f} vy={vy:.1f} "
                  f"target={target:.1f} dx={float(observation['next_dx']):.1f} "
                  f"action={action}")

        return action


# Convenience function to create agent (used by tools)
def create_agent(**kwargs) -> FlappyAgent:
    """Factory function to create an agent instance."""
    return FlappyAgent(**kwargs)
