"""
Phase Controller
================

Interprets the four normalized input commands against the current phase.

    PRIMARY_ACTION  START/GAME_OVER -> fresh run in PLAYING with a jump
                    PLAYING         -> jump
    RESET           any             -> START with a cleared run
    CLEAR_BEST      any             -> best score back to 0
    TOGGLE_MUTE     any             -> flip audio mute

There are no other transitions.
"""

from __future__ import annotations

import logging
from enum import Enum

from flappy.flappy_core.game import CoreGame
from flappy.flappy_core.sim_state import Phase

logger = logging.getLogger(__name__)


class Command(Enum):
    """Normalized input events."""
    PRIMARY_ACTION = "primary_action"
    RESET = "reset"
    TOGGLE_MUTE = "toggle_mute"
    CLEAR_BEST = "clear_best"


class PhaseController:
    """Dispatches commands to the game and its audio collaborator."""

    def __init__(self, game: CoreGame):
        self._game = game
        self._audio = game.audio

    @property
    def game(self) -> CoreGame:
        return self._game

    def handle(self, command: Command) -> Phase:
        """
        Apply a command.

        Returns:
            Phase after the command.
        """
        if command is Command.PRIMARY_ACTION:
            self.primary_action()
        elif command is Command.RESET:
            self._game.reset()
        elif command is Command.CLEAR_BEST:
            self._game.clear_best()
        elif command is Command.TOGGLE_MUTE:
            muted = self._audio.toggle_mute()
            logger.debug(f"Audio muted: {muted}")
        return self._game.phase

    def primary_action(self) -> None:
        # Fire-and-forget; the unlock finishes on its own thread
        self._audio.unlock()

        if self._game.phase is Phase.PLAYING:
            self._game.flap()
        else:
            self._game.start_run(with_impulse=True)
