"""
Human Play Mode
================

Play the game in a window with keyboard and mouse.

Controls:
    - Space / left click: Start a run, or flap while playing
    - R: Back to the start screen
    - M: Toggle mute
    - C: Clear the saved best score
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

import pygame

from flappy.flappy_core.audio import SynthAudio
from flappy.flappy_core.config_loader import GameConfig, load_config
from flappy.flappy_core.controller import Command, PhaseController
from flappy.flappy_core.driver import FrameDriver
from flappy.flappy_core.game import CoreGame
from flappy.flappy_core.persistence import JsonBestScoreStore
from flappy.flappy_core.render_full_pygame import PygameRenderer
from flappy.flappy_core.sim_state import Phase
from flappy.flappy_core.state_snapshot import GameSnapshot

KEY_COMMANDS = {
    pygame.K_SPACE: Command.PRIMARY_ACTION,
    pygame.K_r: Command.RESET,
    pygame.K_m: Command.TOGGLE_MUTE,
    pygame.K_c: Command.CLEAR_BEST,
}


class HumanPlayer:
    """
    Interactive game window.

    Input is translated to commands, then each frame the driver updates the
    game with the clamped elapsed time and the renderer draws the snapshot.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: Optional[int] = None,
        window_height: Optional[int] = None,
        target_fps: int = 60
    ):
        if config is None:
            config = load_config()

        self._config = config
        self._window_width = window_width or config.board.width
        self._window_height = window_height or config.board.height
        self._target_fps = target_fps

        pygame.init()

        self._audio = SynthAudio(
            sample_rate=config.audio.sample_rate,
            channels=config.audio.channels
        )
        self._game = CoreGame(
            config=config,
            seed=seed,
            audio=self._audio,
            store=JsonBestScoreStore.from_config(config)
        )
        self._controller = PhaseController(self._game)
        self._renderer = PygameRenderer(config)
        self._driver = FrameDriver(self._game, self._draw)
        self._clock = pygame.time.Clock()

        self._running = True
        self._last_phase = self._game.phase

    def run(self) -> int:
        """Run the game loop. Returns the best score."""
        print("=== Flappy ===")
        print("Space or click to start and flap")
        print("R for start screen, M to mute, C to clear best, ESC to quit")
        print()

        self._driver.clock.restart()
        while self._running:
            self._handle_events()
            self._driver.frame()
            self._report_phase_change()
            self._clock.tick(self._target_fps)

        best = self._game.best_score
        self._renderer.close()
        self._audio.close()
        pygame.quit()
        return best

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key in KEY_COMMANDS:
                    self._controller.handle(KEY_COMMANDS[event.key])

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    self._controller.handle(Command.PRIMARY_ACTION)

    def _report_phase_change(self) -> None:
        phase = self._game.phase
        if phase is self._last_phase:
            return
        if phase is Phase.GAME_OVER:
            print(f"GAME OVER - Score: {self._game.score}  Best: {self._game.best_score}")
        self._last_phase = phase

    def _draw(self, snapshot: GameSnapshot) -> None:
        self._renderer.render_to_screen(snapshot, self._window_width, self._window_height)
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Flappy interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for gap placement")
    parser.add_argument("--width", type=int, default=None, help="Window width (default: board width)")
    parser.add_argument("--height", type=int, default=None, help="Window height (default: board height)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    config = load_config()
    player = HumanPlayer(
        config=config,
        seed=args.seed,
        window_width=args.width,
        window_height=args.height,
        target_fps=args.fps
    )
    best = player.run()
    print(f"\nBest Score: {best}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
