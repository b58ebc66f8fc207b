"""
Full Pygame Renderer
====================

Draws the complete scene with pygame: sky, capped pipes, ground, bird, HUD
and the start / game-over overlays. Supports both display mode (human play)
and headless RGB output.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

import numpy as np
import pygame

from flappy.flappy_core.config_loader import GameConfig, get_config
from flappy.flappy_core.sim_state import Phase
from flappy.flappy_core.state_snapshot import GameSnapshot, ObstacleView

HELP_LINE = "Space/click: action  |  R: start  |  M: mute  |  C: clear best"


class PygameRenderer:
    """
    Full-featured renderer using pygame.

    The scene is drawn at board resolution and scaled to the requested size.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._board_size = (config.board.width, config.board.height)
        self._cap_height = config.obstacles.cap_height
        self._cap_overhang = config.obstacles.cap_overhang

        pygame.font.init()
        self._fonts: Dict[int, pygame.font.Font] = {}

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        # Off-screen board surface, reused every frame
        self._board = pygame.Surface(self._board_size)
        self._overlay = pygame.Surface(self._board_size, pygame.SRCALPHA)

        # Colors
        self._sky = (135, 206, 235)
        self._white = (255, 255, 255)
        self._black = (0, 0, 0)
        self._sand = (210, 180, 140)
        self._grass = (60, 179, 113)
        self._pipe = (46, 204, 113)
        self._pipe_cap = (39, 174, 96)
        self._bird = (255, 213, 79)
        self._wing = (244, 180, 0)
        self._beak = (255, 140, 0)

    def _font(self, px: int) -> pygame.font.Font:
        # pygame's default font runs small compared to CSS pixel sizes
        size = int(px * 1.35)
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def render(self, snapshot: GameSnapshot, width: int, height: int) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self._render_to_surface(surface, snapshot)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(self, snapshot: GameSnapshot, window_width: Optional[int] = None, window_height: Optional[int] = None) -> None:
        """Render to the pygame window, creating it if needed."""
        size = (window_width or self._board_size[0], window_height or self._board_size[1])
        if self._screen is None or self._screen_size != size:
            self._screen = pygame.display.set_mode(size)
            self._screen_size = size
            pygame.display.set_caption("Flappy")

        self._render_to_surface(self._screen, snapshot)

    def _render_to_surface(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        """Render game state to a pygame surface."""
        board = self._board
        self._draw_background(board, snapshot)

        if snapshot.phase is not Phase.START:
            for pipe in snapshot.obstacles:
                self._draw_pipe_pair(board, pipe, snapshot)

        self._draw_ground(board, snapshot)
        self._draw_bird(board, snapshot)
        self._draw_hud(board, snapshot)

        if snapshot.phase is Phase.START:
            self._draw_start_screen(board, snapshot)
        elif snapshot.phase is Phase.GAME_OVER:
            self._draw_game_over(board, snapshot)

        if surface.get_size() == self._board_size:
            surface.blit(board, (0, 0))
        else:
            surface.blit(pygame.transform.smoothscale(board, surface.get_size()), (0, 0))

    def _blend(self, surface: pygame.Surface, color: Tuple[int, int, int], rects, alpha: float) -> None:
        """Fill rects with ``color`` at the given opacity."""
        overlay = self._overlay
        overlay.fill((0, 0, 0, 0))
        rgba = (*color, int(255 * alpha))
        for rect in rects:
            pygame.draw.rect(overlay, rgba, rect)
        surface.blit(overlay, (0, 0))

    def _text(self, surface: pygame.Surface, text: str, px: int, x: float, baseline: float) -> None:
        font = self._font(px)
        rendered = font.render(text, True, self._black)
        surface.blit(rendered, (int(x), int(baseline - font.get_ascent())))

    def _draw_background(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        width = int(snapshot.board_width)
        surface.fill(self._sky)
        stripes = [
            pygame.Rect(0, y, width, 18)
            for y in range(60, int(snapshot.floor_y), 90)
        ]
        self._blend(surface, self._white, stripes, 0.12)

    def _draw_ground(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        width = int(snapshot.board_width)
        floor_y = int(snapshot.floor_y)
        ground_h = int(snapshot.board_height - snapshot.floor_y)

        pygame.draw.rect(surface, self._sand, (0, floor_y, width, ground_h))
        pygame.draw.rect(surface, self._grass, (0, floor_y, width, 10))

        dashes = [pygame.Rect(x, floor_y + 25, 10, 2) for x in range(0, width, 18)]
        self._blend(surface, self._black, dashes, 0.18)

    def _draw_pipe_pair(self, surface: pygame.Surface, pipe: ObstacleView, snapshot: GameSnapshot) -> None:
        width = int(snapshot.pipe_width)
        floor_y = snapshot.floor_y
        gap_top = pipe.gap_center_y - snapshot.pipe_gap / 2
        gap_bottom = pipe.gap_center_y + snapshot.pipe_gap / 2
        x = int(round(pipe.x))

        pygame.draw.rect(surface, self._pipe, (x, 0, width, int(gap_top)))
        pygame.draw.rect(surface, self._pipe, (x, int(gap_bottom), width, int(floor_y - gap_bottom)))

        cap_w = width + self._cap_overhang * 2
        cap_x = x - self._cap_overhang
        top_cap_y = max(0, int(gap_top) - self._cap_height)
        pygame.draw.rect(surface, self._pipe_cap, (cap_x, top_cap_y, cap_w, self._cap_height))
        pygame.draw.rect(surface, self._pipe_cap, (cap_x, int(gap_bottom), cap_w, self._cap_height))

        shine = [
            pygame.Rect(x + 10, 0, 8, int(gap_top)),
            pygame.Rect(x + 10, int(gap_bottom), 8, int(floor_y - gap_bottom)),
        ]
        self._blend(surface, self._white, shine, 0.12)

    def _draw_bird(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        x = snapshot.avatar_x
        y = snapshot.avatar_y
        r = snapshot.avatar_radius

        pygame.draw.circle(surface, self._bird, (int(x), int(y)), int(r))

        # Wing: arc of radius 8 from 0.2*pi to 1.1*pi (screen angles, clockwise)
        wing_rect = pygame.Rect(0, 0, 16, 16)
        wing_rect.center = (int(x - 3), int(y + 2))
        pygame.draw.arc(surface, self._wing, wing_rect, -1.1 * math.pi, -0.2 * math.pi, 3)

        pygame.draw.circle(surface, self._black, (int(x + 5), int(y - 4)), 2)

        pygame.draw.polygon(surface, self._beak, [
            (x + r - 1, y),
            (x + r + 10, y - 4),
            (x + r + 10, y + 4),
        ])

    def _draw_hud(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        width = snapshot.board_width
        self._text(surface, str(snapshot.score), 22, 12, 32)
        self._text(
            surface,
            f"speed: {round(snapshot.pipe_speed)}  gap: {round(snapshot.pipe_gap)}",
            12, 12, 52
        )
        self._text(surface, HELP_LINE, 14, 10, snapshot.board_height - 12)
        self._text(surface, f"Best: {snapshot.best_score}", 14, width - 90, 22)
        if snapshot.muted:
            self._text(surface, "MUTED", 12, width - 70, 42)

    def _draw_start_screen(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        self._text(surface, "FLAPPY", 28, 130, 240)
        self._text(surface, "Press Space or click to start", 16, 80, 280)
        self._text(surface, f"Best: {snapshot.best_score}", 14, 150, 310)
        self._text(surface, "Tip: press M to mute", 12, 122, 335)

    def _draw_game_over(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        self._text(surface, "GAME OVER", 30, 88, 260)
        self._text(surface, f"Score: {snapshot.score}", 16, 135, 295)
        self._text(surface, f"Best: {snapshot.best_score}", 16, 136, 318)
        self._text(surface, "Press Space/click to restart", 14, 95, 350)
        self._text(surface, "Press R for start screen", 14, 115, 372)

    def close(self) -> None:
        """Clean up pygame resources."""
        self._fonts.clear()
        if self._screen is not None:
            self._screen = None
