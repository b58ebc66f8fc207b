"""
Solid Renderer
==============

Fast numpy-based renderer that draws the scene as flat-colored shapes.
No text, no pygame: intended for image observations and headless tooling.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from flappy.flappy_core.config_loader import GameConfig, get_config
from flappy.flappy_core.sim_state import Phase
from flappy.flappy_core.state_snapshot import GameSnapshot


class SolidRenderer:
    """
    Renders the board as solid-color rectangles and a circle.

    Uses numpy for fast CPU-based rendering without pygame.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config

        self._sky_color = np.array([135, 206, 235], dtype=np.uint8)
        self._ground_color = np.array([210, 180, 140], dtype=np.uint8)
        self._grass_color = np.array([60, 179, 113], dtype=np.uint8)
        self._pipe_color = np.array([46, 204, 113], dtype=np.uint8)
        self._bird_color = np.array([255, 213, 79], dtype=np.uint8)
        self._dead_color = np.array([220, 80, 60], dtype=np.uint8)

    def render(self, snapshot: GameSnapshot, width: int, height: int) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            snapshot: Frame to draw.
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)

        # Fit the board into the image, letterboxed
        scale = min(width / snapshot.board_width, height / snapshot.board_height)
        offset_x = (width - snapshot.board_width * scale) / 2
        offset_y = (height - snapshot.board_height * scale) / 2

        def to_px(x: float, y: float):
            return int(round(offset_x + x * scale)), int(round(offset_y + y * scale))

        # Sky
        x0, y0 = to_px(0, 0)
        x1, y1 = to_px(snapshot.board_width, snapshot.floor_y)
        self._fill_rect(img, x0, y0, x1, y1, self._sky_color)

        # Pipes
        if snapshot.phase is not Phase.START:
            half_gap = snapshot.pipe_gap / 2
            for pipe in snapshot.obstacles:
                left, top = to_px(pipe.x, 0)
                right, gap_top = to_px(pipe.x + snapshot.pipe_width, pipe.gap_center_y - half_gap)
                self._fill_rect(img, left, top, right, gap_top, self._pipe_color)
                _, gap_bottom = to_px(pipe.x, pipe.gap_center_y + half_gap)
                _, floor = to_px(pipe.x, snapshot.floor_y)
                self._fill_rect(img, left, gap_bottom, right, floor, self._pipe_color)

        # Ground with a grass line
        gx0, gy0 = to_px(0, snapshot.floor_y)
        gx1, gy1 = to_px(snapshot.board_width, snapshot.board_height)
        self._fill_rect(img, gx0, gy0, gx1, gy1, self._ground_color)
        _, grass_bottom = to_px(0, snapshot.floor_y + 10)
        self._fill_rect(img, gx0, gy0, gx1, grass_bottom, self._grass_color)

        # Bird
        cx, cy = to_px(snapshot.avatar_x, snapshot.avatar_y)
        radius = max(1, int(round(snapshot.avatar_radius * scale)))
        color = self._dead_color if snapshot.phase is Phase.GAME_OVER else self._bird_color
        self._draw_circle(img, cx, cy, radius, color)

        return img

    def _fill_rect(
        self,
        img: np.ndarray,
        x0: int,
        y0: int,
        x1: int,
        y1: int,
        color: np.ndarray
    ) -> None:
        """Fill the half-open pixel box [x0, x1) x [y0, y1), clipped."""
        height, width = img.shape[:2]
        x0, x1 = max(0, x0), min(width, x1)
        y0, y1 = max(0, y0), min(height, y1)
        if x0 >= x1 or y0 >= y1:
            return
        img[y0:y1, x0:x1] = color

    def _draw_circle(
        self,
        img: np.ndarray,
        cx: int,
        cy: int,
        radius: int,
        color: np.ndarray
    ) -> None:
        """Draw a filled circle using numpy."""
        height, width = img.shape[:2]

        # Calculate bounding box
        y_min = max(0, cy - radius)
        y_max = min(height, cy + radius + 1)
        x_min = max(0, cx - radius)
        x_max = min(width, cx + radius + 1)

        if y_min >= y_max or x_min >= x_max:
            return

        y_coords = np.arange(y_min, y_max)
        x_coords = np.arange(x_min, x_max)
        yy, xx = np.meshgrid(y_coords, x_coords, indexing='ij')

        mask = (xx - cx) ** 2 + (yy - cy) ** 2 <= radius ** 2
        img[y_min:y_max, x_min:x_max][mask] = color

    def render_to_screen(self, snapshot: GameSnapshot) -> None:
        """
        Render to screen (no-op for solid renderer).

        Use PygameRenderer for screen display.
        """
        pass

    def close(self) -> None:
        """Clean up resources (no-op for solid renderer)."""
        pass
