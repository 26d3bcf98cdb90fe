"""Pan/zoom camera mapping screen pixels to grid cells."""

from __future__ import annotations

import math
from dataclasses import dataclass

from turmites.config.constants import (
    CAMERA_INITIAL_SCALE,
    CAMERA_MAX_SCALE,
    CAMERA_MIN_SCALE,
    CAMERA_ZOOM_FACTOR,
)


@dataclass
class Camera:
    """``screen = offset + world * scale`` on both axes."""

    scale: float = CAMERA_INITIAL_SCALE
    offset_x: float = 0.0
    offset_y: float = 0.0

    def world_to_screen(self, x: float, y: float) -> tuple[float, float]:
        return self.offset_x + x * self.scale, self.offset_y + y * self.scale

    def screen_to_world(self, px: float, py: float) -> tuple[float, float]:
        return (px - self.offset_x) / self.scale, (py - self.offset_y) / self.scale

    def cell_at(self, px: float, py: float) -> tuple[int, int]:
        """Return the grid cell under screen point ``(px, py)``."""
        wx, wy = self.screen_to_world(px, py)
        return math.floor(wx), math.floor(wy)

    def pan(self, dx: float, dy: float) -> None:
        self.offset_x += dx
        self.offset_y += dy

    def zoom_at(self, px: float, py: float, zoom_in: bool) -> None:
        """Zoom one notch, keeping the world point under ``(px, py)`` fixed."""
        wx, wy = self.screen_to_world(px, py)
        if zoom_in:
            new_scale = min(CAMERA_MAX_SCALE, self.scale * CAMERA_ZOOM_FACTOR)
        else:
            new_scale = max(CAMERA_MIN_SCALE, self.scale / CAMERA_ZOOM_FACTOR)
        self.scale = new_scale
        self.offset_x = px - wx * new_scale
        self.offset_y = py - wy * new_scale

    def center_on(self, x: float, y: float, width: int, height: int) -> None:
        """Place the center of cell ``(x, y)`` at the middle of a viewport."""
        self.offset_x = width / 2 - (x + 0.5) * self.scale
        self.offset_y = height / 2 - (y + 0.5) * self.scale

    def reset(self, field_width: int, field_height: int, width: int, height: int) -> None:
        self.scale = CAMERA_INITIAL_SCALE
        self.center_on(field_width // 2, field_height // 2, width, height)

    def visible_cells(self, width: int, height: int) -> tuple[int, int, int, int]:
        """Return ``(x0, y0, x1, y1)``, half-open, covering a viewport of pixels."""
        x0, y0 = self.cell_at(0, 0)
        x1, y1 = self.screen_to_world(width, height)
        return x0, y0, math.ceil(x1), math.ceil(y1)
