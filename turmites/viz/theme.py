"""Visualization theme for turmite renderers.

Themes are frozen dataclasses grouping the styling constants together so a
palette can be swapped without touching rendering code.
"""

from __future__ import annotations

from dataclasses import dataclass

from turmites.config.constants import PALETTE_SIZE


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    cell_colors: tuple[str, ...] = (
        "#000000",
        "#FFFFFF",
        "#FF00FF",
        "#FFFF00",
        "#00FF00",
        "#00FFFF",
        "#FF0000",
        "#FFA500",
        "#0000FF",
        "#FF69B4",
        "#DA70D6",
        "#8A2BE2",
    )
    background_color: str = "#555555"
    ant_color: str = "#FF0000"

    def __post_init__(self) -> None:
        if len(self.cell_colors) != PALETTE_SIZE:
            raise ValueError(f"cell_colors must have {PALETTE_SIZE} entries")

    def cell_color(self, color: int) -> str | None:
        """Palette entry for *color*, or None when it cannot be displayed."""
        if 0 <= color < len(self.cell_colors):
            return self.cell_colors[color]
        return None


DEFAULT_THEME = Theme()
