"""Unbounded sparse color grid.

Storage invariant: no entry ever maps to ``DEFAULT_COLOR``. Writing the
default color deletes the entry, so ``len(grid)`` counts painted cells only.
"""

from __future__ import annotations

from collections.abc import Iterator

from turmites.config.constants import DEFAULT_COLOR

Cell = tuple[int, int]


class SparseGrid:
    """Infinite 2D grid of color indices keyed by ``(x, y)``."""

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: dict[Cell, int] = {}

    def get(self, x: int, y: int) -> int:
        return self._cells.get((x, y), DEFAULT_COLOR)

    def set(self, x: int, y: int, color: int) -> None:
        if color == DEFAULT_COLOR:
            self._cells.pop((x, y), None)
        else:
            self._cells[(x, y)] = color

    def has_cell(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` holds a non-default color."""
        return (x, y) in self._cells

    def size(self) -> int:
        return len(self._cells)

    def entries(self) -> Iterator[tuple[Cell, int]]:
        """Yield ``((x, y), color)`` for every painted cell, in no particular order."""
        return iter(self._cells.items())

    def bounds(self) -> tuple[int, int, int, int] | None:
        """Return ``(min_x, min_y, max_x, max_y)`` of painted cells, or None if empty."""
        if not self._cells:
            return None
        xs = [x for x, _ in self._cells]
        ys = [y for _, y in self._cells]
        return min(xs), min(ys), max(xs), max(ys)

    def clear(self) -> None:
        self._cells.clear()

    def __len__(self) -> int:
        return len(self._cells)
