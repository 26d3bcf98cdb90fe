"""Tests for turmites.domain.grid module."""

from __future__ import annotations

import pytest

from turmites.config.constants import DEFAULT_COLOR
from turmites.domain.grid import SparseGrid


class TestSparseGridReads:
    @pytest.mark.parametrize("cell", [(0, 0), (-1, -1), (100_000, 200_000), (-(2**40), 2**40)])
    def test_untouched_cell_is_default(self, cell: tuple[int, int]) -> None:
        grid = SparseGrid()
        assert grid.get(*cell) == DEFAULT_COLOR
        assert not grid.has_cell(*cell)

    def test_empty_grid_has_no_bounds(self) -> None:
        assert SparseGrid().bounds() is None


class TestSparseGridWrites:
    def test_set_then_get(self) -> None:
        grid = SparseGrid()
        grid.set(3, -4, 7)
        assert grid.get(3, -4) == 7
        assert grid.has_cell(3, -4)
        assert grid.size() == 1

    def test_writing_default_removes_entry(self) -> None:
        grid = SparseGrid()
        grid.set(1, 1, 2)
        grid.set(5, 5, 3)
        grid.set(1, 1, DEFAULT_COLOR)
        assert grid.size() == 1
        assert not grid.has_cell(1, 1)
        assert grid.get(1, 1) == DEFAULT_COLOR

    def test_writing_default_to_empty_cell_is_noop(self) -> None:
        grid = SparseGrid()
        grid.set(0, 0, DEFAULT_COLOR)
        assert grid.size() == 0

    def test_overwrite_keeps_single_entry(self) -> None:
        grid = SparseGrid()
        grid.set(0, 0, 1)
        grid.set(0, 0, 4)
        assert len(grid) == 1
        assert grid.get(0, 0) == 4

    def test_entries_never_hold_default(self) -> None:
        grid = SparseGrid()
        for i in range(10):
            grid.set(i, -i, i % 3)
        assert all(color != DEFAULT_COLOR for _, color in grid.entries())
        assert grid.size() == sum(1 for i in range(10) if i % 3)

    def test_bounds_cover_painted_cells(self) -> None:
        grid = SparseGrid()
        grid.set(-2, 5, 1)
        grid.set(4, -3, 1)
        assert grid.bounds() == (-2, -3, 4, 5)

    def test_clear(self) -> None:
        grid = SparseGrid()
        grid.set(1, 2, 3)
        grid.clear()
        assert grid.size() == 0
        assert grid.get(1, 2) == DEFAULT_COLOR
