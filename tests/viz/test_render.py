"""Tests for turmites.viz.render module."""

from __future__ import annotations

from pathlib import Path
from random import Random

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from turmites.config.types import RunConfig, SimulationConfig  # noqa: E402
from turmites.domain.ant import Ant  # noqa: E402
from turmites.domain.grid import SparseGrid  # noqa: E402
from turmites.domain.rules import langtons_ant_rules  # noqa: E402
from turmites.simulation.engine import run_simulation  # noqa: E402
from turmites.simulation.state import SimulationState  # noqa: E402
from turmites.viz.camera import Camera  # noqa: E402
from turmites.viz.render import (  # noqa: E402
    RasterRenderer,
    build_color_array,
    render_grid_png,
    render_run_directory,
)
from turmites.viz.theme import DEFAULT_THEME, Theme  # noqa: E402


def _small_state() -> SimulationState:
    config = SimulationConfig(field_width=10, field_height=10)
    return SimulationState(langtons_ant_rules(), config=config, rng=Random(0))


class TestBuildColorArray:
    def test_only_cells_inside_bounds(self) -> None:
        grid = SparseGrid()
        grid.set(0, 0, 2)
        grid.set(-1, 1, 5)
        grid.set(9, 9, 3)
        array = build_color_array(grid, (-1, 0, 2, 2))
        assert array.shape == (2, 3)
        assert array[0, 1] == 2
        assert array[1, 0] == 5
        assert int(array.sum()) == 7


class TestRasterRenderer:
    def test_first_draw_is_full(self) -> None:
        state = _small_state()
        renderer = RasterRenderer(Camera(scale=1.0), 10, 10)
        renderer.draw(state)
        assert renderer.full_redraws == 1
        assert renderer.bounds == (0, 0, 10, 10)
        assert renderer.ant_cells == {(5, 5)}

    def test_incremental_draw_touches_dirty_cells_only(self) -> None:
        state = _small_state()
        renderer = RasterRenderer(Camera(scale=1.0), 10, 10)
        renderer.draw(state)
        state.tick()
        renderer.draw(state)
        assert renderer.full_redraws == 1
        assert renderer.cells_redrawn == 1
        assert renderer.buffer[5, 5] == 1
        assert renderer.ant_cells == {(6, 5)}
        state.tick()
        renderer.draw(state)
        assert renderer.full_redraws == 1
        assert renderer.buffer[5, 6] == 1
        assert renderer.frames == 3

    def test_camera_move_forces_full_redraw(self) -> None:
        state = _small_state()
        camera = Camera(scale=1.0)
        renderer = RasterRenderer(camera, 10, 10)
        renderer.draw(state)
        camera.pan(-3, 0)
        renderer.draw(state)
        assert renderer.full_redraws == 2
        assert renderer.bounds == (3, 0, 13, 10)

    def test_reset_forces_full_redraw(self) -> None:
        state = _small_state()
        renderer = RasterRenderer(Camera(scale=1.0), 10, 10)
        renderer.draw(state)
        state.tick()
        state.reset()
        renderer.draw(state)
        assert renderer.full_redraws == 2
        assert not renderer.buffer.any()

    def test_to_rgb_marks_ants_and_colors(self) -> None:
        state = _small_state()
        renderer = RasterRenderer(Camera(scale=1.0), 10, 10)
        state.tick()
        renderer.draw(state)
        image = renderer.to_rgb()
        assert image.shape == (10, 10, 3)
        assert image.dtype == np.uint8
        assert tuple(image[5, 5]) == (255, 255, 255)
        assert tuple(image[5, 6]) == (255, 0, 0)
        assert tuple(image[0, 0]) == (0, 0, 0)

    def test_undisplayable_color_uses_background(self) -> None:
        state = _small_state()
        state.grid.set(0, 0, 40)
        renderer = RasterRenderer(Camera(scale=1.0), 10, 10)
        renderer.draw(state)
        assert tuple(renderer.to_rgb()[0, 0]) == (85, 85, 85)

    def test_rejects_empty_viewport(self) -> None:
        with pytest.raises(ValueError, match="viewport"):
            RasterRenderer(Camera(), 0, 10)


class TestPngOutput:
    def test_render_grid_png(self, tmp_path: Path) -> None:
        grid = SparseGrid()
        grid.set(0, 0, 1)
        grid.set(1, 0, 4)
        output = render_grid_png(grid, [Ant(x=2, y=0)], tmp_path / "out" / "grid.png", title="t")
        assert output.exists()
        assert output.stat().st_size > 0

    def test_render_empty_grid(self, tmp_path: Path) -> None:
        output = render_grid_png(SparseGrid(), [], tmp_path / "empty.png")
        assert output.exists()

    def test_render_run_directory(self, tmp_path: Path) -> None:
        run_dir = tmp_path / "run"
        run_simulation(langtons_ant_rules(), out_dir=run_dir, run_config=RunConfig(ticks=300))
        output = render_run_directory(run_dir, tmp_path / "final.png")
        assert output.exists()

    def test_render_run_directory_without_snapshot(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="No grid snapshot"):
            render_run_directory(tmp_path, tmp_path / "x.png")

    def test_render_run_directory_rejects_escape(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="escapes base_dir"):
            render_run_directory(Path("../elsewhere"), Path("x.png"), base_dir=tmp_path)


class TestTheme:
    def test_palette_size_enforced(self) -> None:
        with pytest.raises(ValueError, match="cell_colors"):
            Theme(cell_colors=("#000000",))

    def test_cell_color_lookup(self) -> None:
        assert DEFAULT_THEME.cell_color(0) == "#000000"
        assert DEFAULT_THEME.cell_color(12) is None
        assert DEFAULT_THEME.cell_color(-1) is None
