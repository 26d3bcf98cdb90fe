"""Raster rendering of the sparse grid: incremental buffers and PNG snapshots."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pyarrow.compute as pc
import pyarrow.parquet as pq
from matplotlib.colors import BoundaryNorm, ListedColormap, to_rgb

from turmites.config.constants import DEFAULT_COLOR
from turmites.domain.ant import Ant, Heading
from turmites.domain.grid import Cell, SparseGrid
from turmites.io.paths import ant_log_path, grid_snapshot_path, resolve_within_base
from turmites.simulation.persistence import read_grid_snapshot
from turmites.simulation.state import SimulationState
from turmites.viz.camera import Camera
from turmites.viz.theme import DEFAULT_THEME, Theme

Bounds = tuple[int, int, int, int]
"""Half-open cell rectangle ``(x0, y0, x1, y1)``."""


def build_color_array(grid: SparseGrid, bounds: Bounds) -> np.ndarray:
    """Return an (H, W) int array of the colors inside *bounds*.

    Only painted cells are visited, so cost scales with occupancy rather than
    with the size of the region.
    """
    x0, y0, x1, y1 = bounds
    array = np.full((max(0, y1 - y0), max(0, x1 - x0)), DEFAULT_COLOR, dtype=np.int64)
    for (x, y), color in grid.entries():
        if x0 <= x < x1 and y0 <= y < y1:
            array[y - y0, x - x0] = color
    return array


def _palette_rgb(theme: Theme) -> np.ndarray:
    """(PALETTE_SIZE + 1, 3) uint8 table; the last row is the background."""
    colors = list(theme.cell_colors) + [theme.background_color]
    return (np.array([to_rgb(c) for c in colors]) * 255).round().astype(np.uint8)


class RasterRenderer:
    """Keeps a color buffer of the visible region in sync with a simulation.

    ``draw`` honors the invalidation contract: it rebuilds the whole buffer
    only when a full redraw was requested or the camera view moved, and
    otherwise rewrites just the dirty cells plus the cells that ant markers
    covered on the previous frame.
    """

    def __init__(
        self,
        camera: Camera,
        width: int,
        height: int,
        theme: Theme = DEFAULT_THEME,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError("viewport dimensions must be >= 1")
        self.camera = camera
        self.width = width
        self.height = height
        self.theme = theme
        self.buffer = np.zeros((0, 0), dtype=np.int64)
        self.bounds: Bounds | None = None
        self.ant_cells: set[Cell] = set()
        self.frames = 0
        self.full_redraws = 0
        self.cells_redrawn = 0

    def draw(self, state: SimulationState, camera: Camera | None = None) -> None:
        if camera is not None:
            self.camera = camera
        full, dirty = state.invalidation.drain()
        bounds = self.camera.visible_cells(self.width, self.height)
        if full or bounds != self.bounds:
            self.buffer = build_color_array(state.grid, bounds)
            self.bounds = bounds
            self.full_redraws += 1
        else:
            x0, y0, x1, y1 = bounds
            for x, y in dirty | self.ant_cells:
                if x0 <= x < x1 and y0 <= y < y1:
                    self.buffer[y - y0, x - x0] = state.grid.get(x, y)
                    self.cells_redrawn += 1
        self.ant_cells = {ant.position for ant in state.ants}
        self.frames += 1

    def to_rgb(self) -> np.ndarray:
        """Return the current frame as an (H, W, 3) uint8 image with ant markers."""
        palette = _palette_rgb(self.theme)
        background = len(palette) - 1
        indices = np.where(
            (self.buffer >= 0) & (self.buffer < background), self.buffer, background
        )
        image = palette[indices]
        if self.bounds is not None:
            x0, y0, x1, y1 = self.bounds
            ant_rgb = (np.array(to_rgb(self.theme.ant_color)) * 255).round().astype(np.uint8)
            for x, y in self.ant_cells:
                if x0 <= x < x1 and y0 <= y < y1:
                    image[y - y0, x - x0] = ant_rgb
        return image


def _snapshot_bounds(grid: SparseGrid, ants: Sequence[Ant], padding: int = 1) -> Bounds:
    xs = [ant.x for ant in ants]
    ys = [ant.y for ant in ants]
    painted = grid.bounds()
    if painted is not None:
        xs += [painted[0], painted[2]]
        ys += [painted[1], painted[3]]
    if not xs:
        return (-padding, -padding, padding + 1, padding + 1)
    return (min(xs) - padding, min(ys) - padding, max(xs) + padding + 1, max(ys) + padding + 1)


def render_grid_png(
    grid: SparseGrid,
    ants: Sequence[Ant],
    output_path: Path,
    bounds: Bounds | None = None,
    title: str | None = None,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Draw a static snapshot of *grid* with ant markers to *output_path*."""
    bounds = bounds or _snapshot_bounds(grid, ants)
    x0, y0, x1, y1 = bounds
    array = build_color_array(grid, bounds)
    masked = np.ma.masked_outside(array, 0, len(theme.cell_colors) - 1)

    cmap = ListedColormap(list(theme.cell_colors))
    cmap.set_bad(theme.background_color)
    norm = BoundaryNorm(np.arange(-0.5, len(theme.cell_colors) + 0.5), cmap.N)

    fig, ax = plt.subplots(figsize=(6, 6 * max(1, y1 - y0) / max(1, x1 - x0)))
    fig.patch.set_facecolor(theme.background_color)
    ax.imshow(
        masked,
        cmap=cmap,
        norm=norm,
        origin="upper",
        aspect="equal",
        interpolation="nearest",
        extent=(x0 - 0.5, x1 - 0.5, y1 - 0.5, y0 - 0.5),
    )
    visible = [ant for ant in ants if x0 <= ant.x < x1 and y0 <= ant.y < y1]
    if visible:
        ax.scatter(
            [ant.x for ant in visible],
            [ant.y for ant in visible],
            c=theme.ant_color,
            s=12,
            marker="o",
        )
    ax.set_xticks([])
    ax.set_yticks([])
    if title:
        ax.set_title(title, fontsize=10, color="white")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path


def _final_ants(log_path: Path) -> list[Ant]:
    table = pq.read_table(log_path)
    if table.num_rows == 0:
        return []
    last_tick = pc.max(table.column("tick")).as_py()
    rows = table.filter(pc.equal(table.column("tick"), last_tick)).to_pylist()
    return [
        Ant(x=int(row["x"]), y=int(row["y"]), heading=Heading(row["heading"]), state=row["state"])
        for row in sorted(rows, key=lambda row: row["ant_id"])
    ]


def render_run_directory(
    run_dir: Path,
    output_path: Path,
    base_dir: Path | None = None,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Render the final grid and ant positions saved by ``run_simulation``."""
    if base_dir is None:
        run_dir = Path(run_dir).resolve()
        output_path = Path(output_path).resolve()
    else:
        base_dir = Path(base_dir).resolve()
        run_dir = resolve_within_base(Path(run_dir), base_dir)
        output_path = resolve_within_base(Path(output_path), base_dir)

    snapshot = grid_snapshot_path(run_dir)
    if not snapshot.exists():
        raise ValueError(f"No grid snapshot found in {run_dir}")
    grid = read_grid_snapshot(snapshot)
    log_path = ant_log_path(run_dir)
    ants = _final_ants(log_path) if log_path.exists() else []
    return render_grid_png(grid, ants, output_path, title=run_dir.name, theme=theme)
