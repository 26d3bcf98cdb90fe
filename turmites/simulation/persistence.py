"""Parquet persistence helpers for ant log and grid snapshot streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from turmites.domain.grid import SparseGrid
from turmites.io.schemas import ANT_LOG_SCHEMA, GRID_SNAPSHOT_SCHEMA


def flush_ant_columns(
    ant_columns: dict[str, list[int | str]],
    ant_log_path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated ant rows to Parquet and clear in-memory buffers."""
    if not ant_columns["run_id"]:
        return writer
    table = pa.Table.from_pydict(ant_columns, schema=ANT_LOG_SCHEMA)
    if writer is None:
        writer = pq.ParquetWriter(ant_log_path, ANT_LOG_SCHEMA)
    writer.write_table(table)
    for values in ant_columns.values():
        values.clear()
    return writer


def write_grid_snapshot(grid: SparseGrid, run_id: str, path: Path) -> None:
    """Persist every painted cell of *grid* as one Parquet table."""
    columns: dict[str, list[int | str]] = {"run_id": [], "x": [], "y": [], "color": []}
    for (x, y), color in grid.entries():
        columns["run_id"].append(run_id)
        columns["x"].append(x)
        columns["y"].append(y)
        columns["color"].append(color)
    pq.write_table(pa.Table.from_pydict(columns, schema=GRID_SNAPSHOT_SCHEMA), path)


def read_grid_snapshot(path: Path) -> SparseGrid:
    """Rebuild a SparseGrid from a snapshot written by ``write_grid_snapshot``."""
    grid = SparseGrid()
    for row in pq.read_table(path).to_pylist():
        grid.set(int(row["x"]), int(row["y"]), int(row["color"]))
    return grid
