"""Parquet schema definitions for turmite run artifacts.

Arrow schemas used for persisting ant trajectories and final grid snapshots
are centralised here so that the engine and renderers work against the same
column contracts.
"""

from __future__ import annotations

import pyarrow as pa

RULE_PAYLOAD_SCHEMA_VERSION = 1

ANT_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("tick", pa.int64()),
        ("ant_id", pa.int64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("heading", pa.int64()),
        ("state", pa.int64()),
    ]
)

GRID_SNAPSHOT_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("color", pa.int64()),
    ]
)
