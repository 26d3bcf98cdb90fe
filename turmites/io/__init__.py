"""I/O layer: Parquet schemas, output paths, and rule files."""

from turmites.io.paths import resolve_within_base
from turmites.io.rule_files import load_rule_file, save_rule_file
from turmites.io.schemas import (
    ANT_LOG_SCHEMA,
    GRID_SNAPSHOT_SCHEMA,
    RULE_PAYLOAD_SCHEMA_VERSION,
)

__all__ = [
    "ANT_LOG_SCHEMA",
    "GRID_SNAPSHOT_SCHEMA",
    "RULE_PAYLOAD_SCHEMA_VERSION",
    "load_rule_file",
    "resolve_within_base",
    "save_rule_file",
]
