"""Tests for turmites.io.paths module."""

from __future__ import annotations

from pathlib import Path

import pytest

from turmites.io.paths import (
    ant_log_path,
    grid_snapshot_path,
    resolve_within_base,
    rule_payload_path,
)


class TestResolveWithinBase:
    def test_relative_path_inside_base(self, tmp_path: Path) -> None:
        resolved = resolve_within_base(Path("runs/a"), tmp_path)
        assert resolved == (tmp_path / "runs" / "a").resolve()

    def test_base_itself_is_allowed(self, tmp_path: Path) -> None:
        assert resolve_within_base(tmp_path, tmp_path) == tmp_path.resolve()

    def test_escape_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="escapes base_dir"):
            resolve_within_base(Path("../outside"), tmp_path)


def test_output_layout(tmp_path: Path) -> None:
    assert ant_log_path(tmp_path) == tmp_path / "logs" / "ant_log.parquet"
    assert grid_snapshot_path(tmp_path) == tmp_path / "logs" / "grid_snapshot.parquet"
    assert rule_payload_path(tmp_path, "r1") == tmp_path / "rules" / "r1.json"
