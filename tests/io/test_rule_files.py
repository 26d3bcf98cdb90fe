"""Tests for turmites.io.rule_files module."""

from __future__ import annotations

from pathlib import Path

import pytest

from turmites.domain.presets import get_preset
from turmites.io.rule_files import load_rule_file, save_rule_file


def test_save_then_load(tmp_path: Path) -> None:
    preset = get_preset("snowflake")
    path = save_rule_file(tmp_path / "nested" / "snowflake.txt", preset.rules, preset.name)
    assert path.exists()
    assert path.read_text().startswith("// Preset: Snowflake\n")
    assert load_rule_file(path) == preset.rules


def test_load_plain_json(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text('{"0": [{"writeColor": 1, "move": "R", "nextState": 0}]}')
    table = load_rule_file(path)
    assert table is not None
    assert table[0][0].write_color == 1


def test_load_malformed_returns_none(tmp_path: Path) -> None:
    path = tmp_path / "bad.txt"
    path.write_text("// header\n{broken")
    assert load_rule_file(path) is None


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rule_file(tmp_path / "missing.txt")
