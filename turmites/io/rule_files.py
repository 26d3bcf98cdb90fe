"""Rule file export/import using the commented display text."""

from __future__ import annotations

from pathlib import Path

from turmites.domain.rules import RuleTable, format_rule_table, parse_rule_table


def save_rule_file(path: Path, table: RuleTable, preset_name: str | None = None) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_rule_table(table, preset_name=preset_name) + "\n")
    return path


def load_rule_file(path: Path) -> RuleTable | None:
    """Read a rule file. Unreadable files raise; malformed contents give None."""
    return parse_rule_table(Path(path).read_text())
