"""Domain layer: sparse grid, rule model, ants, and the preset catalog."""

from turmites.domain.ant import Ant, Heading, is_valid_ant
from turmites.domain.grid import SparseGrid
from turmites.domain.presets import PRESETS, Preset, get_preset, preset_rules
from turmites.domain.rules import (
    Move,
    Rule,
    RuleTable,
    ValidationResult,
    format_rule_table,
    generate_random_rule_table,
    langtons_ant_rules,
    move_choices,
    parse_rule_table,
    validate_rule_table,
)

__all__ = [
    "Ant",
    "Heading",
    "Move",
    "PRESETS",
    "Preset",
    "Rule",
    "RuleTable",
    "SparseGrid",
    "ValidationResult",
    "format_rule_table",
    "generate_random_rule_table",
    "get_preset",
    "is_valid_ant",
    "langtons_ant_rules",
    "move_choices",
    "parse_rule_table",
    "preset_rules",
    "validate_rule_table",
]
