"""Tests for turmites.domain.presets module."""

from __future__ import annotations

import pytest

from turmites.domain.presets import DEFAULT_PRESET, PRESETS, get_preset, preset_rules
from turmites.domain.rules import (
    Move,
    Rule,
    langtons_ant_rules,
    rule_table_colors,
    validate_rule_table,
)


class TestPresetCatalog:
    def test_default_is_langton(self) -> None:
        assert DEFAULT_PRESET in PRESETS
        assert get_preset(DEFAULT_PRESET).rules == langtons_ant_rules()

    @pytest.mark.parametrize("key", sorted(PRESETS))
    def test_every_preset_is_valid(self, key: str) -> None:
        preset = PRESETS[key]
        assert preset.key == key
        assert preset.name
        assert validate_rule_table(preset.rules).is_valid

    @pytest.mark.parametrize("key", sorted(PRESETS))
    def test_next_states_exist(self, key: str) -> None:
        rules = PRESETS[key].rules
        for state_rules in rules.values():
            for rule in state_rules:
                assert rule.next_state == -1 or rule.next_state in rules

    def test_cycle_presets_advance_color(self) -> None:
        rules = get_preset("symmetrical").rules
        assert rule_table_colors(rules) == 6
        assert [rule.write_color for rule in rules[0]] == [1, 2, 3, 4, 5, 0]
        assert [rule.move for rule in rules[0]][:2] == [Move.RIGHT, Move.RIGHT]

    def test_busy_beaver_final_state_freezes(self) -> None:
        rules = get_preset("busyBeaver3").rules
        final = max(rules)
        assert all(rule.move is Move.STAY and rule.next_state == final for rule in rules[final])

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="preset must be one of"):
            get_preset("nope")

    def test_preset_rules_returns_copy(self) -> None:
        copy = preset_rules("langtons")
        copy[0] = (Rule(write_color=0, move=Move.STAY, next_state=0),)
        assert get_preset("langtons").rules == langtons_ant_rules()
