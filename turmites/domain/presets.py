"""Built-in catalog of named rule tables.

Busy-Beaver entries encode a Turing machine as a turmite: each machine state
gets one turmite state per travel direction, a machine move that keeps the
direction becomes ``N`` and one that reverses it becomes ``U``. The final
state of each encoding is a self-looping ``S`` state that freezes the ant.
"""

from __future__ import annotations

from dataclasses import dataclass

from turmites.domain.rules import Move, Rule, RuleTable

_Spec = dict[int, list[tuple[int, str, int]]]


def _table(spec: _Spec) -> RuleTable:
    return {
        state: tuple(
            Rule(write_color=write, move=Move(move), next_state=nxt) for write, move, nxt in rules
        )
        for state, rules in spec.items()
    }


@dataclass(frozen=True)
class Preset:
    """A named, read-only rule table."""

    key: str
    name: str
    rules: RuleTable


def _cycle(turns: str) -> _Spec:
    """Single-state table that cycles colors 0..n-1, turning per character."""
    n = len(turns)
    return {0: [((color + 1) % n, turn, 0) for color, turn in enumerate(turns)]}


_PRESET_SPECS: list[tuple[str, str, _Spec]] = [
    ("langtons", "Langton's Ant", {0: [(1, "R", 0), (0, "L", 0)]}),
    (
        "constructor",
        "Constructor",
        {
            0: [(0, "S", 2), (0, "S", 2)],
            1: [(1, "L", 2), (0, "R", 1)],
            2: [(0, "N", 1), (0, "U", 2)],
        },
    ),
    ("symmetrical", "Symmetrical", _cycle("RRLLRR")),
    (
        "snowflake",
        "Snowflake",
        {
            0: [(1, "L", 1), (1, "R", 0)],
            1: [(1, "U", 1), (1, "U", 2)],
            2: [(0, "N", 2), (0, "U", 0)],
        },
    ),
    ("archimedesSpiral", "Archimedes Spiral", _cycle("LRRRRLLLRRR")),
    ("logarithmicSpiral", "Logarithmic Spiral", _cycle("RLLLLRRRLLLR")),
    ("squareFiller", "Square Filler", _cycle("LRRRRRLLR")),
    (
        "simpleTuringMachine",
        "Simple Turing Machine",
        {
            0: [(1, "N", 1), (0, "U", 0)],
            1: [(1, "U", 1), (0, "N", 0)],
        },
    ),
    (
        "busyBeaver3",
        "Busy Beaver 3",
        {
            0: [(1, "N", 1), (1, "U", 5)],
            1: [(1, "U", 3), (1, "N", 1)],
            2: [(1, "U", 4), (1, "N", 6)],
            3: [(1, "U", 1), (1, "N", 5)],
            4: [(1, "N", 3), (1, "U", 1)],
            5: [(1, "N", 4), (1, "U", 6)],
            6: [(0, "S", 6), (1, "S", 6)],
        },
    ),
    (
        "busyBeaver4",
        "Busy Beaver 4",
        {
            0: [(1, "N", 1), (1, "U", 5)],
            1: [(1, "U", 4), (0, "U", 6)],
            2: [(1, "N", 8), (1, "U", 7)],
            3: [(1, "N", 3), (0, "N", 0)],
            4: [(1, "U", 1), (1, "N", 5)],
            5: [(1, "N", 4), (0, "N", 6)],
            6: [(1, "U", 8), (1, "N", 7)],
            7: [(1, "U", 3), (0, "U", 0)],
            8: [(0, "S", 8), (1, "S", 8)],
        },
    ),
    (
        "busyBeaver5",
        "Busy Beaver 5",
        {
            0: [(1, "N", 1), (1, "U", 7)],
            1: [(1, "N", 2), (1, "N", 1)],
            2: [(1, "N", 3), (0, "U", 9)],
            3: [(1, "U", 5), (1, "U", 8)],
            4: [(1, "N", 10), (0, "U", 5)],
            5: [(1, "U", 1), (1, "N", 7)],
            6: [(1, "U", 2), (1, "U", 1)],
            7: [(1, "U", 3), (0, "N", 9)],
            8: [(1, "N", 5), (1, "N", 8)],
            9: [(1, "U", 10), (0, "N", 5)],
            10: [(0, "S", 10), (1, "S", 10)],
        },
    ),
]

PRESETS: dict[str, Preset] = {
    key: Preset(key=key, name=name, rules=_table(spec)) for key, name, spec in _PRESET_SPECS
}
"""Preset key -> Preset, in catalog order."""

DEFAULT_PRESET = "langtons"


def get_preset(key: str) -> Preset:
    """Look up a preset by key. Raises :exc:`ValueError` for an unknown key."""
    try:
        return PRESETS[key]
    except KeyError as exc:
        valid = ", ".join(PRESETS)
        raise ValueError(f"preset must be one of {valid}") from exc


def preset_rules(key: str) -> RuleTable:
    """Return a fresh copy of a preset's table, safe for the caller to replace entries."""
    return dict(get_preset(key).rules)
