"""Turmite rule model: moves, rules, rule tables, and their text form.

A rule table maps each state to a tuple of rules indexed by the color the
ant reads. Tables travel as JSON objects mapping stringified state indices
to lists of ``{"writeColor", "move", "nextState"}`` objects; the decoded form
uses the ``Move`` enum and frozen ``Rule`` records.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Any, TypeAlias

from turmites.config.constants import HALT_STATE
from turmites.config.types import MoveOptions


class Move(Enum):
    """Heading change applied after the write, keyed by its one-character code."""

    LEFT = "L"
    RIGHT = "R"
    U_TURN = "U"
    NO_TURN = "N"
    STAY = "S"
    NORTH = "^"
    EAST = ">"
    SOUTH = "v"
    WEST = "<"
    RANDOM = "?"


MOVE_CODES: tuple[str, ...] = tuple(move.value for move in Move)

RELATIVE_MOVES: tuple[Move, ...] = (Move.LEFT, Move.RIGHT, Move.NO_TURN, Move.U_TURN)
ABSOLUTE_MOVES: tuple[Move, ...] = (Move.NORTH, Move.EAST, Move.SOUTH, Move.WEST)

MOVE_LEGEND = (
    "L:Left, R:Right, U:U-Turn, N:No Turn (forward), S:Stay, ^>v<:Absolute Dirs, ?:Random"
)

_COMMENT_LINE_RE = re.compile(r"^\s*//.*$", re.MULTILINE)
_STATE_KEY_RE = re.compile(r"0|[1-9][0-9]*")


@dataclass(frozen=True)
class Rule:
    """One transition: what to write, how to turn, and which state comes next."""

    write_color: int
    move: Move
    next_state: int

    @property
    def halts(self) -> bool:
        return self.next_state == HALT_STATE


RuleTable: TypeAlias = dict[int, tuple[Rule, ...]]
"""state -> rules indexed by the color read."""


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of rule-table validation; ``errors`` lists every defect found."""

    is_valid: bool
    errors: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def move_choices(options: MoveOptions | None = None) -> tuple[Move, ...]:
    """Return the moves enabled by *options*. Stay is always included."""
    options = options or MoveOptions()
    choices = [Move.STAY]
    if options.use_relative:
        choices.extend(RELATIVE_MOVES)
    if options.use_absolute:
        choices.extend(ABSOLUTE_MOVES)
    if options.use_random:
        choices.append(Move.RANDOM)
    return tuple(choices)


def generate_random_rule_table(
    num_states: int,
    num_colors: int,
    moves: Sequence[Move],
    rng: Random,
) -> RuleTable:
    """Generate a table with uniformly random write colors, moves and next states.

    An empty *moves* sequence degrades to ``(Move.NO_TURN,)``.
    """
    if num_states < 1:
        raise ValueError("num_states must be >= 1")
    if num_colors < 1:
        raise ValueError("num_colors must be >= 1")
    choices = tuple(moves) or (Move.NO_TURN,)
    table: RuleTable = {}
    for state in range(num_states):
        rules: list[Rule] = []
        for _ in range(num_colors):
            write_color = rng.randrange(num_colors)
            move = rng.choice(choices)
            next_state = rng.randrange(num_states)
            rules.append(Rule(write_color=write_color, move=move, next_state=next_state))
        table[state] = tuple(rules)
    return table


def langtons_ant_rules() -> RuleTable:
    """Classic two-color Langton's Ant: turn right on 0, left on 1."""
    return {
        0: (
            Rule(write_color=1, move=Move.RIGHT, next_state=0),
            Rule(write_color=0, move=Move.LEFT, next_state=0),
        )
    }


def rule_table_colors(table: Mapping[int, Sequence[Rule]]) -> int:
    """Return the number of colors the table distinguishes (longest rule list)."""
    return max((len(rules) for rules in table.values()), default=0)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_state_key(key: object) -> int | None:
    """Accept ints and canonical decimal strings only (no sign, padding or underscores)."""
    if _is_int(key):
        return key  # type: ignore[return-value]
    if isinstance(key, str) and _STATE_KEY_RE.fullmatch(key):
        return int(key)
    return None


def _rule_fields(rule: object) -> tuple[object, object, object] | None:
    """Extract ``(writeColor, move code, nextState)`` from a Rule or JSON mapping."""
    if isinstance(rule, Rule):
        return rule.write_color, rule.move.value, rule.next_state
    if isinstance(rule, Mapping):
        move = rule.get("move")
        if isinstance(move, Move):
            move = move.value
        return rule.get("writeColor"), move, rule.get("nextState")
    return None


def validate_rule_table(table: object) -> ValidationResult:
    """Check a decoded or raw rule table, accumulating every violation found."""
    if not isinstance(table, Mapping):
        return ValidationResult(is_valid=False, errors=("Rules must be an object",))
    if not table:
        return ValidationResult(
            is_valid=False, errors=("Rules must contain at least one state",)
        )

    errors: list[str] = []
    seen: set[int] = set()
    for key, state_rules in table.items():
        state = _parse_state_key(key)
        if state is None or state < 0:
            errors.append(f"Invalid state key: {key}")
            continue
        if state in seen:
            errors.append(f"Duplicate state key: {key}")
            continue
        seen.add(state)
        if isinstance(state_rules, (str, bytes)) or not isinstance(state_rules, Sequence):
            errors.append(f"State {key} rules must be an array")
            continue
        if len(state_rules) == 0:
            errors.append(f"State {key} must have at least one rule")
            continue
        for color, rule in enumerate(state_rules):
            fields = _rule_fields(rule)
            if fields is None:
                errors.append(f"State {key}, color {color}: rule must be an object")
                continue
            write_color, move, next_state = fields
            if not _is_int(write_color) or write_color < 0:  # type: ignore[operator]
                errors.append(
                    f"State {key}, color {color}: writeColor must be a non-negative integer"
                )
            if move not in MOVE_CODES:
                errors.append(
                    f"State {key}, color {color}: move must be one of {', '.join(MOVE_CODES)}"
                )
            if not _is_int(next_state) or next_state < HALT_STATE:  # type: ignore[operator]
                errors.append(
                    f"State {key}, color {color}: nextState must be an integer >= {HALT_STATE}"
                )

    return ValidationResult(is_valid=not errors, errors=tuple(errors))


# ---------------------------------------------------------------------------
# Payload conversion and text form
# ---------------------------------------------------------------------------


def rule_table_to_payload(table: Mapping[int, Sequence[Rule]]) -> dict[str, list[dict[str, Any]]]:
    """Convert a decoded table into its JSON-ready form, states in ascending order."""
    return {
        str(state): [
            {"writeColor": rule.write_color, "move": rule.move.value, "nextState": rule.next_state}
            for rule in table[state]
        ]
        for state in sorted(table)
    }


def rule_table_from_payload(payload: Mapping[str, Any]) -> RuleTable:
    """Decode a JSON rule payload into a ``RuleTable``.

    Raises :exc:`ValueError` listing every defect when the payload is invalid.
    """
    result = validate_rule_table(payload)
    if not result.is_valid:
        raise ValueError("; ".join(result.errors))
    table: RuleTable = {}
    for key, state_rules in payload.items():
        table[int(key)] = tuple(
            Rule(
                write_color=rule["writeColor"],
                move=Move(rule["move"]),
                next_state=rule["nextState"],
            )
            for rule in state_rules
        )
    return table


def format_rule_table(table: Mapping[int, Sequence[Rule]], preset_name: str | None = None) -> str:
    """Render a table as ``//`` header comments followed by indented JSON."""
    lines: list[str] = []
    if preset_name:
        lines.append(f"// Preset: {preset_name}")
    lines.append(f"// States: {len(table)}")
    lines.append(f"// Colors: {rule_table_colors(table)}")
    lines.append(f"// Moves: {MOVE_LEGEND}")
    header = "\n".join(lines)
    return f"{header}\n\n{json.dumps(rule_table_to_payload(table), indent=2)}"


def strip_comment_lines(text: str) -> str:
    """Remove ``//`` comment lines and surrounding whitespace."""
    return _COMMENT_LINE_RE.sub("", text).strip()


def decode_rule_json(body: str) -> object:
    """Decode a rule body; every decoder failure surfaces as :exc:`ValueError`.

    Oversized integer literals and excessive nesting are reported the same
    way as malformed JSON.
    """
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON: {exc.msg}") from exc
    except (ValueError, RecursionError) as exc:
        raise ValueError(f"Invalid JSON: {exc}") from exc


def parse_rule_table(text: str) -> RuleTable | None:
    """Parse display text back into a table. Returns None on any failure."""
    body = strip_comment_lines(text)
    if not body:
        return None
    try:
        payload = decode_rule_json(body)
    except ValueError:
        return None
    if not validate_rule_table(payload).is_valid:
        return None
    return rule_table_from_payload(payload)
