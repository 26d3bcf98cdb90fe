"""Simulation state owned by one controller: grid, rules, population, signals."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from random import Random

from turmites.config.constants import PLACEMENT_MAX_ATTEMPTS
from turmites.config.types import HeadingMode, PlacementMode, SimulationConfig
from turmites.domain.ant import Ant, Heading, ant_from_payload, is_valid_ant
from turmites.domain.grid import Cell, SparseGrid
from turmites.domain.rules import (
    RuleTable,
    ValidationResult,
    decode_rule_json,
    generate_random_rule_table,
    move_choices,
    parse_rule_table,
    strip_comment_lines,
    validate_rule_table,
)
from turmites.simulation.step import step_tick

_FIXED_HEADINGS: dict[HeadingMode, Heading] = {
    HeadingMode.NORTH: Heading.NORTH,
    HeadingMode.EAST: Heading.EAST,
    HeadingMode.SOUTH: Heading.SOUTH,
    HeadingMode.WEST: Heading.WEST,
}


@dataclass
class Invalidation:
    """Renderer-facing change signals.

    The renderer redraws only ``dirty`` cells unless ``full_redraw`` is set,
    in which case it redraws the whole visible region. ``drain`` clears both.
    """

    dirty: set[Cell] = field(default_factory=set)
    full_redraw: bool = True

    def mark(self, x: int, y: int) -> None:
        self.dirty.add((x, y))

    def request_full_redraw(self) -> None:
        self.full_redraw = True

    def drain(self) -> tuple[bool, frozenset[Cell]]:
        full, cells = self.full_redraw, frozenset(self.dirty)
        self.full_redraw = False
        self.dirty.clear()
        return full, cells


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _placement_cell(
    index: int,
    count: int,
    mode: PlacementMode,
    width: int,
    height: int,
    occupied: set[Cell],
    rng: Random,
) -> Cell:
    center_x, center_y = width // 2, height // 2
    if mode is PlacementMode.RANDOM:
        x, y = rng.randrange(width), rng.randrange(height)
        attempts = 1
        while (x, y) in occupied and attempts < PLACEMENT_MAX_ATTEMPTS:
            x, y = rng.randrange(width), rng.randrange(height)
            attempts += 1
    elif mode is PlacementMode.GRID:
        cols = math.ceil(math.sqrt(count * width / height))
        rows = math.ceil(count / cols)
        cols, rows = min(cols, width), min(rows, height)
        spacing_x = width / (cols + 1)
        spacing_y = height / (rows + 1)
        x = math.floor(spacing_x * (index % cols + 1))
        y = math.floor(spacing_y * (index // cols + 1))
    elif mode is PlacementMode.ROW:
        row_width = min(count, width)
        num_rows = math.ceil(count / width)
        start_x = math.floor(center_x - row_width / 2)
        start_y = math.floor(center_y - num_rows / 2)
        x = start_x + index % width
        y = start_y + index // width
    else:
        cluster = math.ceil(math.sqrt(count))
        offset = cluster // 2
        x = center_x - offset + index % cluster
        y = center_y - offset + index // cluster
    return _clamp(x, 0, width - 1), _clamp(y, 0, height - 1)


def _initial_heading(mode: HeadingMode, rng: Random) -> Heading:
    if mode is HeadingMode.RANDOM:
        return Heading(rng.randrange(4))
    return _FIXED_HEADINGS[mode]


def place_ants(
    config: SimulationConfig,
    rng: Random,
    preserved_rules: Sequence[RuleTable] | None = None,
) -> list[Ant]:
    """Create a fresh population on the placement field described by *config*."""
    occupied: set[Cell] = set()
    ants: list[Ant] = []
    moves = move_choices(config.move_options)
    for i in range(config.ant_count):
        x, y = _placement_cell(
            i,
            config.ant_count,
            config.placement,
            config.field_width,
            config.field_height,
            occupied,
            rng,
        )
        occupied.add((x, y))
        heading = _initial_heading(config.heading, rng)
        private: RuleTable | None = None
        if config.uses_private_rules:
            if preserved_rules is not None and i < len(preserved_rules):
                private = preserved_rules[i]
            else:
                private = generate_random_rule_table(
                    rng.randint(1, config.max_states),
                    rng.randint(2, config.max_colors),
                    moves,
                    rng,
                )
        ants.append(Ant(x=x, y=y, heading=heading, state=0, rules=private))
    return ants


# ---------------------------------------------------------------------------
# Simulation state
# ---------------------------------------------------------------------------


class SimulationState:
    """Single-writer container passed into the step engine and scheduler."""

    def __init__(
        self,
        rules: RuleTable,
        config: SimulationConfig | None = None,
        rng: Random | None = None,
        track_changes: bool = True,
    ) -> None:
        self.config = config or SimulationConfig()
        self.track_changes = track_changes
        self.rng = rng or Random()
        self.rules: RuleTable = rules
        self.grid = SparseGrid()
        self.invalidation = Invalidation()
        self.ants: list[Ant] = []
        self.tick_count = 0
        self.reset()

    def reset(
        self,
        rules: RuleTable | None = None,
        config: SimulationConfig | None = None,
    ) -> None:
        """Clear the grid and replace the population.

        Private tables of the current population are carried over when the
        new configuration still uses them.
        """
        if rules is not None:
            self.rules = rules
        if config is not None:
            self.config = config
        preserved = [ant.rules for ant in self.ants if ant.rules is not None]
        self.grid = SparseGrid()
        self.ants = place_ants(self.config, self.rng, preserved or None)
        self.tick_count = 0
        self.invalidation.dirty.clear()
        self.invalidation.request_full_redraw()

    def randomize(self, num_states: int | None = None, num_colors: int | None = None) -> None:
        """Install a random shared table and reset, drawing sizes from config bounds."""
        states = num_states or self.rng.randint(1, self.config.max_states)
        colors = num_colors or self.rng.randint(2, self.config.max_colors)
        self.ants = []
        rules = generate_random_rule_table(
            states, colors, move_choices(self.config.move_options), self.rng
        )
        self.reset(rules=rules)

    def apply_rules(self, text: str) -> ValidationResult:
        """Install rules from display text, keeping the prior table on failure."""
        table = parse_rule_table(text)
        if table is None:
            return _explain_parse_failure(text)
        self.reset(rules=table)
        return ValidationResult(is_valid=True)

    def admit_ants(self, candidates: Iterable[object]) -> list[Ant]:
        """Replace the population with the valid candidates only.

        Candidates may be ``Ant`` objects or export mappings.
        """
        admitted: list[Ant] = []
        for candidate in candidates:
            if not is_valid_ant(candidate):
                continue
            if isinstance(candidate, Ant):
                admitted.append(candidate)
            else:
                admitted.append(ant_from_payload(candidate))  # type: ignore[arg-type]
        self.ants = admitted
        self.invalidation.request_full_redraw()
        return admitted

    def tick(self) -> int:
        """Step every ant once. Returns the number of cells that changed color.

        Changed cells are marked dirty only while ``track_changes`` is set.
        """
        on_change = self.invalidation.mark if self.track_changes else None
        changes = step_tick(self.ants, self.grid, self.rules, self.rng, on_change=on_change)
        self.tick_count += 1
        return changes

    @property
    def all_halted(self) -> bool:
        return bool(self.ants) and all(ant.halted for ant in self.ants)


def _explain_parse_failure(text: str) -> ValidationResult:
    """Build a ValidationResult describing why *text* did not parse."""
    body = strip_comment_lines(text)
    if not body:
        return ValidationResult(is_valid=False, errors=("Rules text is empty",))
    try:
        payload = decode_rule_json(body)
    except ValueError as exc:
        return ValidationResult(is_valid=False, errors=(str(exc),))
    return validate_rule_table(payload)
