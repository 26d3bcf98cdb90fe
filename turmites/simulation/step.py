"""Single-ant transition and whole-population tick.

Per-step order is write, turn, then translate along the (possibly new)
heading. A ``Right`` rule with default motion is therefore one atomic
pivot-and-step, as in the classic Langton's Ant.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from random import Random

from turmites.domain.ant import Ant, Heading
from turmites.domain.grid import Cell, SparseGrid
from turmites.domain.rules import Move, Rule

_QUARTER_TURNS: dict[Move, int] = {
    Move.RIGHT: 1,
    Move.LEFT: -1,
    Move.U_TURN: 2,
}

_ABSOLUTE_HEADINGS: dict[Move, Heading] = {
    Move.NORTH: Heading.NORTH,
    Move.EAST: Heading.EAST,
    Move.SOUTH: Heading.SOUTH,
    Move.WEST: Heading.WEST,
}


def lookup_rule(table: Mapping[int, Sequence[Rule]], state: int, color: int) -> Rule:
    """Resolve the rule for ``(state, color)``, never failing.

    Falls back to the state's color-0 rule, then to an identity rule that
    rewrites the read color, keeps the heading, and moves to state 0.
    """
    state_rules = table.get(state)
    if state_rules:
        if 0 <= color < len(state_rules):
            return state_rules[color]
        return state_rules[0]
    return Rule(write_color=color, move=Move.NO_TURN, next_state=0)


def _next_heading(heading: Heading, move: Move, rng: Random) -> Heading:
    if move in _QUARTER_TURNS:
        return heading.turned(_QUARTER_TURNS[move])
    if move in _ABSOLUTE_HEADINGS:
        return _ABSOLUTE_HEADINGS[move]
    if move is Move.RANDOM:
        return Heading(rng.randrange(4))
    return heading


def step_ant(
    ant: Ant,
    grid: SparseGrid,
    global_rules: Mapping[int, Sequence[Rule]],
    rng: Random,
) -> Cell | None:
    """Advance *ant* by one transition.

    Returns the coordinate whose color changed, or None when nothing was
    written. A halted ant is left untouched.
    """
    if ant.halted:
        return None

    x, y = ant.x, ant.y
    color = grid.get(x, y)
    table = ant.rules if ant.rules is not None else global_rules
    rule = lookup_rule(table, ant.state, color)

    changed: Cell | None = None
    if rule.write_color != color:
        grid.set(x, y, rule.write_color)
        changed = (x, y)

    ant.heading = _next_heading(ant.heading, rule.move, rng)
    ant.state = rule.next_state
    if rule.move is not Move.STAY:
        dx, dy = ant.heading.vector
        ant.x = x + dx
        ant.y = y + dy
    return changed


def step_tick(
    ants: Iterable[Ant],
    grid: SparseGrid,
    global_rules: Mapping[int, Sequence[Rule]],
    rng: Random,
    on_change: Callable[[int, int], None] | None = None,
) -> int:
    """Step every ant once, in order, against the shared grid.

    Later ants see writes made by earlier ants in the same tick. Returns the
    number of cells whose color changed.
    """
    changes = 0
    for ant in ants:
        changed = step_ant(ant, grid, global_rules, rng)
        if changed is not None:
            changes += 1
            if on_change is not None:
                on_change(*changed)
    return changes
