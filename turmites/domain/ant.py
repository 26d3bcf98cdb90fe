"""Mobile turmite entity: position, heading, state, and optional private rules."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum

from turmites.config.constants import HALT_STATE
from turmites.domain.rules import RuleTable


class Heading(IntEnum):
    """Four discrete headings, clockwise from North. Screen y grows southward."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def turned(self, quarter_turns: int) -> Heading:
        """Return the heading after *quarter_turns* clockwise 90-degree rotations."""
        return Heading((self + quarter_turns) % 4)

    @property
    def vector(self) -> tuple[int, int]:
        return HEADING_VECTORS[self]


HEADING_VECTORS: dict[Heading, tuple[int, int]] = {
    Heading.NORTH: (0, -1),
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, 1),
    Heading.WEST: (-1, 0),
}


@dataclass
class Ant:
    """A single turmite. ``rules`` of None means the shared table is used."""

    x: int
    y: int
    heading: Heading = Heading.NORTH
    state: int = 0
    rules: RuleTable | None = None

    @property
    def halted(self) -> bool:
        return self.state == HALT_STATE

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_ant(candidate: object) -> bool:
    """Return True if *candidate* (an Ant or a raw mapping) may join a population.

    Raw mappings use the export keys ``x``, ``y``, ``dir`` and ``state``.
    """
    if isinstance(candidate, Ant):
        if not isinstance(candidate.heading, Heading):
            return False
        x, y, heading, state = candidate.x, candidate.y, candidate.heading, candidate.state
    elif isinstance(candidate, Mapping):
        x, y = candidate.get("x"), candidate.get("y")
        heading, state = candidate.get("dir"), candidate.get("state")
    else:
        return False
    if not (_is_int(x) and _is_int(y) and _is_int(state)):
        return False
    if not _is_int(heading) or not 0 <= heading < 4:  # type: ignore[operator]
        return False
    return state >= HALT_STATE  # type: ignore[operator]


def ant_from_payload(payload: Mapping[str, object]) -> Ant:
    """Build an Ant from its export mapping. Raises :exc:`ValueError` if invalid."""
    if not is_valid_ant(payload):
        raise ValueError(f"Invalid ant payload: {dict(payload)!r}")
    return Ant(
        x=payload["x"],  # type: ignore[arg-type]
        y=payload["y"],  # type: ignore[arg-type]
        heading=Heading(payload["dir"]),
        state=payload["state"],  # type: ignore[arg-type]
    )


def ant_to_payload(ant: Ant) -> dict[str, int]:
    return {"x": ant.x, "y": ant.y, "dir": int(ant.heading), "state": ant.state}
