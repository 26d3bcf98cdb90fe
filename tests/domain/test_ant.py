"""Tests for turmites.domain.ant module."""

from __future__ import annotations

import pytest

from turmites.domain.ant import (
    Ant,
    Heading,
    ant_from_payload,
    ant_to_payload,
    is_valid_ant,
)


class TestHeading:
    def test_clockwise_turns(self) -> None:
        assert Heading.NORTH.turned(1) is Heading.EAST
        assert Heading.NORTH.turned(-1) is Heading.WEST
        assert Heading.EAST.turned(2) is Heading.WEST
        assert Heading.WEST.turned(1) is Heading.NORTH

    def test_vectors_use_screen_coordinates(self) -> None:
        assert Heading.NORTH.vector == (0, -1)
        assert Heading.EAST.vector == (1, 0)
        assert Heading.SOUTH.vector == (0, 1)
        assert Heading.WEST.vector == (-1, 0)


class TestAnt:
    def test_defaults(self) -> None:
        ant = Ant(x=2, y=3)
        assert ant.heading is Heading.NORTH
        assert ant.state == 0
        assert ant.rules is None
        assert ant.position == (2, 3)
        assert not ant.halted

    def test_halted(self) -> None:
        assert Ant(x=0, y=0, state=-1).halted


class TestIsValidAnt:
    def test_ant_instance(self) -> None:
        assert is_valid_ant(Ant(x=-5, y=9, heading=Heading.SOUTH, state=4))

    def test_mapping(self) -> None:
        assert is_valid_ant({"x": 0, "y": 0, "dir": 3, "state": -1})

    def test_ant_with_plain_int_heading_rejected(self) -> None:
        assert not is_valid_ant(Ant(x=0, y=0, heading=2))  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "candidate",
        [
            {"x": 0, "y": 0, "dir": 4, "state": 0},
            {"x": 0, "y": 0, "dir": -1, "state": 0},
            {"x": "0", "y": 0, "dir": 0, "state": 0},
            {"x": 0.5, "y": 0, "dir": 0, "state": 0},
            {"x": 0, "y": 0, "dir": 0, "state": -2},
            {"x": True, "y": 0, "dir": 0, "state": 0},
            {"x": 0, "y": 0, "state": 0},
            "not an ant",
            None,
        ],
    )
    def test_rejects_malformed(self, candidate: object) -> None:
        assert not is_valid_ant(candidate)


class TestPayload:
    def test_round_trip(self) -> None:
        ant = Ant(x=4, y=-7, heading=Heading.WEST, state=2)
        restored = ant_from_payload(ant_to_payload(ant))
        assert restored == ant

    def test_payload_keys(self) -> None:
        payload = ant_to_payload(Ant(x=1, y=2, heading=Heading.EAST, state=0))
        assert payload == {"x": 1, "y": 2, "dir": 1, "state": 0}

    def test_invalid_payload_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid ant payload"):
            ant_from_payload({"x": 0, "y": 0, "dir": 9, "state": 0})