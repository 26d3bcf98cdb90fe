"""Configuration dataclasses for turmite simulations.

All frozen dataclasses that parameterise ant placement, random rule
generation, scheduling, and headless runs live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from turmites.config.constants import (
    FIELD_HEIGHT,
    FIELD_WIDTH,
    FRAME_INTERVAL,
    MAX_ANTS,
    MAX_RANDOM_COLORS,
    MAX_RANDOM_STATES,
    MAX_STEPS_PER_WAKE,
    MIN_ANTS,
    PALETTE_SIZE,
    SPEED_INPUT_MAX,
    SPEED_INPUT_MIN,
)

__all__ = [
    "HeadingMode",
    "MoveOptions",
    "PlacementMode",
    "RunConfig",
    "RunSummary",
    "SchedulerConfig",
    "SimulationConfig",
]

# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunSummary:
    """Top-level result for one headless run."""

    run_id: str
    ticks_executed: int
    cells_painted: int
    ants_halted: int
    termination_reason: str | None


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class PlacementMode(Enum):
    """Initial ant placement strategy."""

    CENTER = "center"
    RANDOM = "random"
    GRID = "grid"
    ROW = "row"


class HeadingMode(Enum):
    """Initial ant heading: a fixed direction or random per ant."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"
    RANDOM = "random"


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MoveOptions:
    """Move families enabled for random rule generation. Stay is always enabled."""

    use_relative: bool = True
    use_absolute: bool = False
    use_random: bool = False


@dataclass(frozen=True)
class SimulationConfig:
    """Population and placement settings consumed when a simulation is (re)set."""

    ant_count: int = 1
    placement: PlacementMode = PlacementMode.CENTER
    heading: HeadingMode = HeadingMode.NORTH
    per_ant_rules: bool = False
    field_width: int = FIELD_WIDTH
    field_height: int = FIELD_HEIGHT
    max_states: int = MAX_RANDOM_STATES
    max_colors: int = MAX_RANDOM_COLORS
    move_options: MoveOptions = field(default_factory=MoveOptions)

    def __post_init__(self) -> None:
        if not MIN_ANTS <= self.ant_count <= MAX_ANTS:
            raise ValueError(f"ant_count must be in [{MIN_ANTS}, {MAX_ANTS}]")
        if self.field_width < 1 or self.field_height < 1:
            raise ValueError("field dimensions must be >= 1")
        if self.max_states < 1:
            raise ValueError("max_states must be >= 1")
        if not 2 <= self.max_colors <= PALETTE_SIZE:
            raise ValueError(f"max_colors must be in [2, {PALETTE_SIZE}]")

    @property
    def uses_private_rules(self) -> bool:
        """Private tables only make sense with more than one ant."""
        return self.per_ant_rules and self.ant_count > 1


@dataclass(frozen=True)
class SchedulerConfig:
    """Real-time pacing knobs."""

    speed: int = 50
    """Normalized speed control input, mapped to steps/second."""
    frame_interval: float = FRAME_INTERVAL
    max_steps_per_wake: int = MAX_STEPS_PER_WAKE

    def __post_init__(self) -> None:
        if not SPEED_INPUT_MIN <= self.speed <= SPEED_INPUT_MAX:
            raise ValueError(f"speed must be in [{SPEED_INPUT_MIN}, {SPEED_INPUT_MAX}]")
        if self.frame_interval <= 0:
            raise ValueError("frame_interval must be > 0")
        if self.max_steps_per_wake < 1:
            raise ValueError("max_steps_per_wake must be >= 1")


@dataclass(frozen=True)
class RunConfig:
    """Headless batch-run parameters."""

    ticks: int = 1_000
    seed: int = 0
    log_interval: int = 1
    stop_when_halted: bool = True

    def __post_init__(self) -> None:
        if self.ticks < 1:
            raise ValueError("ticks must be >= 1")
        if self.log_interval < 1:
            raise ValueError("log_interval must be >= 1")
