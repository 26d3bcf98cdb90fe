"""Configuration layer: constants and typed config dataclasses."""

from turmites.config.constants import (
    DEFAULT_COLOR,
    FLUSH_THRESHOLD,
    HALT_STATE,
    MAX_ANTS,
    MAX_STEPS_PER_WAKE,
    PALETTE_SIZE,
)
from turmites.config.types import (
    HeadingMode,
    MoveOptions,
    PlacementMode,
    RunConfig,
    RunSummary,
    SchedulerConfig,
    SimulationConfig,
)

__all__ = [
    "DEFAULT_COLOR",
    "FLUSH_THRESHOLD",
    "HALT_STATE",
    "HeadingMode",
    "MAX_ANTS",
    "MAX_STEPS_PER_WAKE",
    "MoveOptions",
    "PALETTE_SIZE",
    "PlacementMode",
    "RunConfig",
    "RunSummary",
    "SchedulerConfig",
    "SimulationConfig",
]
