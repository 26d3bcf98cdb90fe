"""Centralized domain constants for turmite simulations.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

DEFAULT_COLOR = 0
"""Color of a never-visited cell. Cells holding it are not stored."""

HALT_STATE = -1
"""Reserved ``next_state`` marking a permanently halted ant."""

PALETTE_SIZE = 12
"""Number of colors the built-in palette can display."""

MIN_ANTS = 1
"""Smallest allowed population."""

MAX_ANTS = 1024
"""Largest allowed population."""

MAX_RANDOM_STATES = 5
"""Upper bound on states for randomly generated per-ant rule tables."""

MAX_RANDOM_COLORS = 11
"""Upper bound on colors for randomly generated per-ant rule tables."""

FIELD_WIDTH = 160
"""Default placement field width in cells."""

FIELD_HEIGHT = 120
"""Default placement field height in cells."""

PLACEMENT_MAX_ATTEMPTS = 2_000
"""Retries for finding an unoccupied cell in random placement."""

SPEED_INPUT_MIN = 1
"""Lowest normalized speed control value."""

SPEED_INPUT_MID = 50
"""Normalized speed control midpoint (boundary of the two curve segments)."""

SPEED_INPUT_MAX = 100
"""Highest normalized speed control value."""

MIN_STEPS_PER_SECOND = 1.0
"""Target rate at the lowest speed input."""

MID_STEPS_PER_SECOND = 60.0
"""Target rate at the midpoint speed input."""

MAX_STEPS_PER_SECOND = 100_000.0
"""Target rate at the highest speed input."""

SPEED_CURVE_POWER = 3
"""Exponent of the upper speed-curve segment."""

MAX_STEPS_PER_WAKE = 100_000
"""Safety cap on ant-steps executed by one simulation-loop wake."""

FRAME_INTERVAL = 1.0 / 60.0
"""Render-loop period in seconds."""

FLUSH_THRESHOLD = 8_192
"""Flush ant log rows to Parquet once this in-memory row count is reached."""

CAMERA_INITIAL_SCALE = 8.0
"""Pixels per cell of a freshly reset camera."""

CAMERA_MIN_SCALE = 0.1
"""Smallest camera scale."""

CAMERA_MAX_SCALE = 50.0
"""Largest camera scale."""

CAMERA_ZOOM_FACTOR = 1.1
"""Scale multiplier applied per zoom notch."""
