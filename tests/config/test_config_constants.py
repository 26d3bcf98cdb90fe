from turmites.config.constants import (
    DEFAULT_COLOR,
    FLUSH_THRESHOLD,
    HALT_STATE,
    MAX_ANTS,
    MAX_RANDOM_COLORS,
    MAX_STEPS_PER_SECOND,
    MAX_STEPS_PER_WAKE,
    MID_STEPS_PER_SECOND,
    MIN_ANTS,
    MIN_STEPS_PER_SECOND,
    PALETTE_SIZE,
    SPEED_INPUT_MAX,
    SPEED_INPUT_MID,
    SPEED_INPUT_MIN,
)


def test_default_color_is_first_palette_entry() -> None:
    assert DEFAULT_COLOR == 0
    assert DEFAULT_COLOR < PALETTE_SIZE


def test_halt_state_is_below_every_real_state() -> None:
    assert HALT_STATE == -1


def test_random_colors_fit_in_palette() -> None:
    assert 2 <= MAX_RANDOM_COLORS <= PALETTE_SIZE


def test_ant_bounds_are_ordered() -> None:
    assert 1 == MIN_ANTS < MAX_ANTS


def test_speed_inputs_are_ordered() -> None:
    assert SPEED_INPUT_MIN < SPEED_INPUT_MID < SPEED_INPUT_MAX


def test_speed_rates_are_ordered() -> None:
    assert 0 < MIN_STEPS_PER_SECOND < MID_STEPS_PER_SECOND < MAX_STEPS_PER_SECOND


def test_wake_cap_and_flush_threshold_are_positive() -> None:
    assert isinstance(MAX_STEPS_PER_WAKE, int) and MAX_STEPS_PER_WAKE > 0
    assert isinstance(FLUSH_THRESHOLD, int) and FLUSH_THRESHOLD > 0
