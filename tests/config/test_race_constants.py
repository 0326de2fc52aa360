from vector_racer.config.constants import (
    CARVE_ORIGIN,
    COIN_VALUE_FACTOR,
    DISQUALIFIED_TIME,
    FLUSH_THRESHOLD,
    HOLE_PUNCH_ITERATIONS,
    MAX_PARTICIPANTS,
    NANOS_PER_MILLI,
    PLAYER_SYMBOLS,
    START_CELL,
)
from vector_racer.domain.cells import PLAYER_FLAGS


def test_one_occupancy_flag_per_participant() -> None:
    assert MAX_PARTICIPANTS == len(PLAYER_FLAGS) == len(PLAYER_SYMBOLS) == 4


def test_player_symbols_are_distinct_characters() -> None:
    assert len(set(PLAYER_SYMBOLS)) == len(PLAYER_SYMBOLS)
    assert all(len(symbol) == 1 for symbol in PLAYER_SYMBOLS)


def test_coin_value_factor() -> None:
    assert COIN_VALUE_FACTOR == 3


def test_start_sits_in_top_border_above_carve_origin() -> None:
    assert START_CELL == (0, 1)
    assert CARVE_ORIGIN == (1, 1)


def test_disqualified_time_is_not_positive() -> None:
    assert DISQUALIFIED_TIME <= 0


def test_nanos_per_milli() -> None:
    assert NANOS_PER_MILLI == 1_000_000


def test_hole_punch_iterations_is_positive() -> None:
    assert isinstance(HOLE_PUNCH_ITERATIONS, int) and HOLE_PUNCH_ITERATIONS >= 1


def test_flush_threshold_is_large() -> None:
    assert isinstance(FLUSH_THRESHOLD, int) and FLUSH_THRESHOLD >= 1024
