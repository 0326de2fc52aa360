"""Tests for momentum physics, wall clamping, traces and coin pickup."""

from __future__ import annotations

import pytest

from vector_racer.domain.cells import (
    NAME_TO_DIRECTION,
    CellFlag,
    Coin,
    Direction,
    ParticipantState,
    Position,
    has_flag,
    is_free,
    set_flag,
)
from vector_racer.domain.geometry import line_8connect
from vector_racer.domain.movement import (
    apply_impulse,
    collect_coins,
    reachable_cell,
    resolve_move,
)

EAST = NAME_TO_DIRECTION["E"]
SOUTH = NAME_TO_DIRECTION["S"]
WEST = NAME_TO_DIRECTION["W"]
SOUTH_EAST = NAME_TO_DIRECTION["SE"]
PASS = NAME_TO_DIRECTION["0"]


class TestApplyImpulse:
    def test_impulse_accelerates_from_rest(self, open_grid) -> None:
        state = ParticipantState(Position(3, 3))
        clamped = apply_impulse(state, EAST, open_grid)
        assert not clamped
        assert state.position == Position(3, 4)
        assert state.velocity == Position(0, 1)

    def test_momentum_carries_over(self, open_grid) -> None:
        state = ParticipantState(Position(1, 1), Position(0, 1))
        apply_impulse(state, EAST, open_grid)
        assert state.velocity == Position(0, 2)
        assert state.position == Position(1, 3)

    def test_pass_keeps_velocity(self, open_grid) -> None:
        state = ParticipantState(Position(1, 1), Position(1, 1))
        apply_impulse(state, PASS, open_grid)
        assert state.position == Position(2, 2)
        assert state.velocity == Position(1, 1)

    def test_pass_at_rest_stays(self, open_grid) -> None:
        state = ParticipantState(Position(2, 2))
        assert not apply_impulse(state, PASS, open_grid)
        assert state == ParticipantState(Position(2, 2), Position(0, 0))

    def test_wall_clamps_to_last_free_cell(self, open_grid) -> None:
        state = ParticipantState(Position(3, 3), Position(0, 2))
        clamped = apply_impulse(state, EAST, open_grid)
        assert clamped
        assert state.position == Position(3, 5)
        assert state.velocity == Position(0, 2)

    def test_moving_away_from_wall(self, open_grid) -> None:
        state = ParticipantState(Position(1, 1))
        assert not apply_impulse(state, SOUTH, open_grid)
        assert state.position == Position(2, 1)

    @pytest.mark.parametrize(
        ("velocity", "impulse"),
        [
            (Position(0, 3), Direction(0, 1)),
            (Position(-3, 0), Direction(-1, 0)),
            (Position(2, 4), Direction(1, 1)),
            (Position(-4, -1), Direction(-1, -1)),
            (Position(1, -5), Direction(0, -1)),
        ],
    )
    def test_clamped_position_is_last_free_line_cell(
        self, open_grid, velocity: Position, impulse: Direction
    ) -> None:
        origin = Position(3, 3)
        state = ParticipantState(origin, velocity)
        target = origin + Position(velocity.row + impulse.row, velocity.col + impulse.col)
        line = line_8connect(origin, target)
        first_wall = next(i for i, cell in enumerate(line) if not is_free(open_grid, cell))

        assert apply_impulse(state, impulse, open_grid)
        assert state.position == line[first_wall - 1]
        assert state.velocity == state.position - origin
        assert is_free(open_grid, state.position)


class TestReachableCell:
    def test_unobstructed(self, open_grid) -> None:
        assert reachable_cell(open_grid, Position(1, 1), Position(5, 5)) == (Position(5, 5), False)

    def test_target_outside_grid(self, open_grid) -> None:
        assert reachable_cell(open_grid, Position(1, 1), Position(-4, 1)) == (Position(1, 1), True)


class TestResolveMove:
    def test_trace_marks_segment(self, open_grid) -> None:
        state = ParticipantState(Position(3, 1), Position(0, 2))
        result = resolve_move(state, EAST, open_grid)
        assert result.origin == Position(3, 1)
        assert state.position == Position(3, 4)
        for col in range(1, 5):
            assert has_flag(open_grid[3, col], CellFlag.TRACE)
        assert not has_flag(open_grid[3, 5], CellFlag.TRACE)

    def test_collects_coin_mid_segment(self, open_grid) -> None:
        coin = Coin(Position(3, 4), value=6)
        set_flag(open_grid, coin.position, CellFlag.COIN)
        state = ParticipantState(Position(3, 3), Position(0, 1))

        result = resolve_move(state, EAST, open_grid, coins=[coin])

        assert state.position == Position(3, 5)
        assert result.collected == (coin,)
        assert result.collected_value == 6
        assert not has_flag(open_grid[3, 4], CellFlag.COIN)

    def test_coin_collected_at_most_once(self, open_grid) -> None:
        coin = Coin(Position(3, 4), value=6)
        set_flag(open_grid, coin.position, CellFlag.COIN)
        resolve_move(ParticipantState(Position(3, 3)), EAST, open_grid, coins=[coin])

        again = resolve_move(ParticipantState(Position(3, 5)), WEST, open_grid, [coin])
        assert again.collected == ()
        assert again.collected_value == 0

    def test_diagonal_collects_corner_touched_coin(self, open_grid) -> None:
        coin = Coin(Position(1, 2), value=3)
        set_flag(open_grid, coin.position, CellFlag.COIN)
        state = ParticipantState(Position(1, 1), Position(1, 1))

        result = resolve_move(state, SOUTH_EAST, open_grid, coins=[coin])

        assert state.position == Position(3, 3)
        assert result.collected == (coin,)
        # The 8-connected trace does not pass through the coin cell.
        assert not has_flag(open_grid[1, 2], CellFlag.TRACE)

    def test_coin_beside_path_is_left(self, open_grid) -> None:
        coin = Coin(Position(4, 4), value=3)
        set_flag(open_grid, coin.position, CellFlag.COIN)
        result = resolve_move(ParticipantState(Position(3, 1)), EAST, open_grid, coins=[coin])
        assert result.collected == ()
        assert has_flag(open_grid[4, 4], CellFlag.COIN)


class TestCollectCoins:
    def test_flag_without_coin_record_is_cleared_only(self, open_grid) -> None:
        set_flag(open_grid, Position(2, 2), CellFlag.COIN)
        assert collect_coins(open_grid, Position(2, 1), Position(2, 3), coins=()) == ()
        assert not has_flag(open_grid[2, 2], CellFlag.COIN)
