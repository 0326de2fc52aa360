"""Per-turn movement resolution: momentum, wall clamping, traces and pickups."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from vector_racer.domain.cells import (
    CellFlag,
    Coin,
    Direction,
    Grid,
    ParticipantState,
    Position,
    clear_flag,
    has_flag,
    is_free,
    set_flag,
)
from vector_racer.domain.geometry import coverage, line_8connect


@dataclass(frozen=True)
class MoveResult:
    """Outcome of one resolved move."""

    state: ParticipantState
    origin: Position
    clamped: bool
    collected: tuple[Coin, ...] = ()

    @property
    def collected_value(self) -> int:
        return sum(coin.value for coin in self.collected)


def reachable_cell(grid: Grid, origin: Position, target: Position) -> tuple[Position, bool]:
    """Walk the 8-connected line towards *target* and stop before the first wall.

    Returns the last free cell and whether a wall was hit.
    """
    reached = origin
    for cell in line_8connect(origin, target):
        if not is_free(grid, cell):
            return reached, True
        reached = cell
    return reached, False


def apply_impulse(state: ParticipantState, impulse: Direction, grid: Grid) -> bool:
    """Move *state* in place by one turn of momentum physics.

    A collision stops the body on the last free cell and sets the velocity to
    the displacement actually travelled. Returns True if the move was clamped.
    """
    velocity = Position(state.velocity.row + impulse.row, state.velocity.col + impulse.col)
    target = state.position + velocity
    reached, clamped = reachable_cell(grid, state.position, target)
    if clamped:
        velocity = reached - state.position
    state.velocity = velocity
    state.position = state.position + velocity
    return clamped


def mark_trace(grid: Grid, origin: Position, destination: Position) -> None:
    for cell in line_8connect(origin, destination):
        set_flag(grid, cell, CellFlag.TRACE)


def collect_coins(
    grid: Grid, origin: Position, destination: Position, coins: Sequence[Coin]
) -> tuple[Coin, ...]:
    """Clear COIN flags on every covered cell and return the coins picked up.

    Clearing the flag makes collection happen at most once per coin.
    """
    by_position = {coin.position: coin for coin in coins}
    collected: list[Coin] = []
    for cell in sorted(coverage(origin, destination)):
        if not has_flag(grid[cell.row, cell.col], CellFlag.COIN):
            continue
        clear_flag(grid, cell, CellFlag.COIN)
        coin = by_position.get(cell)
        if coin is not None:
            collected.append(coin)
    return tuple(collected)


def resolve_move(
    state: ParticipantState, impulse: Direction, grid: Grid, coins: Sequence[Coin] = ()
) -> MoveResult:
    """Apply *impulse* to *state*, then update traces and coins on *grid*."""
    origin = state.position
    clamped = apply_impulse(state, impulse, grid)
    mark_trace(grid, origin, state.position)
    collected = collect_coins(grid, origin, state.position, coins)
    return MoveResult(state=state, origin=origin, clamped=clamped, collected=collected)
