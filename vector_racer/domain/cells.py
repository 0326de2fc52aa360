"""Grid flags and the small value types shared by every domain module.

Coordinates are ``(row, col)`` with the origin at the top-left corner;
positive rows point down and positive columns point right.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntFlag

import numpy as np


Grid = np.ndarray
"""2-D ``int64`` array of ``CellFlag`` bitmasks, indexed ``grid[row, col]``."""


class CellFlag(IntFlag):
    """Bit layout of a single grid cell. Flags other than WALL may co-occur."""

    INIT = 0
    EMPTY = 1 << 0
    WALL = 1 << 1
    FINISH = 1 << 2
    TRACE = 1 << 3
    COIN = 1 << 4
    PLAYER_0 = 1 << 5
    PLAYER_1 = 1 << 6
    PLAYER_2 = 1 << 7
    PLAYER_3 = 1 << 8


PLAYER_FLAGS: tuple[CellFlag, ...] = (
    CellFlag.PLAYER_0,
    CellFlag.PLAYER_1,
    CellFlag.PLAYER_2,
    CellFlag.PLAYER_3,
)


def has_flag(value: int, flag: int) -> bool:
    """Return True iff every bit of *flag* is set in *value*."""
    return (int(value) & flag) == flag


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True, order=True)
class Position:
    """Immutable grid cell; ordering is row-major."""

    row: int
    col: int

    def __add__(self, other: Position | Direction) -> Position:
        return Position(self.row + other.row, self.col + other.col)

    def __sub__(self, other: Position) -> Position:
        return Position(self.row - other.row, self.col - other.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True, order=True)
class Direction:
    """Steering impulse or unit neighbor offset; components are signs."""

    row: int
    col: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "row", _sign(self.row))
        object.__setattr__(self, "col", _sign(self.col))

    @property
    def name(self) -> str:
        return DIRECTION_NAMES[self]

    def __str__(self) -> str:
        return self.name


DIRECTIONS: tuple[Direction, ...] = (
    Direction(0, 0),
    Direction(0, -1),
    Direction(-1, -1),
    Direction(-1, 0),
    Direction(-1, 1),
    Direction(0, 1),
    Direction(1, 1),
    Direction(1, 0),
    Direction(1, -1),
)
"""All nine directions in canonical order; BFS expands neighbors in this order."""

NAME_TO_DIRECTION: dict[str, Direction] = dict(
    zip(("0", "W", "NW", "N", "NE", "E", "SE", "S", "SW"), DIRECTIONS, strict=True)
)
DIRECTION_NAMES: dict[Direction, str] = {d: name for name, d in NAME_TO_DIRECTION.items()}


@dataclass
class ParticipantState:
    """Position and velocity of one participant; the only mutable physics."""

    position: Position
    velocity: Position = Position(0, 0)

    def copy(self) -> ParticipantState:
        return ParticipantState(self.position, self.velocity)

    def __str__(self) -> str:
        return f"p:{self.position} v:{self.velocity}"


@dataclass(frozen=True)
class Coin:
    """Collectible cell; its value is subtracted from the collector's score."""

    position: Position
    value: int


def manhattan_distance(a: Position, b: Position) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


def euclidean_distance(a: Position, b: Position) -> float:
    return math.hypot(a.row - b.row, a.col - b.col)


def direction_between(origin: Position, target: Position) -> Direction:
    """Sign direction pointing from *origin* towards *target*."""
    return Direction(target.row - origin.row, target.col - origin.col)


def is_free(grid: Grid, position: Position) -> bool:
    """True iff *position* lies on the grid and is not a wall."""
    rows, cols = grid.shape
    return (
        0 <= position.row < rows
        and 0 <= position.col < cols
        and not has_flag(grid[position.row, position.col], CellFlag.WALL)
    )


def set_flag(grid: Grid, position: Position, flag: int) -> None:
    grid[position.row, position.col] = int(grid[position.row, position.col]) | int(flag)


def clear_flag(grid: Grid, position: Position, flag: int) -> None:
    grid[position.row, position.col] = int(grid[position.row, position.col]) & ~int(flag)


def read_only_copy(grid: Grid) -> Grid:
    """Return a value copy of *grid* that cannot be written to."""
    snapshot = grid.copy()
    snapshot.flags.writeable = False
    return snapshot
