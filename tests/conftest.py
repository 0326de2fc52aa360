"""Shared fixtures: hand-drawn grids and tracks."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np
import pytest

from vector_racer.domain.cells import CellFlag, Coin, Grid, Position
from vector_racer.domain.pathfinding import shortest_path
from vector_racer.domain.track import Track

_SYMBOLS = {
    "#": CellFlag.WALL,
    " ": CellFlag.EMPTY,
    ".": CellFlag.EMPTY,
    "-": CellFlag.FINISH | CellFlag.EMPTY,
    "*": CellFlag.COIN | CellFlag.EMPTY,
}


def make_grid(rows: Sequence[str]) -> Grid:
    """Build a grid from strings: '#' wall, '.' empty, '-' finish, '*' coin."""
    return np.array([[int(_SYMBOLS[ch]) for ch in row] for row in rows], dtype=np.int64)


def make_track(
    rows: Sequence[str], start: Position, coin_values: dict[Position, int] | None = None
) -> Track:
    grid = make_grid(rows)
    coin_values = coin_values or {}
    coins = tuple(Coin(position, value) for position, value in coin_values.items())
    return Track(grid=grid, start=start, path=shortest_path(start, grid), coins=coins)


@pytest.fixture
def grid_from_rows() -> Callable[[Sequence[str]], Grid]:
    return make_grid


@pytest.fixture
def corridor_track() -> Track:
    """5x5 track with a straight corridor (0,1) -> (0,3), finish at (0,3)."""
    return make_track(
        [
            "#..-#",
            "#####",
            "#####",
            "#####",
            "#####",
        ],
        start=Position(0, 1),
    )


@pytest.fixture
def open_grid() -> Grid:
    """7x7 room: wall border around a 5x5 empty interior."""
    return make_grid(
        [
            "#######",
            "#.....#",
            "#.....#",
            "#.....#",
            "#.....#",
            "#.....#",
            "#######",
        ]
    )


@pytest.fixture
def bend_track() -> Track:
    """Corridor with one bend; baseline (1,1) (1,2) (2,3) (3,3)."""
    return make_track(
        [
            "#####",
            "#...#",
            "###.#",
            "###-#",
            "#####",
        ],
        start=Position(1, 1),
    )


@pytest.fixture
def track_from_rows() -> Callable[..., Track]:
    return make_track
