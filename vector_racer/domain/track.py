"""Procedural maze track generation.

Pipeline (all randomness from one seeded ``random.Random``, consumed in a
fixed order: carving, hole punching, coin placement):

1. ``init_lattice``: odd/odd cells empty, everything else wall.
2. open the start and finish cells in the top border.
3. ``carve``: randomized depth-first perfect maze.
4. ``punch_holes``: probabilistic wall removal that introduces loops.
5. ``upscale`` to the play resolution, then ``cut_corners``.
6. baseline path and coin placement (``vector_racer.domain.pathfinding``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from random import Random

import numpy as np

from vector_racer.config.constants import CARVE_ORIGIN, START_CELL
from vector_racer.config.types import TrackConfig
from vector_racer.domain.cells import CellFlag, Coin, Grid, Position, has_flag
from vector_racer.domain.pathfinding import place_coins, shortest_path

logger = logging.getLogger(__name__)

# Lattice steps (row, col) between carvable cells: N, W, E, S.
_CARVE_STEPS: tuple[tuple[int, int], ...] = ((-2, 0), (0, -2), (0, 2), (2, 0))

_WALL = int(CellFlag.WALL)
_EMPTY = int(CellFlag.EMPTY)
_INIT = int(CellFlag.INIT)


@dataclass(frozen=True)
class Track:
    """A generated play grid with its start cell, baseline path and coins."""

    grid: Grid
    start: Position
    path: tuple[Position, ...]
    coins: tuple[Coin, ...]
    scale: int = 1


def init_lattice(rows: int, cols: int) -> Grid:
    """Return a grid where odd/odd cells are EMPTY and all others WALL."""
    row_idx, col_idx = np.indices((rows, cols))
    carvable = (row_idx % 2 == 1) & (col_idx % 2 == 1)
    return np.where(carvable, _EMPTY, _WALL).astype(np.int64)


def _shuffled_steps(rng: Random) -> Iterator[tuple[int, int]]:
    steps = list(_CARVE_STEPS)
    rng.shuffle(steps)
    return iter(steps)


def carve(start: Position, grid: Grid, rng: Random) -> None:
    """Carve a perfect maze in place by randomized depth-first search.

    Unvisited lattice cells carry EMPTY; visited cells are marked INIT. An
    explicit stack of ``(cell, pending steps)`` replaces recursion while
    keeping the recursive visit order: steps are shuffled when a cell is
    entered and tried one at a time.
    """
    rows, cols = grid.shape
    grid[start.row, start.col] = _INIT
    stack = [(start, _shuffled_steps(rng))]
    while stack:
        cell, pending = stack[-1]
        step = next(pending, None)
        if step is None:
            stack.pop()
            continue
        d_row, d_col = step
        row, col = cell.row + d_row, cell.col + d_col
        if 0 < row < rows and 0 < col < cols and has_flag(grid[row, col], CellFlag.EMPTY):
            between = (cell.row + d_row // 2, cell.col + d_col // 2)
            grid[between] = (int(grid[between]) ^ _WALL) | _EMPTY
            grid[row, col] = _INIT
            stack.append((Position(row, col), _shuffled_steps(rng)))


def _hole_pattern(up: bool, down: bool, left: bool, right: bool) -> bool:
    """True iff the wall/empty neighborhood of a wall cell allows a hole.

    Arguments are True where the orthogonal neighbor is a wall.
    """
    return (
        (not up and not down and not left and not right)  # isolated pillar
        or (up and down and not left and not right)  # vertical wall between corridors
        or (not up and not down and left and right)  # horizontal wall between corridors
        or (up and not down and not left and not right)
        or (not up and not down and not left and right)
        or (not up and not down and left and not right)
        or (not up and down and not left and not right)
    )


def punch_holes(grid: Grid, iterations: int, probability: float, rng: Random) -> None:
    """Open interior walls matching a hole pattern with the given probability.

    A random number is drawn only for cells whose pattern matches, so the
    random stream depends on the maze layout.
    """
    rows, cols = grid.shape
    for _ in range(iterations):
        for row in range(2, rows - 1):
            for col in range(2, cols - 1):
                if not has_flag(grid[row, col], CellFlag.WALL):
                    continue
                matched = _hole_pattern(
                    has_flag(grid[row - 1, col], CellFlag.WALL),
                    has_flag(grid[row + 1, col], CellFlag.WALL),
                    has_flag(grid[row, col - 1], CellFlag.WALL),
                    has_flag(grid[row, col + 1], CellFlag.WALL),
                )
                if matched and rng.random() < probability:
                    grid[row, col] = _INIT


def upscale(grid: Grid, factor: int) -> Grid:
    """Replicate every cell into a ``factor x factor`` block."""
    return np.kron(grid, np.ones((factor, factor), dtype=grid.dtype))


def cut_corners(grid: Grid) -> None:
    """Remove wall cells forming a sharp concave corner on an upscaled grid.

    Matching cells have two adjacent wall neighbors and the two opposite
    neighbors empty, in any of the four rotations.
    """
    rows, cols = grid.shape
    for row in range(1, rows - 1):
        for col in range(1, cols - 1):
            if not has_flag(grid[row, col], CellFlag.WALL):
                continue
            up_wall = has_flag(grid[row - 1, col], CellFlag.WALL)
            down_wall = has_flag(grid[row + 1, col], CellFlag.WALL)
            left_wall = has_flag(grid[row, col - 1], CellFlag.WALL)
            right_wall = has_flag(grid[row, col + 1], CellFlag.WALL)
            up_open = has_flag(grid[row - 1, col], CellFlag.EMPTY)
            down_open = has_flag(grid[row + 1, col], CellFlag.EMPTY)
            left_open = has_flag(grid[row, col - 1], CellFlag.EMPTY)
            right_open = has_flag(grid[row, col + 1], CellFlag.EMPTY)
            if (
                (up_wall and down_open and left_wall and right_open)
                or (up_open and down_wall and left_wall and right_open)
                or (up_open and down_wall and left_open and right_wall)
                or (up_wall and down_open and left_open and right_wall)
            ):
                grid[row, col] = _INIT


def replace(grid: Grid, what: int, with_: int) -> None:
    """Replace every cell exactly equal to *what* with *with_*."""
    grid[grid == int(what)] = int(with_)


def build_maze(config: TrackConfig, rng: Random) -> Grid:
    """Build the logical (unscaled) maze with start and finish opened."""
    grid = init_lattice(config.rows, config.cols)
    start = Position(*START_CELL)
    finish = Position(0, config.cols - 2)
    grid[start.row, start.col] = _EMPTY
    grid[finish.row, finish.col] = int(CellFlag.FINISH | CellFlag.EMPTY)
    carve(Position(*CARVE_ORIGIN), grid, rng)
    return grid


def scaled_start(scale: int) -> Position:
    """Centre of the upscaled block of the logical start cell."""
    return Position(START_CELL[0] * scale + scale // 2, START_CELL[1] * scale + scale // 2)


def generate_track(config: TrackConfig) -> Track:
    """Run the full generation pipeline for *config*."""
    rng = Random(config.seed)
    maze = build_maze(config, rng)
    punch_holes(maze, config.hole_iterations, config.hole_probability, rng)
    replace(maze, CellFlag.INIT, CellFlag.EMPTY)

    grid = upscale(maze, config.scale)
    cut_corners(grid)
    replace(grid, CellFlag.INIT, CellFlag.EMPTY)

    start = scaled_start(config.scale)
    path = shortest_path(start, grid)
    coins = place_coins(grid, config.coin_count, config.scale, rng, path)
    logger.debug(
        "generated %dx%d track (seed=%d): baseline=%d coins=%d",
        grid.shape[0],
        grid.shape[1],
        config.seed,
        len(path),
        len(coins),
    )
    return Track(grid=grid, start=start, path=path, coins=coins, scale=config.scale)
