"""Baseline path search and coin placement."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from random import Random
from typing import NamedTuple

from vector_racer.config.constants import COIN_VALUE_FACTOR
from vector_racer.domain.cells import (
    DIRECTIONS,
    CellFlag,
    Coin,
    Grid,
    Position,
    has_flag,
    is_free,
    manhattan_distance,
    set_flag,
)


class UnreachableFinishError(RuntimeError):
    """No finish cell can be reached from the start cell.

    Generation guarantees connectivity, so this signals a broken invariant
    rather than a recoverable condition.
    """


class PathNode(NamedTuple):
    """Search record stored in the BFS arena; ``parent`` is an arena index."""

    position: Position
    parent: int


def shortest_path(start: Position, grid: Grid) -> tuple[Position, ...]:
    """Breadth-first search from *start* to the first FINISH cell dequeued.

    Neighbors are expanded in ``DIRECTIONS`` order and the first discovery of
    a cell wins, so ties between equally short paths are broken by FIFO
    order. The returned path includes both end points.
    """
    arena: list[PathNode] = [PathNode(start, -1)]
    discovered = {start}
    frontier: deque[int] = deque([0])
    while frontier:
        index = frontier.popleft()
        current = arena[index].position
        if has_flag(grid[current.row, current.col], CellFlag.FINISH):
            return _unwind(arena, index)
        for direction in DIRECTIONS:
            neighbor = current + direction
            if neighbor in discovered or not is_free(grid, neighbor):
                continue
            discovered.add(neighbor)
            arena.append(PathNode(neighbor, index))
            frontier.append(len(arena) - 1)
    raise UnreachableFinishError(f"no finish cell reachable from {start}")


def _unwind(arena: Sequence[PathNode], index: int) -> tuple[Position, ...]:
    path: list[Position] = []
    while index != -1:
        node = arena[index]
        path.append(node.position)
        index = node.parent
    path.reverse()
    return tuple(path)


def distance_to_path(position: Position, path: Sequence[Position]) -> int:
    """Minimal manhattan distance from *position* to any cell of *path*."""
    return min(manhattan_distance(position, cell) for cell in path)


def _is_coin_candidate(value: int) -> bool:
    return (
        has_flag(value, CellFlag.EMPTY)
        and not has_flag(value, CellFlag.WALL)
        and not has_flag(value, CellFlag.COIN)
    )


def place_coins(
    grid: Grid, count: int, scale: int, rng: Random, path: Sequence[Position]
) -> tuple[Coin, ...]:
    """Flag *count* distinct random empty cells as coins and value them.

    Rows and columns are sampled from ``[scale, size)``, which keeps coins out
    of the start and finish lane in the top border.
    """
    if count == 0:
        return ()
    rows, cols = grid.shape
    candidates = sum(
        1
        for row in range(scale, rows)
        for col in range(scale, cols)
        if _is_coin_candidate(grid[row, col])
    )
    if candidates < count:
        raise ValueError(f"cannot place {count} coins: only {candidates} free cells available")

    coins: list[Coin] = []
    while len(coins) < count:
        row = scale + rng.randrange(rows - scale)
        col = scale + rng.randrange(cols - scale)
        if not _is_coin_candidate(grid[row, col]):
            continue
        position = Position(row, col)
        set_flag(grid, position, CellFlag.COIN)
        coins.append(Coin(position, COIN_VALUE_FACTOR * distance_to_path(position, path)))
    return tuple(coins)
