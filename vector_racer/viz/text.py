"""Plain-text rendering of a track grid, one character per cell."""

from __future__ import annotations

from vector_racer.config.constants import PLAYER_SYMBOLS
from vector_racer.domain.cells import PLAYER_FLAGS, CellFlag, Grid

CELL_SYMBOLS: dict[int, str] = {
    CellFlag.INIT: ".",
    CellFlag.EMPTY: " ",
    CellFlag.WALL: "#",
    CellFlag.FINISH: "-",
    CellFlag.TRACE: "~",
    CellFlag.COIN: "*",
    **dict(zip(PLAYER_FLAGS, PLAYER_SYMBOLS, strict=True)),
}

# Highest bit first: occupants hide coins, coins hide traces, and so on.
_PRIORITY: tuple[int, ...] = tuple(sorted(CELL_SYMBOLS, reverse=True))


def cell_symbol(value: int) -> str:
    """Symbol of the highest-priority flag set in *value*."""
    value = int(value)
    for flag in _PRIORITY:
        if flag and value & flag:
            return CELL_SYMBOLS[flag]
    return CELL_SYMBOLS[CellFlag.INIT]


def grid_to_text(grid: Grid) -> str:
    return "\n".join("".join(cell_symbol(value) for value in row) for row in grid) + "\n"
