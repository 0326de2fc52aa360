"""Discrete line rasterization on the track grid.

Three rasterizations of the segment between two cells are provided:

- ``line_8connect``: Bresenham cells, diagonal steps allowed. Used to decide
  whether a body can travel along a segment without entering a wall.
- ``line_4connect``: the same end points reached with orthogonal steps only.
- ``coverage``: every cell whose unit square is crossed or touched by the
  continuous segment joining the two cell centers. Used for pickups.

All functions are pure.
"""

from __future__ import annotations

from vector_racer.domain.cells import Position

Point = tuple[int, int]


def line_8connect(start: Position, end: Position) -> list[Position]:
    """Return the 8-connected cells from *start* to *end*, both included."""
    d_row = abs(end.row - start.row)
    d_col = abs(end.col - start.col)
    step_row = 1 if start.row < end.row else -1
    step_col = 1 if start.col < end.col else -1
    error = d_row - d_col
    row, col = start.row, start.col

    cells: list[Position] = []
    for _ in range(max(d_row, d_col) + 1):
        cells.append(Position(row, col))
        doubled = 2 * error
        if doubled < d_row:
            col += step_col
            error += d_row
        if -d_col < doubled:
            row += step_row
            error -= d_col
    return cells


def line_4connect(start: Position, end: Position) -> list[Position]:
    """Return the 4-connected cells from *start* to *end*, both included."""
    d_row = abs(end.row - start.row)
    d_col = abs(end.col - start.col)
    step_row = 1 if start.row < end.row else -1
    step_col = 1 if start.col < end.col else -1
    error = 0
    row, col = start.row, start.col

    cells: list[Position] = []
    for _ in range(d_row + d_col + 1):
        cells.append(Position(row, col))
        error_row = error + d_row
        error_col = error - d_col
        if abs(error_row) < abs(error_col):
            col += step_col
            error = error_row
        else:
            row += step_row
            error = error_col
    return cells


def side(a: Point, b: Point, p: Point) -> int:
    """Sign of the cross product locating *p* relative to the directed line a->b.

    Returns 1 for the left side, -1 for the right side, 0 when collinear.
    """
    cross = (b[0] - a[0]) * (p[1] - a[1]) - (b[1] - a[1]) * (p[0] - a[0])
    return (cross > 0) - (cross < 0)


def coverage(start: Position, end: Position) -> frozenset[Position]:
    """Cells touched by the segment between the centers of *start* and *end*.

    Coordinates are doubled so that cell centers (``2k + 1``) and cell
    corners (``2k``) are both integers. A cell in the bounding box is kept
    unless all four of its corners lie strictly on the same side of the line.
    """
    step_row = -1 if end.row - start.row < 0 else 1
    step_col = -1 if end.col - start.col < 0 else 1
    a = (start.row * 2 + 1, start.col * 2 + 1)
    b = (end.row * 2 + 1, end.col * 2 + 1)

    cells: set[Position] = set()
    for row in range(start.row, end.row + step_row, step_row):
        for col in range(start.col, end.col + step_col, step_col):
            top, left = row * 2, col * 2
            sides = (
                side(a, b, (top, left))
                + side(a, b, (top + 2, left))
                + side(a, b, (top, left + 2))
                + side(a, b, (top + 2, left + 2))
            )
            if abs(sides) != 4:
                cells.add(Position(row, col))
    return frozenset(cells)
