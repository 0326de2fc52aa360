"""Shape descriptors for rendering surfaces and a matplotlib track renderer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import matplotlib.pyplot as plt
from matplotlib.patches import Ellipse, Rectangle

from vector_racer.domain.cells import PLAYER_FLAGS, CellFlag, Grid, has_flag
from vector_racer.viz.theme import DEFAULT_THEME, Theme

ShapeKind = Literal["rect", "oval"]


@dataclass(frozen=True)
class Shape:
    """One colored marker drawn inside a grid cell."""

    kind: ShapeKind
    row: int
    col: int
    color: str
    layer: str


def build_shapes(grid: Grid, theme: Theme = DEFAULT_THEME) -> list[Shape]:
    """Rebuild the shape list for the current grid.

    Shapes are emitted per cell in drawing order: wall, trace, finish, coin,
    then one oval per occupying participant.
    """
    layers: list[tuple[int, ShapeKind, str, str]] = [
        (CellFlag.WALL, "rect", theme.wall_color, "wall"),
        (CellFlag.TRACE, "oval", theme.trace_color, "trace"),
        (CellFlag.FINISH, "rect", theme.finish_color, "finish"),
        (CellFlag.COIN, "oval", theme.coin_color, "coin"),
    ]
    layers.extend(
        (flag, "oval", color, f"player_{slot}")
        for slot, (flag, color) in enumerate(zip(PLAYER_FLAGS, theme.player_colors, strict=True))
    )
    shapes: list[Shape] = []
    rows, cols = grid.shape
    for row in range(rows):
        for col in range(cols):
            value = grid[row, col]
            for flag, kind, color, layer in layers:
                if has_flag(value, flag):
                    shapes.append(Shape(kind, row, col, color, layer))
    return shapes


def draw_shapes(ax: plt.Axes, shapes: list[Shape], theme: Theme = DEFAULT_THEME) -> None:
    """Add one patch per shape to *ax*; cell (row, col) spans [col, col+1]."""
    size = theme.marker_fraction
    pad = (1.0 - size) / 2
    for shape in shapes:
        if shape.kind == "rect":
            patch = Rectangle((shape.col + pad, shape.row + pad), size, size, color=shape.color)
        else:
            patch = Ellipse((shape.col + 0.5, shape.row + 0.5), size, size, color=shape.color)
        ax.add_patch(patch)


def render_track(
    grid: Grid,
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
    title: str | None = None,
    cell_inches: float = 0.15,
) -> Path:
    """Draw *grid* into an image file and return its path."""
    output_path = Path(output_path)
    rows, cols = grid.shape
    fig, ax = plt.subplots(figsize=(max(cols * cell_inches, 2.0), max(rows * cell_inches, 2.0)))
    try:
        ax.set_facecolor(theme.background_color)
        draw_shapes(ax, build_shapes(grid, theme), theme)
        ax.set_xlim(0, cols)
        ax.set_ylim(rows, 0)
        ax.set_aspect("equal")
        ax.set_xticks([])
        ax.set_yticks([])
        if title:
            ax.set_title(title)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=100, facecolor=theme.background_color)
    finally:
        plt.close(fig)
    return output_path
