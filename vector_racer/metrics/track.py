"""Structural track metrics: connectivity and loop count of the free cells."""

from __future__ import annotations

from dataclasses import dataclass

import networkx as nx

from vector_racer.domain.cells import CellFlag, Grid, Position, has_flag

_ORTHOGONAL = ((0, 1), (1, 0))
_DIAGONAL = ((1, 1), (1, -1))


@dataclass(frozen=True)
class TrackSummary:
    """Counts describing the topology of a grid's free cells."""

    free_cells: int
    wall_cells: int
    components: int
    cycle_rank: int
    """Independent loops (``edges - nodes + components``); 0 for a perfect maze."""


def track_graph(grid: Grid, diagonal: bool = False) -> nx.Graph:
    """Graph of non-wall cells joined to their free 4- (or 8-) neighbors."""
    rows, cols = grid.shape
    steps = _ORTHOGONAL + _DIAGONAL if diagonal else _ORTHOGONAL
    graph = nx.Graph()
    for row in range(rows):
        for col in range(cols):
            if has_flag(grid[row, col], CellFlag.WALL):
                continue
            graph.add_node(Position(row, col))
            for d_row, d_col in steps:
                n_row, n_col = row + d_row, col + d_col
                if (
                    0 <= n_row < rows
                    and 0 <= n_col < cols
                    and not has_flag(grid[n_row, n_col], CellFlag.WALL)
                ):
                    graph.add_edge(Position(row, col), Position(n_row, n_col))
    return graph


def reachable_cells(grid: Grid, start: Position, diagonal: bool = False) -> set[Position]:
    """Free cells connected to *start*."""
    graph = track_graph(grid, diagonal=diagonal)
    if start not in graph:
        return set()
    return set(nx.node_connected_component(graph, start))


def summarize_track(grid: Grid, diagonal: bool = False) -> TrackSummary:
    graph = track_graph(grid, diagonal=diagonal)
    components = nx.number_connected_components(graph)
    return TrackSummary(
        free_cells=graph.number_of_nodes(),
        wall_cells=int(grid.size) - graph.number_of_nodes(),
        components=components,
        cycle_rank=graph.number_of_edges() - graph.number_of_nodes() + components,
    )
