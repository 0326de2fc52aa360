"""Domain layer: grid cells, geometry, track generation, paths and movement."""

from vector_racer.domain.cells import (
    DIRECTIONS,
    NAME_TO_DIRECTION,
    CellFlag,
    Coin,
    Direction,
    ParticipantState,
    Position,
)
from vector_racer.domain.geometry import coverage, line_4connect, line_8connect, side
from vector_racer.domain.movement import MoveResult, resolve_move
from vector_racer.domain.pathfinding import UnreachableFinishError, place_coins, shortest_path
from vector_racer.domain.track import Track, generate_track

__all__ = [
    "CellFlag",
    "Coin",
    "DIRECTIONS",
    "Direction",
    "MoveResult",
    "NAME_TO_DIRECTION",
    "ParticipantState",
    "Position",
    "Track",
    "UnreachableFinishError",
    "coverage",
    "generate_track",
    "line_4connect",
    "line_8connect",
    "place_coins",
    "resolve_move",
    "shortest_path",
    "side",
]
