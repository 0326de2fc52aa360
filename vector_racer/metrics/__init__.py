"""Track metrics."""

from vector_racer.metrics.track import (
    TrackSummary,
    reachable_cells,
    summarize_track,
    track_graph,
)

__all__ = [
    "TrackSummary",
    "reachable_cells",
    "summarize_track",
    "track_graph",
]
