"""Configuration layer: constants and typed config dataclasses."""

from vector_racer.config.constants import (
    COIN_VALUE_FACTOR,
    DISQUALIFIED_TIME,
    FLUSH_THRESHOLD,
    HOLE_PUNCH_ITERATIONS,
    MAX_PARTICIPANTS,
    NANOS_PER_MILLI,
)
from vector_racer.config.types import RaceConfig, TrackConfig

__all__ = [
    "COIN_VALUE_FACTOR",
    "DISQUALIFIED_TIME",
    "FLUSH_THRESHOLD",
    "HOLE_PUNCH_ITERATIONS",
    "MAX_PARTICIPANTS",
    "NANOS_PER_MILLI",
    "RaceConfig",
    "TrackConfig",
]
