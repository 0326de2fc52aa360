"""Configuration dataclasses for track generation and race runs.

Both dataclasses are frozen and validate themselves on construction, so a
malformed parameter is rejected before any grid or participant exists.
"""

from __future__ import annotations

from dataclasses import dataclass

from vector_racer.config.constants import (
    HOLE_PUNCH_ITERATIONS,
    MAX_PARTICIPANTS,
    NANOS_PER_MILLI,
)

__all__ = [
    "RaceConfig",
    "TrackConfig",
]


@dataclass(frozen=True)
class TrackConfig:
    """Parameters that fully determine a generated track.

    Two equal configs always produce byte-identical grids, baseline paths and
    coin placements.
    """

    rows: int
    cols: int
    scale: int = 1
    hole_probability: float = 0.0
    coin_count: int = 0
    seed: int = 0
    hole_iterations: int = HOLE_PUNCH_ITERATIONS
    """Number of full hole-punching passes over the logical maze."""

    def __post_init__(self) -> None:
        if self.rows < 3 or self.cols < 3:
            raise ValueError("rows and cols must be >= 3")
        if self.rows % 2 == 0 or self.cols % 2 == 0:
            raise ValueError("rows and cols must be odd so the finish joins the maze lattice")
        if self.scale < 1:
            raise ValueError("scale must be >= 1")
        if not 0.0 <= self.hole_probability <= 1.0:
            raise ValueError("hole_probability must be in [0.0, 1.0]")
        if self.coin_count < 0:
            raise ValueError("coin_count must be >= 0")
        if self.hole_iterations < 0:
            raise ValueError("hole_iterations must be >= 0")

    @property
    def grid_shape(self) -> tuple[int, int]:
        """Shape of the upscaled play grid."""
        return (self.rows * self.scale, self.cols * self.scale)


@dataclass(frozen=True)
class RaceConfig:
    """Track parameters plus the per-participant time budget and line-up."""

    track: TrackConfig
    time_budget_ms: int
    participants: tuple[str, ...]

    def __post_init__(self) -> None:
        if self.time_budget_ms < 1:
            raise ValueError("time_budget_ms must be >= 1")
        if not 1 <= len(self.participants) <= MAX_PARTICIPANTS:
            raise ValueError(f"participants must contain 1 to {MAX_PARTICIPANTS} entries")
        if any(not kind.strip() for kind in self.participants):
            raise ValueError("participant kinds must be non-empty")

    @property
    def time_budget_ns(self) -> int:
        return self.time_budget_ms * NANOS_PER_MILLI
