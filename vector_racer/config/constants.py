"""Centralized constants for track generation and race simulation.

Values shared by more than one module live here. Consuming modules should
import from this module rather than defining their own inline literals.
"""

from __future__ import annotations

MAX_PARTICIPANTS = 4
"""Number of occupancy flags available on the grid (one per slot)."""

COIN_VALUE_FACTOR = 3
"""Coin value multiplier applied to the distance from the baseline path."""

HOLE_PUNCH_ITERATIONS = 1
"""Default number of full hole-punching passes over the logical maze."""

START_CELL: tuple[int, int] = (0, 1)
"""Logical (unscaled) start cell, opened in the top border wall."""

CARVE_ORIGIN: tuple[int, int] = (1, 1)
"""Logical lattice cell where maze carving begins."""

DISQUALIFIED_TIME = -1
"""Remaining-time sentinel assigned to a disqualified participant."""

NANOS_PER_MILLI = 1_000_000
"""Conversion factor from the millisecond CLI budget to engine nanoseconds."""

FLUSH_THRESHOLD = 4_096
"""Flush turn-log rows to Parquet once this in-memory row count is reached."""

PLAYER_SYMBOLS: tuple[str, ...] = ("X", "Y", "Z", "W")
"""Text symbol for each participant slot."""
