"""Parquet schema definitions for race artifacts.

Every module that reads or writes the turn log works against the column
contract defined here.
"""

from __future__ import annotations

import pyarrow as pa

TURN_LOG_SCHEMA_VERSION = 1
RACE_SUMMARY_SCHEMA_VERSION = 1

# Impulse columns are null when the participant returned no direction.
TURN_LOG_SCHEMA = pa.schema(
    [
        ("race_id", pa.string()),
        ("turn", pa.int64()),
        ("iteration", pa.int64()),
        ("slot", pa.int64()),
        ("impulse_row", pa.int64()),
        ("impulse_col", pa.int64()),
        ("row", pa.int64()),
        ("col", pa.int64()),
        ("velocity_row", pa.int64()),
        ("velocity_col", pa.int64()),
        ("score", pa.int64()),
        ("remaining_ns", pa.int64()),
        ("elapsed_ns", pa.int64()),
        ("collected", pa.int64()),
    ],
    metadata={"schema_version": str(TURN_LOG_SCHEMA_VERSION)},
)

TURN_LOG_COLUMNS: tuple[str, ...] = tuple(field.name for field in TURN_LOG_SCHEMA)
