"""Parquet/JSON persistence for turn logs, race summaries and replays."""

from __future__ import annotations

import json
from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pyarrow as pa
import pyarrow.parquet as pq

from vector_racer.config.constants import FLUSH_THRESHOLD
from vector_racer.domain.cells import Direction
from vector_racer.io.schemas import TURN_LOG_COLUMNS, TURN_LOG_SCHEMA

if TYPE_CHECKING:
    from vector_racer.simulation.engine import TurnRecord


def flush_turn_columns(
    columns: dict[str, list[int | str | None]],
    log_path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated turn rows to Parquet and clear in-memory buffers."""
    if not columns["race_id"]:
        return writer
    table = pa.Table.from_pydict(columns, schema=TURN_LOG_SCHEMA)
    if writer is None:
        writer = pq.ParquetWriter(log_path, TURN_LOG_SCHEMA)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


class TurnLogWriter:
    """Buffered turn-log writer; use as a context manager or call ``close``."""

    def __init__(
        self, log_path: Path, race_id: str, flush_threshold: int = FLUSH_THRESHOLD
    ) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.log_path = Path(log_path)
        self.race_id = race_id
        self.flush_threshold = flush_threshold
        self._columns: dict[str, list[int | str | None]] = {name: [] for name in TURN_LOG_COLUMNS}
        self._writer: pq.ParquetWriter | None = None
        self.rows_written = 0

    def __call__(self, record: TurnRecord) -> None:
        self.append(record)

    def append(self, record: TurnRecord) -> None:
        impulse = record.impulse
        row = {
            "race_id": self.race_id,
            "turn": record.turn,
            "iteration": record.iteration,
            "slot": record.slot,
            "impulse_row": None if impulse is None else impulse.row,
            "impulse_col": None if impulse is None else impulse.col,
            "row": record.state.position.row,
            "col": record.state.position.col,
            "velocity_row": record.state.velocity.row,
            "velocity_col": record.state.velocity.col,
            "score": record.score,
            "remaining_ns": record.remaining_ns,
            "elapsed_ns": record.elapsed_ns,
            "collected": record.collected,
        }
        for name, value in row.items():
            self._columns[name].append(value)
        self.rows_written += 1
        if len(self._columns["race_id"]) >= self.flush_threshold:
            self.flush()

    def flush(self) -> None:
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._writer = flush_turn_columns(self._columns, self.log_path, self._writer)

    def close(self) -> None:
        self.flush()
        if self._writer is None:
            # Nothing was recorded; still leave a readable, empty log behind.
            pq.write_table(TURN_LOG_SCHEMA.empty_table(), self.log_path)
            return
        self._writer.close()
        self._writer = None

    def __enter__(self) -> TurnLogWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def load_replay_directions(log_path: Path) -> dict[int, list[Direction | None]]:
    """Read a turn log and return each slot's impulses in turn order."""
    table = pq.read_table(log_path, columns=["turn", "slot", "impulse_row", "impulse_col"])
    rows = sorted(table.to_pylist(), key=lambda row: row["turn"])
    directions: dict[int, list[Direction | None]] = defaultdict(list)
    for row in rows:
        if row["impulse_row"] is None or row["impulse_col"] is None:
            directions[row["slot"]].append(None)
        else:
            directions[row["slot"]].append(Direction(row["impulse_row"], row["impulse_col"]))
    return dict(directions)


def write_race_summary(summary: dict[str, Any], summary_path: Path) -> Path:
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    summary_path.write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding="utf-8")
    return summary_path
