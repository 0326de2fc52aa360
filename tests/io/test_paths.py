"""Tests for output path helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from vector_racer.io.paths import (
    logs_dir,
    race_summary_path,
    resolve_within_base,
    track_image_path,
    turn_log_path,
)
from vector_racer.io.schemas import TURN_LOG_COLUMNS, TURN_LOG_SCHEMA


class TestOutputLayout:
    def test_paths_under_out_dir(self, tmp_path: Path) -> None:
        assert logs_dir(tmp_path) == tmp_path / "logs"
        assert turn_log_path(tmp_path) == tmp_path / "logs" / "turn_log.parquet"
        assert race_summary_path(tmp_path) == tmp_path / "race_summary.json"
        assert track_image_path(tmp_path) == tmp_path / "track.png"


class TestResolveWithinBase:
    def test_relative_path_resolved_against_base(self, tmp_path: Path) -> None:
        assert resolve_within_base(Path("img/track.png"), tmp_path) == (
            tmp_path.resolve() / "img" / "track.png"
        )

    def test_escape_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="escapes base_dir"):
            resolve_within_base(Path("../outside.png"), tmp_path)


class TestTurnLogSchema:
    def test_columns_follow_schema(self) -> None:
        assert TURN_LOG_COLUMNS == tuple(TURN_LOG_SCHEMA.names)
        assert TURN_LOG_COLUMNS[0] == "race_id"
        assert {"impulse_row", "impulse_col", "score", "remaining_ns"} <= set(TURN_LOG_COLUMNS)
