"""Tests for TrackConfig and RaceConfig validation."""

from __future__ import annotations

import dataclasses

import pytest

from vector_racer.config.types import RaceConfig, TrackConfig


class TestTrackConfig:
    def test_defaults(self) -> None:
        config = TrackConfig(rows=5, cols=7)
        assert config.scale == 1
        assert config.hole_probability == 0.0
        assert config.coin_count == 0
        assert config.seed == 0
        assert config.hole_iterations == 1

    def test_grid_shape_is_scaled(self) -> None:
        assert TrackConfig(rows=5, cols=7, scale=3).grid_shape == (15, 21)

    def test_is_frozen(self) -> None:
        config = TrackConfig(rows=5, cols=5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.rows = 7  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("kwargs", "match"),
        [
            ({"rows": 1, "cols": 5}, "rows and cols"),
            ({"rows": 5, "cols": 2}, "rows and cols"),
            ({"rows": 6, "cols": 5}, "odd"),
            ({"rows": 5, "cols": 5, "scale": 0}, "scale"),
            ({"rows": 5, "cols": 5, "hole_probability": 1.5}, "hole_probability"),
            ({"rows": 5, "cols": 5, "hole_probability": -0.1}, "hole_probability"),
            ({"rows": 5, "cols": 5, "coin_count": -1}, "coin_count"),
            ({"rows": 5, "cols": 5, "hole_iterations": -1}, "hole_iterations"),
        ],
    )
    def test_rejects_invalid_values(self, kwargs: dict, match: str) -> None:
        with pytest.raises(ValueError, match=match):
            TrackConfig(**kwargs)


class TestRaceConfig:
    def test_budget_in_nanoseconds(self) -> None:
        config = RaceConfig(
            TrackConfig(rows=5, cols=5), time_budget_ms=250, participants=("dummy",)
        )
        assert config.time_budget_ns == 250_000_000

    @pytest.mark.parametrize("budget", [0, -10])
    def test_rejects_non_positive_budget(self, budget: int) -> None:
        with pytest.raises(ValueError, match="time_budget_ms"):
            RaceConfig(TrackConfig(rows=5, cols=5), time_budget_ms=budget, participants=("dummy",))

    @pytest.mark.parametrize("participants", [(), ("random",) * 5])
    def test_rejects_bad_lineup_size(self, participants: tuple[str, ...]) -> None:
        with pytest.raises(ValueError, match="participants"):
            RaceConfig(TrackConfig(rows=5, cols=5), time_budget_ms=10, participants=participants)

    def test_rejects_blank_kind(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            RaceConfig(TrackConfig(rows=5, cols=5), time_budget_ms=10, participants=("random", " "))
