"""CLI entrypoint: build a race from positional parameters and play it out.

Usage::

    vector-racer ROWS COLS SCALE HOLE_PROBABILITY COINS SEED TIME_BUDGET_MS KIND [KIND ...]

Malformed parameters print the full usage (every parameter with its meaning)
and exit with status 1 before any track is generated.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import uuid
from collections.abc import Sequence
from pathlib import Path
from typing import Any, NoReturn

from vector_racer.config.constants import MAX_PARTICIPANTS
from vector_racer.config.types import RaceConfig, TrackConfig
from vector_racer.io.paths import (
    race_summary_path,
    resolve_within_base,
    track_image_path,
    turn_log_path,
)
from vector_racer.io.schemas import RACE_SUMMARY_SCHEMA_VERSION
from vector_racer.simulation.engine import Standing, TurnEngine
from vector_racer.simulation.participants import (
    REGISTERED_PARTICIPANTS,
    ParticipantFactory,
    get_participant_factory,
    replay_factory,
)
from vector_racer.simulation.persistence import (
    TurnLogWriter,
    load_replay_directions,
    write_race_summary,
)
from vector_racer.viz.render import render_track
from vector_racer.viz.text import grid_to_text
from vector_racer.viz.theme import REGISTERED_THEMES, get_theme

logger = logging.getLogger(__name__)


class _UsageParser(argparse.ArgumentParser):
    """Argument parser that answers any error with the full parameter listing."""

    def error(self, message: str) -> NoReturn:
        self.print_help(sys.stderr)
        self.exit(1, f"\n{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    kinds = ", ".join(sorted(REGISTERED_PARTICIPANTS))
    parser = _UsageParser(
        prog="vector-racer",
        description="Play a turn-based vector race on a generated maze track",
    )
    parser.add_argument("rows", type=int, help="number of race-track rows (odd, >= 3)")
    parser.add_argument("cols", type=int, help="number of race-track columns (odd, >= 3)")
    parser.add_argument("scale", type=int, help="factor of race-track upscale")
    parser.add_argument(
        "hole_probability", type=float, help="probability of making holes in the maze walls"
    )
    parser.add_argument("coins", type=int, help="number of coins on the race-track")
    parser.add_argument("seed", type=int, help="controls the sequence of the random numbers")
    parser.add_argument("time_budget_ms", type=int, help="play-time for a participant in ms")
    parser.add_argument(
        "participants",
        nargs="+",
        help=f"participant kind, max {MAX_PARTICIPANTS} (available: {kinds})",
    )
    parser.add_argument("--out-dir", type=Path, default=None, help="write turn log and summary")
    parser.add_argument(
        "--render",
        type=Path,
        default=None,
        help="save a track image here (relative to --out-dir when given)",
    )
    parser.add_argument(
        "--theme",
        type=str,
        choices=sorted(REGISTERED_THEMES),
        default="default",
        help="color theme for --render",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="turn log to replay; participant kinds are ignored",
    )
    parser.add_argument(
        "--max-turns", type=int, default=None, help="stop after this many turns (default: no limit)"
    )
    parser.add_argument("--quiet", action="store_true", help="do not print the final board")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def _parse_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> RaceConfig:
    """Turn parsed arguments into a validated config or exit with usage."""
    if len(args.participants) > MAX_PARTICIPANTS:
        parser.error(f"at most {MAX_PARTICIPANTS} participants are supported")
    try:
        for kind in args.participants:
            get_participant_factory(kind)
        return RaceConfig(
            track=TrackConfig(
                rows=args.rows,
                cols=args.cols,
                scale=args.scale,
                hole_probability=args.hole_probability,
                coin_count=args.coins,
                seed=args.seed,
            ),
            time_budget_ms=args.time_budget_ms,
            participants=tuple(args.participants),
        )
    except ValueError as exc:
        parser.error(str(exc))


def _replay_factories(log_path: Path, n_slots: int) -> list[ParticipantFactory]:
    directions = load_replay_directions(log_path)
    logger.info("Replaying %s; participant kinds are replaced by recorded moves", log_path)
    return [replay_factory(directions.get(slot, [])) for slot in range(n_slots)]


def _summary(config: RaceConfig, engine: TurnEngine, standings: list[Standing]) -> dict[str, Any]:
    return {
        "schema_version": RACE_SUMMARY_SCHEMA_VERSION,
        "rows": config.track.rows,
        "cols": config.track.cols,
        "scale": config.track.scale,
        "hole_probability": config.track.hole_probability,
        "coins": config.track.coin_count,
        "seed": config.track.seed,
        "time_budget_ms": config.time_budget_ms,
        "baseline_length": len(engine.path),
        "max_iterations": engine.max_iterations,
        "iterations": engine.iteration,
        "turns": engine.turn,
        "standings": [
            {
                "slot": standing.slot,
                "kind": standing.kind,
                "score": standing.score,
                "raw_score": standing.raw_score,
                "remaining_ns": standing.remaining_ns,
                "disqualified": standing.disqualified,
                "finished": standing.finished,
            }
            for standing in standings
        ],
    }


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = _parse_config(parser, args)

    factories = None
    if args.replay is not None:
        factories = _replay_factories(args.replay, len(config.participants))
    try:
        engine = TurnEngine.from_config(config, factories=factories)
    except ValueError as exc:
        parser.error(str(exc))

    render_path = args.render
    if args.out_dir is not None:
        out_dir = Path(args.out_dir)
        if render_path is None:
            render_path = track_image_path(out_dir)
        elif not render_path.is_absolute():
            try:
                render_path = resolve_within_base(render_path, out_dir)
            except ValueError as exc:
                parser.error(str(exc))
        out_dir.mkdir(parents=True, exist_ok=True)
        race_id = f"seed{config.track.seed}_{uuid.uuid4().hex[:8]}"
        with TurnLogWriter(turn_log_path(out_dir), race_id=race_id) as turn_log:
            standings = engine.run(max_turns=args.max_turns, on_turn=turn_log)
        summary = _summary(config, engine, standings)
        summary["race_id"] = race_id
        write_race_summary(summary, race_summary_path(out_dir))
    else:
        standings = engine.run(max_turns=args.max_turns)
        summary = _summary(config, engine, standings)

    if render_path is not None:
        render_track(engine.grid, render_path, theme=get_theme(args.theme))
    if not args.quiet:
        print(grid_to_text(engine.grid), end="")
        print(engine.status_report())
    print(json.dumps(summary, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
