"""Turn engine: the authoritative race state machine.

The engine cycles ``AwaitingAction(k) -> Applying(k) -> AwaitingAction(next)``
until ``Finished``. It is the only writer of the grid, the coin flags, the
scores and the remaining time budgets. Participants see read-only
snapshots and are asked for one steering impulse per turn.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from random import Random

from vector_racer.config.constants import DISQUALIFIED_TIME, PLAYER_SYMBOLS
from vector_racer.config.types import RaceConfig
from vector_racer.domain.cells import (
    PLAYER_FLAGS,
    CellFlag,
    Coin,
    Direction,
    Grid,
    ParticipantState,
    clear_flag,
    has_flag,
    read_only_copy,
    set_flag,
)
from vector_racer.domain.movement import resolve_move
from vector_racer.domain.track import Track, generate_track
from vector_racer.simulation.participants import (
    Participant,
    ParticipantFactory,
    get_participant_factory,
)

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Engine state-machine phases."""

    AWAITING_ACTION = "awaiting_action"
    APPLYING = "applying"
    FINISHED = "finished"


@dataclass(frozen=True)
class TurnRecord:
    """One applied (or rejected) turn, as written to the turn log."""

    turn: int
    iteration: int
    slot: int
    impulse: Direction | None
    state: ParticipantState
    score: int
    remaining_ns: int
    elapsed_ns: int
    collected: int = 0
    accepted: bool = True


@dataclass(frozen=True)
class Standing:
    """Final result of one slot."""

    slot: int
    kind: str
    score: int
    raw_score: int
    remaining_ns: int
    disqualified: bool
    finished: bool


TurnCallback = Callable[[TurnRecord], None]


class TurnEngine:
    """Owns the track and per-slot state for the lifetime of one race."""

    def __init__(
        self,
        track: Track,
        factories: Sequence[ParticipantFactory],
        time_budget_ns: int,
        seed: int = 0,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        if not 1 <= len(factories) <= len(PLAYER_FLAGS):
            raise ValueError(f"between 1 and {len(PLAYER_FLAGS)} participants are required")
        if time_budget_ns < 1:
            raise ValueError("time_budget_ns must be >= 1")
        self.grid: Grid = track.grid
        self.start = track.start
        self.path = track.path
        self.coins: tuple[Coin, ...] = track.coins
        self.collected: list[bool] = [False] * len(track.coins)
        self.scale = track.scale
        self.time_budget_ns = time_budget_ns
        self.clock = clock

        self.max_iterations = len(self.path) + sum(coin.value for coin in self.coins)
        rows, cols = self.grid.shape
        self.penalty_score = self.scale * rows * cols
        self.iteration = 0
        self.turn = 0
        self.current = 0
        self.phase = Phase.AWAITING_ACTION

        n_slots = len(factories)
        self.states = [ParticipantState(self.start) for _ in range(n_slots)]
        self.scores = [-(len(self.path) - 1)] * n_slots
        self.remaining_ns = [time_budget_ns] * n_slots
        for slot in range(n_slots):
            set_flag(self.grid, self.start, PLAYER_FLAGS[slot])

        # Participants are built last so that their snapshots include the
        # occupancy flags; construction time is charged to their budget.
        self.participants: list[Participant] = []
        for slot, factory in enumerate(factories):
            started = self.clock()
            participant = factory(
                self.states[slot].copy(),
                Random(seed),
                read_only_copy(self.grid),
                tuple(self.coins),
                slot,
            )
            self.remaining_ns[slot] -= self.clock() - started
            if participant.slot != slot:
                logger.warning(
                    "Illegal slot %d reported by participant in slot %d", participant.slot, slot
                )
                self.remaining_ns[slot] = DISQUALIFIED_TIME
            self.participants.append(participant)
        # The first turn goes to the first slot that survived construction.
        active = [slot for slot in range(n_slots) if self.is_active(slot)]
        if active:
            self.current = active[0]

    @classmethod
    def from_config(
        cls,
        config: RaceConfig,
        factories: Sequence[ParticipantFactory] | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> TurnEngine:
        """Generate the track for *config* and build its participants by kind."""
        track = generate_track(config.track)
        if factories is None:
            factories = [get_participant_factory(kind) for kind in config.participants]
        return cls(
            track,
            factories,
            time_budget_ns=config.time_budget_ns,
            seed=config.track.seed,
            clock=clock,
        )

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    @property
    def n_slots(self) -> int:
        return len(self.participants)

    def next_participant(self) -> Participant:
        return self.participants[self.current]

    def is_active(self, slot: int) -> bool:
        return self.remaining_ns[slot] > 0

    def on_finish(self, slot: int) -> bool:
        position = self.states[slot].position
        return has_flag(self.grid[position.row, position.col], CellFlag.FINISH)

    def is_finished(self) -> bool:
        """Terminal guard evaluated for the active participant."""
        return (
            self.max_iterations < self.iteration
            or not self.is_active(self.current)
            or self.on_finish(self.current)
        )

    def effective_score(self, slot: int) -> int:
        """Score used for ranking; exhausted slots get the penalty score."""
        if not self.is_active(slot):
            return self.penalty_score
        return self.scores[slot]

    def standings(self) -> list[Standing]:
        return [
            Standing(
                slot=slot,
                kind=self.participants[slot].kind,
                score=self.effective_score(slot),
                raw_score=self.scores[slot],
                remaining_ns=self.remaining_ns[slot],
                disqualified=not self.is_active(slot),
                finished=self.on_finish(slot),
            )
            for slot in range(self.n_slots)
        ]

    def status_report(self) -> str:
        lines = [f"ITERATION: {self.iteration} BASELINE: {len(self.path)}"]
        for slot, participant in enumerate(self.participants):
            lines.append(
                f"\tPLAYER: {PLAYER_SYMBOLS[slot]} {participant.kind} {self.states[slot]}"
                f" SCORE: {self.scores[slot]} REMAINING: {self.remaining_ns[slot]}"
            )
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def play_turn(self) -> TurnRecord:
        """Ask the active participant for an impulse and apply it."""
        if self.is_finished():
            self.phase = Phase.FINISHED
            raise RuntimeError("race is already finished")
        participant = self.participants[self.current]
        started = self.clock()
        try:
            impulse = participant.decide(self.remaining_ns[self.current])
        except Exception:
            logger.warning(
                "Protocol violation: participant in slot %d raised", self.current, exc_info=True
            )
            impulse = None
        elapsed = self.clock() - started
        return self.apply_action(participant, impulse, elapsed)

    def apply_action(
        self, participant: Participant, impulse: Direction | None, elapsed_ns: int
    ) -> TurnRecord:
        """Validate and apply one action for the active slot, then advance."""
        slot = self.current
        self.phase = Phase.APPLYING
        accepted = True
        collected = 0
        if not isinstance(impulse, Direction):
            logger.warning("Invalid action from slot %d: %r", slot, impulse)
            self.remaining_ns[slot] = DISQUALIFIED_TIME
            accepted = False
        elif participant.slot != slot or participant.state != self.states[slot]:
            logger.warning(
                "Protocol violation: participant object manipulated: %r <-> slot %d state %s",
                participant,
                slot,
                self.states[slot],
            )
            self.remaining_ns[slot] = DISQUALIFIED_TIME
            accepted = False
        else:
            collected = self._move(slot, impulse)
            self.remaining_ns[slot] -= elapsed_ns
            participant.state = self.states[slot].copy()
            if not self.is_active(slot):
                logger.info("Slot %d exhausted its time budget", slot)

        record = TurnRecord(
            turn=self.turn,
            iteration=self.iteration,
            slot=slot,
            impulse=impulse if accepted else None,
            state=self.states[slot].copy(),
            score=self.scores[slot],
            remaining_ns=self.remaining_ns[slot],
            elapsed_ns=elapsed_ns,
            collected=collected,
            accepted=accepted,
        )
        self.turn += 1
        self._advance()
        return record

    def _move(self, slot: int, impulse: Direction) -> int:
        state = self.states[slot]
        clear_flag(self.grid, state.position, PLAYER_FLAGS[slot])
        set_flag(self.grid, state.position, CellFlag.TRACE)
        result = resolve_move(state, impulse, self.grid, self._live_coins())
        set_flag(self.grid, state.position, PLAYER_FLAGS[slot])
        for coin in result.collected:
            self.collected[self.coins.index(coin)] = True
        self.scores[slot] += 1 - result.collected_value
        logger.debug(
            "slot %d impulse %s -> %s%s collected=%d",
            slot,
            impulse,
            state,
            " (clamped)" if result.clamped else "",
            result.collected_value,
        )
        return result.collected_value

    def _live_coins(self) -> list[Coin]:
        return [coin for coin, taken in zip(self.coins, self.collected, strict=True) if not taken]

    def _advance(self) -> None:
        """Move to the next slot that still has time; wrapping ends an iteration."""
        for _ in range(self.n_slots):
            self.current += 1
            if self.current == self.n_slots:
                self.current = 0
                self.iteration += 1
            if self.is_active(self.current):
                break
        self.phase = Phase.FINISHED if self.is_finished() else Phase.AWAITING_ACTION

    def run(
        self, max_turns: int | None = None, on_turn: TurnCallback | None = None
    ) -> list[Standing]:
        """Play turns until the race finishes (or *max_turns* were played)."""
        played = 0
        while not self.is_finished():
            if max_turns is not None and played >= max_turns:
                break
            record = self.play_turn()
            played += 1
            if on_turn is not None:
                on_turn(record)
        if self.is_finished():
            self.phase = Phase.FINISHED
        logger.info(
            "Race stopped after %d turns (iteration %d of %d)",
            self.turn,
            self.iteration,
            self.max_iterations,
        )
        return self.standings()
