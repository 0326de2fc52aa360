"""Participant decision logic and the kind -> factory registry.

A participant receives, at construction time, a copy of its initial state, a
seeded random source, a read-only snapshot of the grid, the coin list and its
slot index. Afterwards the engine only asks it for a steering impulse and
hands back a copy of its new state after every applied move.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from random import Random
from typing import TypeAlias

from vector_racer.domain.cells import (
    DIRECTIONS,
    Coin,
    Direction,
    Grid,
    ParticipantState,
    Position,
)
from vector_racer.domain.pathfinding import shortest_path

ParticipantFactory: TypeAlias = Callable[
    [ParticipantState, Random, Grid, tuple[Coin, ...], int], "Participant"
]
"""Constructor signature: (state, rng, grid snapshot, coins, slot)."""


class Participant(ABC):
    """Base class for decision logic plugged into the turn engine."""

    kind = "abstract"

    def __init__(
        self,
        state: ParticipantState,
        rng: Random,
        grid: Grid,
        coins: tuple[Coin, ...],
        slot: int,
    ) -> None:
        self.state = state
        self.rng = rng
        self.grid = grid
        self.coins = coins
        self.slot = slot

    @abstractmethod
    def decide(self, remaining_ns: int) -> Direction | None:
        """Return the steering impulse for this turn, or None to forfeit."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(slot={self.slot}, {self.state})"


REGISTERED_PARTICIPANTS: dict[str, ParticipantFactory] = {}


def register_participant(name: str) -> Callable[[type[Participant]], type[Participant]]:
    """Class decorator adding a participant class to the registry under *name*."""

    def decorator(cls: type[Participant]) -> type[Participant]:
        key = name.lower()
        if key in REGISTERED_PARTICIPANTS:
            raise ValueError(f"participant kind {name!r} is already registered")
        cls.kind = key
        REGISTERED_PARTICIPANTS[key] = cls
        return cls

    return decorator


def get_participant_factory(name: str) -> ParticipantFactory:
    """Look up a participant factory by kind (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_PARTICIPANTS:
        valid = ", ".join(sorted(REGISTERED_PARTICIPANTS))
        raise ValueError(f"Unknown participant kind {name!r}; available: {valid}")
    return REGISTERED_PARTICIPANTS[key]


@register_participant("random")
class RandomParticipant(Participant):
    """Chooses one of the nine directions uniformly every turn."""

    def decide(self, remaining_ns: int) -> Direction | None:
        return DIRECTIONS[self.rng.randrange(len(DIRECTIONS))]


@register_participant("dummy")
class DummyParticipant(Participant):
    """Never answers; the engine disqualifies it on its first turn."""

    def decide(self, remaining_ns: int) -> Direction | None:
        return None


@register_participant("baseline")
class BaselineParticipant(Participant):
    """Follows its own shortest path one cell per move.

    When the next path cell cannot be reached with a single impulse from the
    current velocity, it brakes to a standstill first. The body therefore
    only ever stands on path cells and never touches a wall.
    """

    def __init__(
        self,
        state: ParticipantState,
        rng: Random,
        grid: Grid,
        coins: tuple[Coin, ...],
        slot: int,
    ) -> None:
        super().__init__(state, rng, grid, coins, slot)
        self.path = shortest_path(state.position, grid)

    def decide(self, remaining_ns: int) -> Direction | None:
        position, velocity = self.state.position, self.state.velocity
        try:
            index = self.path.index(position)
        except ValueError:
            return Direction(-velocity.row, -velocity.col)
        if index + 1 >= len(self.path):
            return Direction(-velocity.row, -velocity.col)
        step = self.path[index + 1] - position
        impulse = Position(step.row - velocity.row, step.col - velocity.col)
        if abs(impulse.row) <= 1 and abs(impulse.col) <= 1:
            return Direction(impulse.row, impulse.col)
        return Direction(-velocity.row, -velocity.col)


class ReplayParticipant(Participant):
    """Replays a recorded sequence of impulses; None once exhausted."""

    kind = "replay"

    def __init__(
        self,
        state: ParticipantState,
        rng: Random,
        grid: Grid,
        coins: tuple[Coin, ...],
        slot: int,
        directions: Sequence[Direction | None] = (),
    ) -> None:
        super().__init__(state, rng, grid, coins, slot)
        self._directions = iter(directions)

    def decide(self, remaining_ns: int) -> Direction | None:
        return next(self._directions, None)


def replay_factory(directions: Sequence[Direction | None]) -> ParticipantFactory:
    """Build a factory whose participants replay *directions* in order."""

    def factory(
        state: ParticipantState,
        rng: Random,
        grid: Grid,
        coins: tuple[Coin, ...],
        slot: int,
    ) -> Participant:
        return ReplayParticipant(state, rng, grid, coins, slot, directions=directions)

    return factory
