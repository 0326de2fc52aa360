"""Simulation layer: turn engine, participants and turn-log persistence."""

from vector_racer.simulation.engine import Phase, Standing, TurnEngine, TurnRecord
from vector_racer.simulation.participants import (
    REGISTERED_PARTICIPANTS,
    Participant,
    get_participant_factory,
    register_participant,
    replay_factory,
)
from vector_racer.simulation.persistence import (
    TurnLogWriter,
    load_replay_directions,
    write_race_summary,
)

__all__ = [
    "Participant",
    "Phase",
    "REGISTERED_PARTICIPANTS",
    "Standing",
    "TurnEngine",
    "TurnLogWriter",
    "TurnRecord",
    "get_participant_factory",
    "load_replay_directions",
    "register_participant",
    "replay_factory",
    "write_race_summary",
]
