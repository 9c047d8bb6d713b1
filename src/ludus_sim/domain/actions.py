"""Action definitions for reducer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

from ludus_sim.domain.daily_events import DailyEventOptionId
from ludus_sim.domain.types import Fighter, TrainingType


@dataclass(frozen=True)
class AdvanceDay:
    pass


@dataclass(frozen=True)
class ResolveDailyEvent:
    option: DailyEventOptionId


@dataclass(frozen=True)
class ResolveFight:
    first_id: str
    second_id: str


@dataclass(frozen=True)
class RunTournament:
    participant_ids: tuple[str, ...]
    prize_pool: int | None = None


@dataclass(frozen=True)
class HireFighter:
    pass


@dataclass(frozen=True)
class AddFighter:
    fighter: Fighter


@dataclass(frozen=True)
class RemoveFighter:
    fighter_id: str


@dataclass(frozen=True)
class SetActiveFighter:
    fighter_id: str


@dataclass(frozen=True)
class AssignTraining:
    fighter_id: str
    training: TrainingType


@dataclass(frozen=True)
class ClearTraining:
    fighter_id: str


Action: TypeAlias = Union[
    AdvanceDay,
    ResolveDailyEvent,
    ResolveFight,
    RunTournament,
    HireFighter,
    AddFighter,
    RemoveFighter,
    SetActiveFighter,
    AssignTraining,
    ClearTraining,
]
