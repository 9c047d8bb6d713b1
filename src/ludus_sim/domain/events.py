"""Combat log + UI events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator


class FightEventType(str, Enum):
    HIT = "hit"
    MISS = "miss"
    CRIT = "crit"
    DAMAGE_APPLIED = "damage_applied"
    KILL = "kill"
    FIGHT_END = "fight_end"


@dataclass(frozen=True)
class FightEvent:
    round: int
    attacker_name: str
    defender_name: str
    type: FightEventType
    value: float  # hit/crit chance, damage dealt, or 0 for kill/end


@dataclass(frozen=True)
class FightLog:
    events: tuple[FightEvent, ...] = ()

    def add_event(self, event: FightEvent) -> "FightLog":
        return FightLog(self.events + (event,))

    def of_type(self, event_type: FightEventType) -> list[FightEvent]:
        return [event for event in self.events if event.type == event_type]

    @property
    def rounds(self) -> int:
        return self.events[-1].round if self.events else 0

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[FightEvent]:
        return iter(self.events)


@dataclass(frozen=True)
class UiEvent:
    kind: str
    message: str
    data: dict[str, Any] | None = None
