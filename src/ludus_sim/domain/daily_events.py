"""Daily narrative events: instances offered to the player and their outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ludus_sim.domain.errors import ValidationError


class DailyEventType(str, Enum):
    SPONSOR_DEAL = "sponsor_deal"
    HARSH_DRILL = "harsh_drill"
    TAVERN_RUMOR = "tavern_rumor"


class DailyEventOptionId(str, Enum):
    OPTION_A = "a"
    OPTION_B = "b"


@dataclass(frozen=True)
class DailyEventOption:
    id: DailyEventOptionId
    label: str
    description: str

    def validate(self) -> None:
        if not self.label.strip():
            raise ValidationError("daily event option label must be non-empty")
        if not self.description.strip():
            raise ValidationError("daily event option description must be non-empty")


@dataclass(frozen=True)
class DailyEventInstance:
    type: DailyEventType
    title: str
    description: str
    option_a: DailyEventOption
    option_b: DailyEventOption
    target_fighter_id: str | None = None

    def validate(self) -> None:
        if not self.title.strip():
            raise ValidationError("daily event title must be non-empty")
        if not self.description.strip():
            raise ValidationError("daily event description must be non-empty")
        self.option_a.validate()
        self.option_b.validate()

    def get_option(self, option_id: DailyEventOptionId) -> DailyEventOption:
        if option_id == DailyEventOptionId.OPTION_A:
            return self.option_a
        if option_id == DailyEventOptionId.OPTION_B:
            return self.option_b
        raise ValidationError(f"Unsupported daily event option: {option_id}")


@dataclass(frozen=True)
class DailyEventResolution:
    type: DailyEventType
    selected_option: DailyEventOptionId
    money_delta: int
    summary: str
