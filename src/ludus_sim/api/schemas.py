from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ludus_sim.domain.daily_events import DailyEventOptionId, DailyEventType
from ludus_sim.domain.events import FightEventType
from ludus_sim.domain.types import InjuryType, TrainingType

SNAPSHOT_VERSION = 1


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_by_name=True)


class StatsSnapshot(CamelModel):
    strength: int = Field(..., ge=1, le=10)
    agility: int = Field(..., ge=1, le=10)
    stamina: int = Field(..., ge=1, le=10)


class InjurySnapshot(CamelModel):
    type: InjuryType
    recovery_days_left: int = Field(..., alias="recoveryDaysLeft", ge=1)


class ContractTermsSnapshot(CamelModel):
    daily_wage: int = Field(..., alias="dailyWage", ge=0)
    duration_days: int = Field(..., alias="durationDays", ge=1)
    max_overdue_days: int = Field(..., alias="maxOverdueDays", ge=1)
    auto_renew: bool = Field(..., alias="autoRenew")


class ContractSnapshot(CamelModel):
    terms: ContractTermsSnapshot
    days_remaining: int = Field(..., alias="daysRemaining", ge=0)
    overdue_days: int = Field(..., alias="overdueDays", ge=0)


class FighterSnapshot(CamelModel):
    id: str
    name: str = Field(..., min_length=1, max_length=50)
    stats: StatsSnapshot
    health: int = Field(..., ge=0)
    max_health: int = Field(..., alias="maxHealth", ge=1)
    current_training: Optional[TrainingType] = Field(None, alias="currentTraining")
    current_injury: Optional[InjurySnapshot] = Field(None, alias="currentInjury")
    morale: int = Field(..., ge=0, le=100)
    fatigue: int = Field(..., ge=0, le=100)
    contract: ContractSnapshot


class FightEventSnapshot(CamelModel):
    round: int = Field(..., ge=1)
    attacker_name: str = Field(..., alias="attackerName")
    defender_name: str = Field(..., alias="defenderName")
    type: FightEventType
    value: float


class FightResultSnapshot(CamelModel):
    winner: FighterSnapshot
    loser: FighterSnapshot
    events: List[FightEventSnapshot]


class TournamentMatchSnapshot(CamelModel):
    fighter1_id: Optional[str] = Field(None, alias="fighter1Id")
    fighter2_id: Optional[str] = Field(None, alias="fighter2Id")
    winner_id: str = Field(..., alias="winnerId")
    result: Optional[FightResultSnapshot] = None


class TournamentRoundSnapshot(CamelModel):
    round_number: int = Field(..., alias="roundNumber", ge=1)
    matches: List[TournamentMatchSnapshot]


class TournamentResultSnapshot(CamelModel):
    rounds: List[TournamentRoundSnapshot]
    participant_ids: List[str] = Field(..., alias="participantIds")
    champion_id: str = Field(..., alias="championId")
    runner_up_id: Optional[str] = Field(None, alias="runnerUpId")
    prize_pool: int = Field(..., alias="prizePool", ge=0)
    champion_prize: int = Field(..., alias="championPrize", ge=0)
    runner_up_prize: int = Field(..., alias="runnerUpPrize", ge=0)


class DailyEventOptionSnapshot(CamelModel):
    id: DailyEventOptionId
    label: str
    description: str


class DailyEventSnapshot(CamelModel):
    type: DailyEventType
    title: str
    description: str
    option_a: DailyEventOptionSnapshot = Field(..., alias="optionA")
    option_b: DailyEventOptionSnapshot = Field(..., alias="optionB")
    target_fighter_id: Optional[str] = Field(None, alias="targetFighterId")


class DailyEventResolutionSnapshot(CamelModel):
    type: DailyEventType
    selected_option: DailyEventOptionId = Field(..., alias="selectedOption")
    money_delta: int = Field(..., alias="moneyDelta")
    summary: str


class LudusSnapshot(CamelModel):
    version: int = SNAPSHOT_VERSION
    fighters: List[FighterSnapshot]
    active_fighter_id: Optional[str] = Field(None, alias="activeFighterId")
    day: int = Field(..., ge=1)
    money: int
    seed: int
    name_seed: int = Field(..., alias="nameSeed")
    names_issued: int = Field(..., alias="namesIssued", ge=0)
    pending_daily_event: Optional[DailyEventSnapshot] = Field(None, alias="pendingDailyEvent")
    last_daily_event_resolution: Optional[DailyEventResolutionSnapshot] = Field(
        None, alias="lastDailyEventResolution"
    )
    last_tournament_result: Optional[TournamentResultSnapshot] = Field(None, alias="lastTournamentResult")
