"""Common types and enums."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum

from ludus_sim.domain.errors import FighterStateError, ValidationError

MIN_STAT = 1
MAX_STAT = 10

MIN_MORALE = 0
MAX_MORALE = 100
DEFAULT_MORALE = 50

MIN_FATIGUE = 0
MAX_FATIGUE = 100
DEFAULT_FATIGUE = 0

HEALTH_PER_STAMINA = 10
MAX_NAME_LENGTH = 50


def clamp_int(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, int(value)))


class TrainingType(str, Enum):
    STRENGTH = "strength"
    AGILITY = "agility"
    STAMINA = "stamina"


class InjuryType(str, Enum):
    BRUISE = "bruise"
    SPRAIN = "sprain"
    FRACTURE = "fracture"


@dataclass(frozen=True)
class Stats:
    strength: int
    agility: int
    stamina: int

    def __post_init__(self) -> None:
        for name in ("strength", "agility", "stamina"):
            value = getattr(self, name)
            if not MIN_STAT <= value <= MAX_STAT:
                raise ValidationError(f"{name} must be in [{MIN_STAT}, {MAX_STAT}], got {value}")

    @classmethod
    def default(cls) -> "Stats":
        return cls(5, 5, 5)

    def value_of(self, training: TrainingType) -> int:
        return getattr(self, training.value)

    def with_gain(self, training: TrainingType) -> "Stats":
        return replace(self, **{training.value: self.value_of(training) + 1})


@dataclass(frozen=True)
class Injury:
    type: InjuryType
    recovery_days_left: int

    def __post_init__(self) -> None:
        if self.recovery_days_left < 1:
            raise ValidationError(f"recovery_days_left must be >= 1, got {self.recovery_days_left}")

    def tick(self) -> "Injury | None":
        remaining = self.recovery_days_left - 1
        if remaining <= 0:
            return None
        return Injury(self.type, remaining)


@dataclass(frozen=True)
class ContractTerms:
    daily_wage: int
    duration_days: int
    max_overdue_days: int
    auto_renew: bool

    @classmethod
    def default(cls) -> "ContractTerms":
        return cls(daily_wage=5, duration_days=7, max_overdue_days=3, auto_renew=True)

    def validate(self) -> None:
        if self.daily_wage < 0:
            raise ValidationError("daily_wage must be >= 0")
        if self.duration_days < 1:
            raise ValidationError("duration_days must be >= 1")
        if self.max_overdue_days < 1:
            raise ValidationError("max_overdue_days must be >= 1")


@dataclass(frozen=True)
class ContractState:
    terms: ContractTerms
    days_remaining: int
    overdue_days: int = 0

    @classmethod
    def from_terms(cls, terms: ContractTerms) -> "ContractState":
        terms.validate()
        return cls(terms=terms, days_remaining=terms.duration_days, overdue_days=0)

    @classmethod
    def default(cls) -> "ContractState":
        return cls.from_terms(ContractTerms.default())

    @property
    def is_expired(self) -> bool:
        return self.days_remaining <= 0

    @property
    def is_overdue_limit_reached(self) -> bool:
        return self.overdue_days >= self.terms.max_overdue_days

    def validate(self) -> None:
        self.terms.validate()
        if self.days_remaining < 0:
            raise ValidationError("days_remaining must be >= 0")
        if self.overdue_days < 0:
            raise ValidationError("overdue_days must be >= 0")

    def tick_day(self) -> "ContractState":
        return replace(self, days_remaining=max(0, self.days_remaining - 1))

    def renew_if_needed(self) -> "ContractState":
        if not self.is_expired or not self.terms.auto_renew:
            return self
        return replace(self, days_remaining=self.terms.duration_days)

    def mark_overdue_day(self) -> "ContractState":
        return replace(self, overdue_days=self.overdue_days + 1)

    def clear_overdue_if_paid(self) -> "ContractState":
        if self.overdue_days == 0:
            return self
        return replace(self, overdue_days=0)


@dataclass(frozen=True)
class Fighter:
    """A roster member. Every change goes through a method returning a new value."""

    id: str
    name: str
    stats: Stats
    health: int
    max_health: int
    current_training: TrainingType | None = None
    current_injury: Injury | None = None
    morale: int = DEFAULT_MORALE
    fatigue: int = DEFAULT_FATIGUE
    contract: ContractState = field(default_factory=ContractState.default)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("fighter id must be non-empty")
        name = (self.name or "").strip()
        if not name or len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"name must be 1-{MAX_NAME_LENGTH} non-blank characters")
        object.__setattr__(self, "name", name)
        if not 0 <= self.health <= self.max_health:
            raise ValidationError(f"health must be in [0, {self.max_health}], got {self.health}")
        if not MIN_MORALE <= self.morale <= MAX_MORALE:
            raise ValidationError(f"morale must be in [{MIN_MORALE}, {MAX_MORALE}], got {self.morale}")
        if not MIN_FATIGUE <= self.fatigue <= MAX_FATIGUE:
            raise ValidationError(f"fatigue must be in [{MIN_FATIGUE}, {MAX_FATIGUE}], got {self.fatigue}")
        self.contract.validate()

    @classmethod
    def create(
        cls,
        name: str,
        stats: Stats,
        *,
        fighter_id: str | None = None,
        contract: ContractState | None = None,
    ) -> "Fighter":
        max_health = stats.stamina * HEALTH_PER_STAMINA
        return cls(
            id=fighter_id or uuid.uuid4().hex,
            name=name,
            stats=stats,
            health=max_health,
            max_health=max_health,
            contract=contract or ContractState.default(),
        )

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def is_injured(self) -> bool:
        return self.current_injury is not None

    @property
    def can_fight(self) -> bool:
        return self.is_alive and not self.is_injured

    def take_damage(self, damage: int) -> "Fighter":
        if damage < 0:
            raise ValidationError("damage cannot be negative")
        if not self.is_alive:
            raise FighterStateError(f"{self.name} is dead and cannot take damage")
        return replace(self, health=max(0, self.health - damage))

    def restore_health(self, amount: int) -> "Fighter":
        if amount < 0:
            raise ValidationError("restored amount cannot be negative")
        if not self.is_alive:
            raise FighterStateError(f"{self.name} is dead and cannot heal")
        return replace(self, health=min(self.max_health, self.health + amount))

    def assign_training(self, training: TrainingType) -> "Fighter":
        if not self.is_alive:
            raise FighterStateError(f"{self.name} is dead and cannot train")
        if self.is_injured:
            raise FighterStateError(f"{self.name} is injured and cannot train")
        if self.stats.value_of(training) >= MAX_STAT:
            raise FighterStateError(f"{training.value} is already at {MAX_STAT}")
        return replace(self, current_training=training)

    def clear_training(self) -> "Fighter":
        return replace(self, current_training=None)

    def apply_injury(self, injury: Injury) -> "Fighter":
        if not self.is_alive:
            raise FighterStateError(f"{self.name} is dead and cannot be injured")
        return replace(self, current_injury=injury)

    def tick_recovery(self) -> "Fighter":
        if self.current_injury is None:
            return self
        return replace(self, current_injury=self.current_injury.tick())

    def apply_stat_gain(self, training: TrainingType) -> "Fighter":
        stats = self.stats.with_gain(training)
        max_health = self.max_health
        health = self.health
        if training == TrainingType.STAMINA:
            max_health += HEALTH_PER_STAMINA
            health += HEALTH_PER_STAMINA
        current_training = None if stats.value_of(training) >= MAX_STAT else self.current_training
        return replace(
            self,
            stats=stats,
            health=health,
            max_health=max_health,
            current_training=current_training,
        )

    def with_morale(self, morale: int) -> "Fighter":
        return replace(self, morale=clamp_int(morale, MIN_MORALE, MAX_MORALE))

    def with_fatigue(self, fatigue: int) -> "Fighter":
        return replace(self, fatigue=clamp_int(fatigue, MIN_FATIGUE, MAX_FATIGUE))

    def with_contract(self, contract: ContractState) -> "Fighter":
        contract.validate()
        return replace(self, contract=contract)

    def tick_contract_day(self) -> "Fighter":
        return replace(self, contract=self.contract.tick_day())

    def renew_contract_if_needed(self) -> "Fighter":
        return replace(self, contract=self.contract.renew_if_needed())

    def mark_contract_overdue(self) -> "Fighter":
        return replace(self, contract=self.contract.mark_overdue_day())

    def clear_contract_overdue(self) -> "Fighter":
        return replace(self, contract=self.contract.clear_overdue_if_paid())
