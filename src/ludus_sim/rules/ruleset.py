"""Data-driven rules engine."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from ludus_sim.domain.daily_events import DailyEventType
from ludus_sim.domain.errors import ValidationError
from ludus_sim.domain.types import ContractTerms

DEFAULT_RULES_DIR = Path(__file__).resolve().parents[1] / "data" / "rules"
RULES_DIR_ENV = "LUDUS_RULES_DIR"


class RulesError(ValidationError):
    """Error loading or validating rules."""


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise RulesError(f"{name} must be in [0, 1], got {value}")


@dataclass(frozen=True)
class CombatModel:
    base_hit_chance: float
    hit_chance_per_agility_diff: float
    min_hit_chance: float
    max_hit_chance: float
    base_crit_chance: float
    crit_chance_per_agility: float
    max_crit_chance: float
    damage_variance_min: float
    damage_variance_max: float
    crit_multiplier: float
    defense_per_stamina: float
    min_damage_after_defense: int

    @classmethod
    def default(cls) -> "CombatModel":
        return load_default_ruleset().combat

    def validate(self) -> None:
        _check_probability("min_hit_chance", self.min_hit_chance)
        _check_probability("max_hit_chance", self.max_hit_chance)
        if self.min_hit_chance > self.max_hit_chance:
            raise RulesError("min_hit_chance cannot exceed max_hit_chance")
        _check_probability("base_hit_chance", self.base_hit_chance)
        _check_probability("base_crit_chance", self.base_crit_chance)
        _check_probability("max_crit_chance", self.max_crit_chance)
        if self.damage_variance_min < 0:
            raise RulesError("damage_variance_min must be >= 0")
        if self.damage_variance_max < self.damage_variance_min:
            raise RulesError("damage_variance_max cannot be smaller than damage_variance_min")
        if self.crit_multiplier < 1.0:
            raise RulesError("crit_multiplier must be >= 1")
        if self.defense_per_stamina < 0:
            raise RulesError("defense_per_stamina must be >= 0")
        if self.min_damage_after_defense < 0:
            raise RulesError("min_damage_after_defense must be >= 0")


@dataclass(frozen=True)
class ConditionModel:
    morale_win_bonus: int
    morale_lose_penalty: int
    morale_injury_penalty: int
    morale_daily_rest_bonus: int
    morale_daily_training_drain: int
    fatigue_fight_gain: int
    fatigue_training_gain: int
    fatigue_daily_rest_recovery: int
    fatigue_daily_training_recovery: int
    high_morale_bonus: float
    low_morale_penalty: float
    high_fatigue_penalty: float
    low_fatigue_bonus: float

    @classmethod
    def default(cls) -> "ConditionModel":
        return load_default_ruleset().condition

    def validate(self) -> None:
        non_negative = (
            "morale_win_bonus",
            "morale_daily_rest_bonus",
            "fatigue_fight_gain",
            "fatigue_training_gain",
            "high_morale_bonus",
            "low_fatigue_bonus",
        )
        non_positive = (
            "morale_lose_penalty",
            "morale_injury_penalty",
            "morale_daily_training_drain",
            "fatigue_daily_rest_recovery",
            "fatigue_daily_training_recovery",
            "low_morale_penalty",
            "high_fatigue_penalty",
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise RulesError(f"{name} must be >= 0")
        for name in non_positive:
            if getattr(self, name) > 0:
                raise RulesError(f"{name} must be <= 0")


@dataclass(frozen=True)
class InjuryModel:
    base_injury_chance_loser: float
    base_injury_chance_winner: float
    bruise_days: int
    sprain_days: int
    fracture_days: int
    sprain_threshold: float
    fracture_threshold: float

    @classmethod
    def default(cls) -> "InjuryModel":
        return load_default_ruleset().injury

    def validate(self) -> None:
        _check_probability("base_injury_chance_loser", self.base_injury_chance_loser)
        _check_probability("base_injury_chance_winner", self.base_injury_chance_winner)
        for name in ("bruise_days", "sprain_days", "fracture_days"):
            if getattr(self, name) < 1:
                raise RulesError(f"{name} must be >= 1")
        _check_probability("sprain_threshold", self.sprain_threshold)
        _check_probability("fracture_threshold", self.fracture_threshold)
        if self.sprain_threshold >= self.fracture_threshold:
            raise RulesError("sprain_threshold must be less than fracture_threshold")


@dataclass(frozen=True)
class TrainingModel:
    stat_gain_chance: float

    @classmethod
    def default(cls) -> "TrainingModel":
        return load_default_ruleset().training

    def validate(self) -> None:
        _check_probability("stat_gain_chance", self.stat_gain_chance)


@dataclass(frozen=True)
class TournamentModel:
    default_prize_pool: int
    min_participants: int
    champion_prize_share: float
    runner_up_prize_share: float

    @classmethod
    def default(cls) -> "TournamentModel":
        return load_default_ruleset().tournament

    def validate(self) -> None:
        if self.default_prize_pool < 0:
            raise RulesError("default_prize_pool must be >= 0")
        if self.min_participants < 2:
            raise RulesError("min_participants must be >= 2")
        _check_probability("champion_prize_share", self.champion_prize_share)
        _check_probability("runner_up_prize_share", self.runner_up_prize_share)
        if self.champion_prize_share + self.runner_up_prize_share > 1.0:
            raise RulesError("champion_prize_share + runner_up_prize_share must be <= 1")


@dataclass(frozen=True)
class EconomyConfig:
    starting_money: int
    hire_cost: int
    max_roster: int
    daily_heal_fraction: float
    min_daily_heal: int
    default_seed: int
    contract: ContractTerms

    def validate(self) -> None:
        if self.hire_cost < 0:
            raise RulesError("hire_cost must be >= 0")
        if self.max_roster < 1:
            raise RulesError("max_roster must be >= 1")
        _check_probability("daily_heal_fraction", self.daily_heal_fraction)
        if self.min_daily_heal < 0:
            raise RulesError("min_daily_heal must be >= 0")
        try:
            self.contract.validate()
        except ValidationError as exc:
            raise RulesError(f"contract: {exc}") from exc


@dataclass(frozen=True)
class NamePools:
    prefixes: tuple[str, ...]
    cognomens: tuple[str, ...]
    fallback_prefixes: tuple[str, ...]

    def validate(self) -> None:
        for name in ("prefixes", "cognomens", "fallback_prefixes"):
            values = getattr(self, name)
            if not values:
                raise RulesError(f"{name} must not be empty")
            if any(not value.strip() for value in values):
                raise RulesError(f"{name} cannot contain blank entries")
            if len({value.strip() for value in values}) != len(values):
                raise RulesError(f"{name} contains duplicates")


@dataclass(frozen=True)
class DailyEventOptionDef:
    label: str
    description: str
    money_delta: int
    morale_delta: int
    fatigue_delta: int
    summary: str


@dataclass(frozen=True)
class DailyEventDef:
    type: DailyEventType
    title: str
    description: str
    targeted: bool
    option_a: DailyEventOptionDef
    option_b: DailyEventOptionDef


@dataclass(frozen=True)
class DailyEventsConfig:
    events: tuple[DailyEventDef, ...]
    fallback: DailyEventType

    def get(self, event_type: DailyEventType) -> DailyEventDef:
        for event in self.events:
            if event.type == event_type:
                return event
        raise RulesError(f"No daily event definition for {event_type.value}")


@dataclass(frozen=True)
class Ruleset:
    """Loaded and validated ruleset."""

    combat: CombatModel
    condition: ConditionModel
    injury: InjuryModel
    training: TrainingModel
    tournament: TournamentModel
    economy: EconomyConfig
    names: NamePools
    daily_events: DailyEventsConfig

    @staticmethod
    def load(data_dir: Path) -> "Ruleset":
        """Load ruleset from JSON files in data directory."""
        rules = Ruleset(
            combat=_load_combat(data_dir / "combat.json"),
            condition=_load_condition(data_dir / "condition.json"),
            injury=_load_injury(data_dir / "injury.json"),
            training=_load_training(data_dir / "training.json"),
            tournament=_load_tournament(data_dir / "tournament.json"),
            economy=_load_economy(data_dir / "economy.json"),
            names=_load_names(data_dir / "names.json"),
            daily_events=_load_daily_events(data_dir / "daily_events.json"),
        )
        rules.validate()
        return rules

    def validate(self) -> None:
        self.combat.validate()
        self.condition.validate()
        self.injury.validate()
        self.training.validate()
        self.tournament.validate()
        self.economy.validate()
        self.names.validate()


@lru_cache(maxsize=8)
def _load_cached(data_dir: str) -> Ruleset:
    return Ruleset.load(Path(data_dir))


def load_default_ruleset() -> Ruleset:
    """Packaged rules, or the directory named by ``LUDUS_RULES_DIR``."""
    override = os.environ.get(RULES_DIR_ENV)
    data_dir = Path(override) if override else DEFAULT_RULES_DIR
    return _load_cached(str(data_dir.resolve()))


def _load_json(path: Path) -> dict[str, Any]:
    """Load JSON file."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise RulesError(f"Rules file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise RulesError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise RulesError(f"{path}: top level must be an object")
    return data


def _number(data: dict[str, Any], key: str, path: Path) -> float:
    if key not in data:
        raise RulesError(f"{path}: missing '{key}' key")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RulesError(f"{path}: '{key}' must be a number")
    return float(value)


def _integer(data: dict[str, Any], key: str, path: Path) -> int:
    value = _number(data, key, path)
    if not value.is_integer():
        raise RulesError(f"{path}: '{key}' must be an integer")
    return int(value)


def _text(data: dict[str, Any], key: str, path: Path) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise RulesError(f"{path}: '{key}' must be a non-empty string")
    return value


def _string_list(data: dict[str, Any], key: str, path: Path) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise RulesError(f"{path}: '{key}' must be an array of strings")
    return tuple(value)


def _load_combat(path: Path) -> CombatModel:
    data = _load_json(path)
    return CombatModel(
        base_hit_chance=_number(data, "base_hit_chance", path),
        hit_chance_per_agility_diff=_number(data, "hit_chance_per_agility_diff", path),
        min_hit_chance=_number(data, "min_hit_chance", path),
        max_hit_chance=_number(data, "max_hit_chance", path),
        base_crit_chance=_number(data, "base_crit_chance", path),
        crit_chance_per_agility=_number(data, "crit_chance_per_agility", path),
        max_crit_chance=_number(data, "max_crit_chance", path),
        damage_variance_min=_number(data, "damage_variance_min", path),
        damage_variance_max=_number(data, "damage_variance_max", path),
        crit_multiplier=_number(data, "crit_multiplier", path),
        defense_per_stamina=_number(data, "defense_per_stamina", path),
        min_damage_after_defense=_integer(data, "min_damage_after_defense", path),
    )


def _load_condition(path: Path) -> ConditionModel:
    data = _load_json(path)
    morale = data.get("morale")
    fatigue = data.get("fatigue")
    efficiency = data.get("efficiency")
    for name, section in (("morale", morale), ("fatigue", fatigue), ("efficiency", efficiency)):
        if not isinstance(section, dict):
            raise RulesError(f"{path}: '{name}' must be an object")
    return ConditionModel(
        morale_win_bonus=_integer(morale, "win_bonus", path),
        morale_lose_penalty=_integer(morale, "lose_penalty", path),
        morale_injury_penalty=_integer(morale, "injury_penalty", path),
        morale_daily_rest_bonus=_integer(morale, "daily_rest_bonus", path),
        morale_daily_training_drain=_integer(morale, "daily_training_drain", path),
        fatigue_fight_gain=_integer(fatigue, "fight_gain", path),
        fatigue_training_gain=_integer(fatigue, "training_gain", path),
        fatigue_daily_rest_recovery=_integer(fatigue, "daily_rest_recovery", path),
        fatigue_daily_training_recovery=_integer(fatigue, "daily_training_recovery", path),
        high_morale_bonus=_number(efficiency, "high_morale_bonus", path),
        low_morale_penalty=_number(efficiency, "low_morale_penalty", path),
        high_fatigue_penalty=_number(efficiency, "high_fatigue_penalty", path),
        low_fatigue_bonus=_number(efficiency, "low_fatigue_bonus", path),
    )


def _load_injury(path: Path) -> InjuryModel:
    data = _load_json(path)
    chance = data.get("base_chance")
    days = data.get("recovery_days")
    thresholds = data.get("thresholds")
    for name, section in (("base_chance", chance), ("recovery_days", days), ("thresholds", thresholds)):
        if not isinstance(section, dict):
            raise RulesError(f"{path}: '{name}' must be an object")
    return InjuryModel(
        base_injury_chance_loser=_number(chance, "loser", path),
        base_injury_chance_winner=_number(chance, "winner", path),
        bruise_days=_integer(days, "bruise", path),
        sprain_days=_integer(days, "sprain", path),
        fracture_days=_integer(days, "fracture", path),
        sprain_threshold=_number(thresholds, "sprain", path),
        fracture_threshold=_number(thresholds, "fracture", path),
    )


def _load_training(path: Path) -> TrainingModel:
    data = _load_json(path)
    return TrainingModel(stat_gain_chance=_number(data, "stat_gain_chance", path))


def _load_tournament(path: Path) -> TournamentModel:
    data = _load_json(path)
    return TournamentModel(
        default_prize_pool=_integer(data, "default_prize_pool", path),
        min_participants=_integer(data, "min_participants", path),
        champion_prize_share=_number(data, "champion_prize_share", path),
        runner_up_prize_share=_number(data, "runner_up_prize_share", path),
    )


def _load_economy(path: Path) -> EconomyConfig:
    data = _load_json(path)
    contract = data.get("contract")
    if not isinstance(contract, dict):
        raise RulesError(f"{path}: 'contract' must be an object")
    auto_renew = contract.get("auto_renew", True)
    if not isinstance(auto_renew, bool):
        raise RulesError(f"{path}: contract.auto_renew must be boolean")
    return EconomyConfig(
        starting_money=_integer(data, "starting_money", path),
        hire_cost=_integer(data, "hire_cost", path),
        max_roster=_integer(data, "max_roster", path),
        daily_heal_fraction=_number(data, "daily_heal_fraction", path),
        min_daily_heal=_integer(data, "min_daily_heal", path),
        default_seed=_integer(data, "default_seed", path),
        contract=ContractTerms(
            daily_wage=_integer(contract, "daily_wage", path),
            duration_days=_integer(contract, "duration_days", path),
            max_overdue_days=_integer(contract, "max_overdue_days", path),
            auto_renew=auto_renew,
        ),
    )


def _name_list(data: dict[str, Any], key: str, path: Path) -> tuple[str, ...]:
    names = tuple(item.strip() for item in _string_list(data, key, path))
    if not names:
        raise RulesError(f"{path}: '{key}' must not be empty")
    if not all(names):
        raise RulesError(f"{path}: '{key}' cannot contain blank entries")
    if len(set(names)) != len(names):
        raise RulesError(f"{path}: '{key}' contains duplicates")
    return names


def _load_names(path: Path) -> NamePools:
    data = _load_json(path)
    return NamePools(
        prefixes=_name_list(data, "prefixes", path),
        cognomens=_name_list(data, "cognomens", path),
        fallback_prefixes=_name_list(data, "fallback_prefixes", path),
    )


def _load_event_option(data: Any, path: Path, where: str) -> DailyEventOptionDef:
    if not isinstance(data, dict):
        raise RulesError(f"{path}: {where} must be an object")
    effects = data.get("effects", {})
    if not isinstance(effects, dict):
        raise RulesError(f"{path}: {where}.effects must be an object")
    return DailyEventOptionDef(
        label=_text(data, "label", path),
        description=_text(data, "description", path),
        money_delta=int(effects.get("money", 0)),
        morale_delta=int(effects.get("morale", 0)),
        fatigue_delta=int(effects.get("fatigue", 0)),
        summary=_text(data, "summary", path),
    )


def _load_daily_events(path: Path) -> DailyEventsConfig:
    data = _load_json(path)
    if "events" not in data or not isinstance(data["events"], list):
        raise RulesError(f"{path}: 'events' must be an array")
    events: list[DailyEventDef] = []
    for item in data["events"]:
        if not isinstance(item, dict):
            raise RulesError(f"{path}: event entry must be object")
        try:
            event_type = DailyEventType(item.get("id"))
        except ValueError as exc:
            raise RulesError(f"{path}: unknown event id {item.get('id')!r}") from exc
        options = item.get("options")
        if not isinstance(options, dict):
            raise RulesError(f"{path}: {event_type.value}.options must be an object")
        events.append(
            DailyEventDef(
                type=event_type,
                title=_text(item, "title", path),
                description=_text(item, "description", path),
                targeted=bool(item.get("targeted", False)),
                option_a=_load_event_option(options.get("a"), path, f"{event_type.value}.options.a"),
                option_b=_load_event_option(options.get("b"), path, f"{event_type.value}.options.b"),
            )
        )
    if not events:
        raise RulesError(f"{path}: at least one event is required")
    try:
        fallback = DailyEventType(data.get("fallback"))
    except ValueError as exc:
        raise RulesError(f"{path}: unknown fallback event {data.get('fallback')!r}") from exc
    config = DailyEventsConfig(events=tuple(events), fallback=fallback)
    if config.get(fallback).targeted:
        raise RulesError(f"{path}: fallback event cannot be targeted")
    return config
