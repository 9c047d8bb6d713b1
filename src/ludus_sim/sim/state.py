"""Simulation state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Sequence

from ludus_sim.domain.daily_events import DailyEventInstance, DailyEventOptionId, DailyEventResolution
from ludus_sim.domain.errors import ValidationError
from ludus_sim.domain.reports import FightResult, TournamentResult
from ludus_sim.domain.types import MAX_STAT, MIN_STAT, ContractState, Fighter, Stats, TrainingType
from ludus_sim.rules.ruleset import Ruleset, load_default_ruleset
from ludus_sim.sim.rng import DEFAULT_SEED, SeededRng, derive_seed

if TYPE_CHECKING:
    from ludus_sim.systems.combat import CombatResolver
    from ludus_sim.systems.names import NameGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LudusState:
    """Immutable snapshot of a ludus. Every transition returns a new state.

    Transitions that consume randomness build a fresh ``SeededRng`` from
    ``seed`` and persist one more draw from it as the next seed, so a
    snapshot alone reproduces everything that follows.
    """

    fighters: tuple[Fighter, ...] = ()
    active_fighter_id: str | None = None
    day: int = 1
    money: int = 0
    seed: int = DEFAULT_SEED
    name_seed: int = 0
    names_issued: int = 0
    pending_daily_event: DailyEventInstance | None = None
    last_daily_event_resolution: DailyEventResolution | None = None
    last_tournament_result: TournamentResult | None = None
    rules: Ruleset = field(default_factory=load_default_ruleset, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fighters", tuple(self.fighters))
        ids = [f.id for f in self.fighters]
        if len(set(ids)) != len(ids):
            raise ValidationError("Fighter ids must be unique")
        if len(ids) > self.rules.economy.max_roster:
            raise ValidationError(f"Roster cannot exceed {self.rules.economy.max_roster} fighters")
        if self.active_fighter_id is not None and self.active_fighter_id not in ids:
            raise ValidationError(f"Active fighter {self.active_fighter_id} is not in the roster")
        if self.day < 1:
            raise ValidationError("day must be >= 1")
        if self.names_issued < 0:
            raise ValidationError("names_issued must be >= 0")
        event = self.pending_daily_event
        if event is not None and event.target_fighter_id is not None and event.target_fighter_id not in ids:
            raise ValidationError(f"Daily event target {event.target_fighter_id} is not in the roster")
        result = self.last_tournament_result
        if result is not None:
            missing = sorted(set(result.participant_ids) - set(ids))
            if missing:
                raise ValidationError(f"Tournament result references fighters not in the roster: {missing}")

    @classmethod
    def new_game(cls, seed: int | None = None, rules: Ruleset | None = None) -> "LudusState":
        rules = rules or load_default_ruleset()
        seed = rules.economy.default_seed if seed is None else seed
        return cls(
            day=1,
            money=rules.economy.starting_money,
            seed=seed,
            name_seed=derive_seed(seed, purpose="names"),
            rules=rules,
        )

    # Queries

    @property
    def count(self) -> int:
        return len(self.fighters)

    @property
    def alive_fighters(self) -> tuple[Fighter, ...]:
        return tuple(f for f in self.fighters if f.is_alive)

    @property
    def active_fighter(self) -> Fighter | None:
        if self.active_fighter_id is None:
            return None
        return self.get_fighter(self.active_fighter_id)

    def find_fighter(self, fighter_id: str) -> Fighter | None:
        for fighter in self.fighters:
            if fighter.id == fighter_id:
                return fighter
        return None

    def get_fighter(self, fighter_id: str) -> Fighter:
        fighter = self.find_fighter(fighter_id)
        if fighter is None:
            raise ValidationError(f"Fighter {fighter_id} not found")
        return fighter

    def create_rng(self) -> SeededRng:
        return SeededRng(self.seed)

    def name_generator(self) -> "NameGenerator":
        from ludus_sim.systems.names import NameGenerator

        pools = self.rules.names
        return NameGenerator(self.name_seed, pools.prefixes, pools.cognomens, issued=self.names_issued)

    def combat_resolver(self) -> "CombatResolver":
        from ludus_sim.systems.combat import CombatResolver

        return CombatResolver(self.rules.combat, self.rules.condition)

    # Roster transitions

    def add_fighter(self, fighter: Fighter) -> "LudusState":
        if self.find_fighter(fighter.id) is not None:
            raise ValidationError(f"Fighter {fighter.id} already exists")
        if self.count >= self.rules.economy.max_roster:
            raise ValidationError(f"Roster is full ({self.rules.economy.max_roster} fighters)")
        return replace(
            self,
            fighters=self.fighters + (fighter,),
            active_fighter_id=self.active_fighter_id or fighter.id,
        )

    def remove_fighter(self, fighter_id: str) -> "LudusState":
        self.get_fighter(fighter_id)
        fighters = tuple(f for f in self.fighters if f.id != fighter_id)
        active = None if self.active_fighter_id == fighter_id else self.active_fighter_id
        return replace(
            self,
            fighters=fighters,
            active_fighter_id=active,
            pending_daily_event=_refresh_pending_event(self.pending_daily_event, fighters, self.rules),
            last_tournament_result=prune_tournament_result(self.last_tournament_result, fighters),
        )

    def set_active_fighter(self, fighter_id: str) -> "LudusState":
        self.get_fighter(fighter_id)
        return replace(self, active_fighter_id=fighter_id)

    def hire_fighter(self) -> "LudusState":
        """Hire a fighter with random stats and the next pool name, paying the hire cost."""
        economy = self.rules.economy
        if self.count >= economy.max_roster:
            raise ValidationError(f"Roster is full ({economy.max_roster} fighters)")

        rng = self.create_rng()
        stats = Stats(
            strength=rng.next_int(MIN_STAT, MAX_STAT),
            agility=rng.next_int(MIN_STAT, MAX_STAT),
            stamina=rng.next_int(MIN_STAT, MAX_STAT),
        )
        fighter_id = rng.next_id()
        names = self.name_generator()
        name = names.try_generate()
        if name is None:
            prefixes = self.rules.names.fallback_prefixes
            name = f"{prefixes[rng.next_below(len(prefixes))]} #{self.count + 1}"
            logger.warning("Name pool exhausted after %d names; hiring %s", names.issued, name)

        fighter = Fighter.create(
            name,
            stats,
            fighter_id=fighter_id,
            contract=ContractState.from_terms(economy.contract),
        )
        hired = self.add_fighter(fighter)
        return replace(
            hired,
            money=self.money - economy.hire_cost,
            names_issued=names.issued,
            seed=rng.next_seed(),
        )

    def assign_training(self, fighter_id: str, training: TrainingType | str) -> "LudusState":
        fighter = self.get_fighter(fighter_id)
        return self._replace_fighter(fighter.assign_training(_coerce(TrainingType, training)))

    def clear_training(self, fighter_id: str) -> "LudusState":
        return self._replace_fighter(self.get_fighter(fighter_id).clear_training())

    # Day cycle

    def advance_day(self) -> "LudusState":
        from ludus_sim.sim.day_stepper import advance_day

        return advance_day(self)

    def resolve_daily_event(self, option: DailyEventOptionId | str) -> "LudusState":
        from ludus_sim.systems.daily_events import apply_choice

        if self.pending_daily_event is None:
            raise ValidationError("No pending daily event to resolve")
        fighters, money, resolution = apply_choice(
            self.fighters,
            self.money,
            self.pending_daily_event,
            _coerce(DailyEventOptionId, option),
            self.rules.daily_events,
        )
        return replace(
            self,
            fighters=fighters,
            money=money,
            pending_daily_event=None,
            last_daily_event_resolution=resolution,
        )

    # Combat

    def resolve_fight(self, first_id: str, second_id: str) -> tuple["LudusState", FightResult]:
        from ludus_sim.systems.fight import run_fight

        if first_id == second_id:
            raise ValidationError("A fight needs two different fighters")
        first = self.get_fighter(first_id)
        second = self.get_fighter(second_id)
        for fighter in (first, second):
            if not fighter.can_fight:
                raise ValidationError(f"{fighter.name} is not fit to fight")

        rng = self.create_rng()
        result = run_fight(first, second, rng, self.combat_resolver(), self.rules.injury)
        updated = {result.winner.id: result.winner, result.loser.id: result.loser}
        fighters = tuple(updated.get(f.id, f) for f in self.fighters)
        state = replace(
            self,
            fighters=fighters,
            seed=rng.next_seed(),
            pending_daily_event=_refresh_pending_event(self.pending_daily_event, fighters, self.rules),
        )
        return state, result

    def run_tournament(
        self,
        participant_ids: Sequence[str],
        prize_pool: int | None = None,
    ) -> tuple["LudusState", TournamentResult]:
        from ludus_sim.systems.tournament import run_tournament

        if prize_pool is None:
            prize_pool = self.rules.tournament.default_prize_pool
        rng = self.create_rng()
        fighters, result = run_tournament(
            self.fighters,
            tuple(participant_ids),
            prize_pool,
            rng,
            self.rules.tournament,
            self.combat_resolver(),
            self.rules.injury,
        )
        state = replace(
            self,
            fighters=fighters,
            money=self.money + result.total_prize,
            seed=rng.next_seed(),
            last_tournament_result=result,
            pending_daily_event=_refresh_pending_event(self.pending_daily_event, fighters, self.rules),
        )
        return state, result

    def _replace_fighter(self, updated: Fighter) -> "LudusState":
        return replace(self, fighters=tuple(updated if f.id == updated.id else f for f in self.fighters))


def _refresh_pending_event(
    event: DailyEventInstance | None,
    fighters: Sequence[Fighter],
    rules: Ruleset,
) -> DailyEventInstance | None:
    """A targeted event whose target is gone or dead becomes the fallback event."""
    if event is None or event.target_fighter_id is None:
        return event
    if any(f.id == event.target_fighter_id and f.is_alive for f in fighters):
        return event
    from ludus_sim.systems.daily_events import build_instance

    return build_instance(rules.daily_events.get(rules.daily_events.fallback))


def _coerce(enum_type, value):
    try:
        return enum_type(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown {enum_type.__name__}: {value!r}") from exc


def prune_tournament_result(
    result: TournamentResult | None,
    fighters: Sequence[Fighter],
) -> TournamentResult | None:
    """Drop the last tournament result once any of its participants has left the roster."""
    if result is None:
        return None
    ids = {f.id for f in fighters}
    if all(fighter_id in ids for fighter_id in result.participant_ids):
        return result
    return None
