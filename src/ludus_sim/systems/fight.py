from __future__ import annotations

import logging
from typing import Mapping

from ludus_sim.domain.errors import FighterStateError, ValidationError
from ludus_sim.domain.events import FightEvent, FightEventType, FightLog
from ludus_sim.domain.reports import FightResult
from ludus_sim.domain.types import Fighter
from ludus_sim.rules.ruleset import ConditionModel, InjuryModel
from ludus_sim.sim.rng import Rng
from ludus_sim.systems import condition, injury
from ludus_sim.systems.combat import CombatResolver

logger = logging.getLogger(__name__)


def simulate_fight(first: Fighter, second: Fighter, rng: Rng, resolver: CombatResolver | None = None) -> FightResult:
    """Alternate attacks until one side falls.

    The round counter starts at 1; the first fighter attacks on even rounds, so
    the second fighter opens the fight.
    """
    resolver = resolver or CombatResolver()
    if not first.is_alive:
        raise FighterStateError(f"{first.name} must be alive to fight")
    if not second.is_alive:
        raise FighterStateError(f"{second.name} must be alive to fight")
    if resolver.model.min_damage_after_defense < 1:
        raise ValidationError("min_damage_after_defense must be >= 1 for a fight to terminate")

    fighter1 = first
    fighter2 = second
    events: list[FightEvent] = []
    round_number = 0

    while fighter1.is_alive and fighter2.is_alive:
        round_number += 1
        first_attacks = round_number % 2 == 0
        attacker, defender = (fighter1, fighter2) if first_attacks else (fighter2, fighter1)

        resolution = resolver.resolve_attack(attacker, defender, rng, round_number)
        events.extend(resolution.events)
        if first_attacks:
            fighter2 = resolution.defender_after
        else:
            fighter1 = resolution.defender_after

        if not resolution.defender_after.is_alive:
            for event_type in (FightEventType.KILL, FightEventType.FIGHT_END):
                events.append(
                    FightEvent(
                        round=round_number,
                        attacker_name=attacker.name,
                        defender_name=defender.name,
                        type=event_type,
                        value=0.0,
                    )
                )

    winner, loser = (fighter1, fighter2) if fighter1.is_alive else (fighter2, fighter1)
    logger.debug("Fight %s vs %s: %s wins after %d rounds", first.name, second.name, winner.name, round_number)
    return FightResult(winner=winner, loser=loser, log=FightLog(tuple(events)))


def apply_post_fight_effects(
    result: FightResult,
    pre_fight_max_health: Mapping[str, int],
    rng: Rng,
    injury_model: InjuryModel,
    condition_model: ConditionModel,
) -> FightResult:
    """Injuries (winner first), fight-outcome condition, injury morale penalty, training cleared on injury."""
    winner = injury.resolve_injury(result.winner, pre_fight_max_health[result.winner.id], True, rng, injury_model)
    loser = injury.resolve_injury(result.loser, pre_fight_max_health[result.loser.id], False, rng, injury_model)

    winner = condition.apply_fight_outcome(winner, True, condition_model)
    loser = condition.apply_fight_outcome(loser, False, condition_model)

    updated = []
    for fighter in (winner, loser):
        if fighter.is_injured:
            fighter = condition.apply_injury_penalty(fighter, condition_model)
            if fighter.current_training is not None:
                fighter = fighter.clear_training()
        updated.append(fighter)
    return FightResult(winner=updated[0], loser=updated[1], log=result.log)


def run_fight(
    first: Fighter,
    second: Fighter,
    rng: Rng,
    resolver: CombatResolver,
    injury_model: InjuryModel,
) -> FightResult:
    """A full fight between two fightable fighters, post-fight effects included."""
    if first.id == second.id:
        raise ValidationError("A fighter cannot fight itself")
    for fighter in (first, second):
        if not fighter.can_fight:
            raise ValidationError(f"{fighter.name} is not fit to fight")
    pre_fight = {first.id: first.max_health, second.id: second.max_health}
    raw = simulate_fight(first, second, rng, resolver)
    return apply_post_fight_effects(raw, pre_fight, rng, injury_model, resolver.condition)
