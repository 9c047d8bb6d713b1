from __future__ import annotations

from ludus_sim.domain.errors import ValidationError
from ludus_sim.domain.types import Fighter, Injury, InjuryType
from ludus_sim.rules.ruleset import InjuryModel
from ludus_sim.sim.rng import Rng


def damage_fraction(fighter: Fighter, pre_fight_max_health: int) -> float:
    if pre_fight_max_health <= 0:
        raise ValidationError("pre-fight max health must be positive")
    return (pre_fight_max_health - fighter.health) / pre_fight_max_health


def classify_injury(fraction: float, model: InjuryModel) -> Injury:
    if fraction >= model.fracture_threshold:
        return Injury(InjuryType.FRACTURE, model.fracture_days)
    if fraction >= model.sprain_threshold:
        return Injury(InjuryType.SPRAIN, model.sprain_days)
    return Injury(InjuryType.BRUISE, model.bruise_days)


def resolve_injury(
    fighter: Fighter,
    pre_fight_max_health: int,
    won: bool,
    rng: Rng,
    model: InjuryModel,
) -> Fighter:
    """Roll a post-fight injury. Dead fighters are returned untouched without drawing."""
    if not fighter.is_alive:
        return fighter
    fraction = damage_fraction(fighter, pre_fight_max_health)
    chance = model.base_injury_chance_winner if won else model.base_injury_chance_loser
    if rng.next_double() >= chance:
        return fighter
    return fighter.apply_injury(classify_injury(fraction, model))
