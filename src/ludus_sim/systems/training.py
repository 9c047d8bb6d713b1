from __future__ import annotations

from ludus_sim.domain.types import Fighter
from ludus_sim.rules.ruleset import ConditionModel, TrainingModel
from ludus_sim.sim.rng import Rng
from ludus_sim.systems.condition import efficiency


def gain_chance(fighter: Fighter, model: TrainingModel, condition: ConditionModel) -> float:
    return model.stat_gain_chance * efficiency(fighter, condition)


def apply_daily_training(fighter: Fighter, rng: Rng, model: TrainingModel, condition: ConditionModel) -> Fighter:
    """One training roll for a fighter with an active assignment; injured or idle fighters are skipped."""
    training = fighter.current_training
    if training is None or fighter.is_injured or not fighter.is_alive:
        return fighter
    if rng.next_double() < gain_chance(fighter, model, condition):
        return fighter.apply_stat_gain(training)
    return fighter
