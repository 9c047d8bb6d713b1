from __future__ import annotations

from ludus_sim.domain.types import MAX_FATIGUE, MAX_MORALE, Fighter
from ludus_sim.rules.ruleset import ConditionModel


def _lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def efficiency(fighter: Fighter, model: ConditionModel) -> float:
    """Outgoing damage multiplier from morale and fatigue, around a 1.0 baseline."""
    morale_term = _lerp(model.low_morale_penalty, model.high_morale_bonus, fighter.morale / MAX_MORALE)
    fatigue_term = _lerp(model.low_fatigue_bonus, model.high_fatigue_penalty, fighter.fatigue / MAX_FATIGUE)
    return 1.0 + morale_term + fatigue_term


def apply_fight_outcome(fighter: Fighter, won: bool, model: ConditionModel) -> Fighter:
    morale_delta = model.morale_win_bonus if won else model.morale_lose_penalty
    return fighter.with_morale(fighter.morale + morale_delta).with_fatigue(fighter.fatigue + model.fatigue_fight_gain)


def apply_injury_penalty(fighter: Fighter, model: ConditionModel) -> Fighter:
    return fighter.with_morale(fighter.morale + model.morale_injury_penalty)


def apply_daily_tick(fighter: Fighter, model: ConditionModel) -> Fighter:
    if fighter.current_training is not None and not fighter.is_injured:
        morale = fighter.morale + model.morale_daily_training_drain
        fatigue = fighter.fatigue + model.fatigue_training_gain + model.fatigue_daily_training_recovery
    else:
        morale = fighter.morale + model.morale_daily_rest_bonus
        fatigue = fighter.fatigue + model.fatigue_daily_rest_recovery
    return fighter.with_morale(morale).with_fatigue(fatigue)
