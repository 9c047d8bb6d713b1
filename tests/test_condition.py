"""Tests for morale, fatigue and efficiency."""

from dataclasses import replace

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ludus_sim.domain.types import Injury, InjuryType, TrainingType
from ludus_sim.rules.ruleset import ConditionModel, RulesError
from ludus_sim.systems.condition import apply_daily_tick, apply_fight_outcome, apply_injury_penalty, efficiency
from tests.helpers.factories import make_fighter


def test_peak_condition_efficiency() -> None:
    fighter = make_fighter(morale=100, fatigue=0)
    assert efficiency(fighter, ConditionModel.default()) == pytest.approx(1.20)


def test_worst_condition_efficiency() -> None:
    fighter = make_fighter(morale=0, fatigue=100)
    assert efficiency(fighter, ConditionModel.default()) == pytest.approx(0.50)


@given(morale=st.integers(0, 100), fatigue=st.integers(0, 100))
@settings(max_examples=25)
def test_efficiency_is_bounded(morale: int, fatigue: int) -> None:
    value = efficiency(make_fighter(morale=morale, fatigue=fatigue), ConditionModel.default())
    assert 0.5 - 1e-9 <= value <= 1.2 + 1e-9


def test_fight_outcome() -> None:
    model = ConditionModel.default()
    fighter = make_fighter()
    winner = apply_fight_outcome(fighter, True, model)
    loser = apply_fight_outcome(fighter, False, model)
    assert (winner.morale, winner.fatigue) == (65, 30)
    assert (loser.morale, loser.fatigue) == (30, 30)
    capped = apply_fight_outcome(make_fighter(morale=95, fatigue=90), True, model)
    assert (capped.morale, capped.fatigue) == (100, 100)


def test_daily_tick_training() -> None:
    fighter = make_fighter(fatigue=20).assign_training(TrainingType.STRENGTH)
    ticked = apply_daily_tick(fighter, ConditionModel.default())
    assert ticked.morale == 47
    assert ticked.fatigue == 25


def test_daily_tick_rest() -> None:
    ticked = apply_daily_tick(make_fighter(fatigue=10), ConditionModel.default())
    assert ticked.morale == 55
    assert ticked.fatigue == 0


def test_injured_fighter_rests_even_when_assigned() -> None:
    fighter = make_fighter(fatigue=40).assign_training(TrainingType.AGILITY)
    fighter = fighter.apply_injury(Injury(InjuryType.BRUISE, 1))
    ticked = apply_daily_tick(fighter, ConditionModel.default())
    assert ticked.morale == 55
    assert ticked.fatigue == 25


def test_injury_penalty() -> None:
    model = ConditionModel.default()
    assert apply_injury_penalty(make_fighter(), model).morale == 40
    assert apply_injury_penalty(make_fighter(morale=5), model).morale == 0


def test_model_signs_are_validated() -> None:
    with pytest.raises(RulesError):
        replace(ConditionModel.default(), morale_lose_penalty=5).validate()
    with pytest.raises(RulesError):
        replace(ConditionModel.default(), fatigue_fight_gain=-1).validate()
