"""Tests for single-attack resolution."""

from dataclasses import replace

import pytest

from ludus_sim.domain.errors import FighterStateError
from ludus_sim.domain.events import FightEventType
from ludus_sim.rules.ruleset import CombatModel
from ludus_sim.systems.combat import CombatResolver
from tests.helpers.factories import ScriptedRng, make_fighter


def test_hit_chance_clamps() -> None:
    resolver = CombatResolver()
    quick = make_fighter("Quick", agility=10)
    slow = make_fighter("Slow", agility=1)
    assert resolver.hit_chance(quick, slow) == pytest.approx(0.95)
    assert resolver.hit_chance(slow, quick) == pytest.approx(0.20)
    assert resolver.hit_chance(make_fighter("A"), make_fighter("B")) == pytest.approx(0.65)

    strict = CombatResolver(replace(CombatModel.default(), hit_chance_per_agility_diff=0.2))
    assert strict.hit_chance(slow, quick) == pytest.approx(0.10)


def test_crit_chance_and_defense() -> None:
    resolver = CombatResolver()
    assert resolver.crit_chance(make_fighter(agility=5)) == pytest.approx(0.15)
    assert resolver.crit_chance(make_fighter(agility=10)) == pytest.approx(0.25)
    assert resolver.defense(make_fighter(stamina=6)) == 4
    assert resolver.defense(make_fighter(stamina=7)) == 5


def test_miss_emits_only_miss_event() -> None:
    resolver = CombatResolver()
    attacker = make_fighter("Brutus")
    defender = make_fighter("Varro")
    rng = ScriptedRng(doubles=[0.99])
    resolution = resolver.resolve_attack(attacker, defender, rng, 3)
    assert not resolution.is_hit
    assert resolution.damage == 0
    assert resolution.defender_after == defender
    assert [e.type for e in resolution.events] == [FightEventType.MISS]
    assert resolution.events[0].value == pytest.approx(0.65)
    assert resolution.events[0].round == 3
    assert rng.exhausted


def test_hit_without_crit() -> None:
    resolver = CombatResolver()
    attacker = make_fighter("Brutus", strength=8)
    defender = make_fighter("Varro", stamina=6)
    rng = ScriptedRng(doubles=[0.0, 0.5, 0.99])
    resolution = resolver.resolve_attack(attacker, defender, rng, 1)
    # 8 * 2 * 1.0 variance * 1.0 efficiency - 4 defense
    assert resolution.damage == 12
    assert resolution.is_hit and not resolution.is_critical
    assert resolution.defender_after.health == 48
    assert [e.type for e in resolution.events] == [FightEventType.HIT, FightEventType.DAMAGE_APPLIED]
    assert resolution.events[-1].value == 12
    assert rng.exhausted


def test_crit_multiplies_damage_after_defense() -> None:
    resolver = CombatResolver()
    attacker = make_fighter("Brutus", strength=8)
    defender = make_fighter("Varro", stamina=6)
    resolution = resolver.resolve_attack(attacker, defender, ScriptedRng(doubles=[0.0, 0.5, 0.0]), 2)
    assert resolution.is_critical
    # (16 - 4 defense) * 1.5
    assert resolution.damage == 18
    assert resolution.defender_after.health == 42
    assert [e.type for e in resolution.events] == [
        FightEventType.HIT,
        FightEventType.CRIT,
        FightEventType.DAMAGE_APPLIED,
    ]
    assert resolution.events[1].value == pytest.approx(0.15)


def test_damage_floor() -> None:
    resolver = CombatResolver()
    attacker = make_fighter("Weak", strength=1)
    defender = make_fighter("Wall", stamina=10)
    resolution = resolver.resolve_attack(attacker, defender, ScriptedRng(doubles=[0.0, 0.5, 0.99]), 1)
    assert resolution.damage == 1
    assert resolution.defender_after.health == 99


def test_crit_scales_floored_damage() -> None:
    resolver = CombatResolver()
    attacker = make_fighter("Weak", strength=1)
    defender = make_fighter("Wall", stamina=10)
    resolution = resolver.resolve_attack(attacker, defender, ScriptedRng(doubles=[0.0, 0.5, 0.0]), 1)
    # floor of 1, then round(1.5)
    assert resolution.is_critical
    assert resolution.damage == 2


def test_efficiency_scales_damage() -> None:
    resolver = CombatResolver()
    tired = make_fighter("Tired", strength=10, morale=0, fatigue=100)
    defender = make_fighter("Target", stamina=1)
    # 20 * 1.0 * 0.5 = 10, minus round(0.75) = 1
    resolution = resolver.resolve_attack(tired, defender, ScriptedRng(doubles=[0.0, 0.5, 0.99]), 1)
    assert resolution.damage == 9


def test_dead_participants_rejected() -> None:
    resolver = CombatResolver()
    dead = make_fighter("Dead").take_damage(100)
    alive = make_fighter("Alive")
    with pytest.raises(FighterStateError):
        resolver.resolve_attack(dead, alive, ScriptedRng(), 1)
    with pytest.raises(FighterStateError):
        resolver.resolve_attack(alive, dead, ScriptedRng(), 1)


def test_lethal_hit_floors_health() -> None:
    resolver = CombatResolver()
    attacker = make_fighter("Brutus", strength=10)
    defender = make_fighter("Varro", stamina=1).take_damage(9)
    resolution = resolver.resolve_attack(attacker, defender, ScriptedRng(doubles=[0.0, 0.5, 0.99]), 1)
    assert resolution.defender_after.health == 0
    assert not resolution.defender_after.is_alive
