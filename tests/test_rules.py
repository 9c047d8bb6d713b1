"""Tests for the rules loader."""

import json
import shutil
from dataclasses import replace
from pathlib import Path

import pytest

from ludus_sim.domain.daily_events import DailyEventType
from ludus_sim.rules.ruleset import DEFAULT_RULES_DIR, NamePools, RulesError, Ruleset, load_default_ruleset


@pytest.fixture()
def rules_dir(tmp_path: Path) -> Path:
    target = tmp_path / "rules"
    shutil.copytree(DEFAULT_RULES_DIR, target)
    return target


def _edit(path: Path, update) -> None:
    data = json.loads(path.read_text(encoding="utf-8"))
    update(data)
    path.write_text(json.dumps(data), encoding="utf-8")


def test_load_default_ruleset() -> None:
    rules = Ruleset.load(DEFAULT_RULES_DIR)

    assert rules.combat.base_hit_chance == 0.65
    assert rules.combat.min_damage_after_defense == 1
    assert rules.condition.morale_lose_penalty == -20
    assert rules.injury.fracture_days == 7
    assert rules.training.stat_gain_chance == 0.5
    assert rules.tournament.default_prize_pool == 200
    assert rules.economy.starting_money == 500
    assert rules.economy.contract.daily_wage == 5
    assert len(rules.names.prefixes) == 12
    assert rules.daily_events.fallback == DailyEventType.TAVERN_RUMOR
    assert {e.type for e in rules.daily_events.events} == set(DailyEventType)


def test_default_ruleset_is_cached() -> None:
    assert load_default_ruleset() is load_default_ruleset()


def test_rules_dir_override(rules_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _edit(rules_dir / "economy.json", lambda d: d.update(starting_money=1234))
    monkeypatch.setenv("LUDUS_RULES_DIR", str(rules_dir))
    assert load_default_ruleset().economy.starting_money == 1234


def test_missing_file(rules_dir: Path) -> None:
    (rules_dir / "combat.json").unlink()
    with pytest.raises(RulesError, match="combat.json"):
        Ruleset.load(rules_dir)


def test_invalid_json(rules_dir: Path) -> None:
    (rules_dir / "training.json").write_text("{", encoding="utf-8")
    with pytest.raises(RulesError, match="Invalid JSON"):
        Ruleset.load(rules_dir)


@pytest.mark.parametrize(
    "filename,update",
    [
        ("combat.json", lambda d: d.pop("crit_multiplier")),
        ("combat.json", lambda d: d.update(min_hit_chance=1.5)),
        ("combat.json", lambda d: d.update(min_damage_after_defense=1.5)),
        ("condition.json", lambda d: d["morale"].update(win_bonus="lots")),
        ("condition.json", lambda d: d["fatigue"].update(fight_gain=-1)),
        ("injury.json", lambda d: d["thresholds"].update(sprain=0.9)),
        ("tournament.json", lambda d: d.update(champion_prize_share=0.9)),
        ("tournament.json", lambda d: d.update(min_participants=1)),
        ("economy.json", lambda d: d["contract"].update(auto_renew="yes")),
        ("economy.json", lambda d: d["contract"].update(max_overdue_days=0)),
        ("names.json", lambda d: d.update(fallback_prefixes=[])),
        ("names.json", lambda d: d.update(prefixes=[])),
        ("names.json", lambda d: d.update(cognomens=["Varus", "  "])),
        ("names.json", lambda d: d.update(prefixes=["Aulus", " Aulus"])),
        ("daily_events.json", lambda d: d.update(fallback="harsh_drill")),
        ("daily_events.json", lambda d: d.update(fallback="gladiator_strike")),
    ],
)
def test_invalid_values(rules_dir: Path, filename: str, update) -> None:
    _edit(rules_dir / filename, update)
    with pytest.raises(RulesError):
        Ruleset.load(rules_dir)


def test_name_pool_errors_name_the_file(rules_dir: Path) -> None:
    _edit(rules_dir / "names.json", lambda d: d.update(cognomens=["Varus", "Varus"]))
    with pytest.raises(RulesError, match="names.json"):
        Ruleset.load(rules_dir)


def test_built_name_pools_are_validated() -> None:
    rules = load_default_ruleset()
    replace(rules, names=NamePools(("Gaius",), ("Rufus",), ("Brutus",))).validate()
    with pytest.raises(RulesError):
        replace(rules, names=NamePools(("Gaius",), (), ("Brutus",))).validate()
