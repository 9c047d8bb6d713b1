from __future__ import annotations

import json
from dataclasses import replace

import pytest

from ludus_sim.api.mappers import state_from_json, state_to_json, state_to_snapshot
from ludus_sim.domain.errors import ValidationError
from ludus_sim.sim.state import LudusState
from tests.helpers.factories import make_state


def _played_state() -> LudusState:
    state = make_state(seed=17)
    for _ in range(4):
        state = state.hire_fighter()
    ids = [f.id for f in state.fighters]
    state = state.assign_training(ids[0], "agility")
    state = state.advance_day()
    state, _ = state.run_tournament(ids[1:])
    return state


def test_round_trip_preserves_state() -> None:
    state = _played_state()
    assert state_from_json(state_to_json(state)) == state


def test_json_uses_camel_case() -> None:
    data = json.loads(state_to_json(_played_state(), indent=2))
    assert data["version"] == 1
    assert "activeFighterId" in data
    assert "pendingDailyEvent" in data
    assert "maxHealth" in data["fighters"][0]
    assert "championId" in data["lastTournamentResult"]


def test_reloaded_state_continues_identically() -> None:
    state = _played_state()
    reloaded = state_from_json(state_to_json(state))
    continued = state.resolve_daily_event("a").advance_day()
    restored = reloaded.resolve_daily_event("a").advance_day()
    assert continued == restored
    assert continued.hire_fighter() == restored.hire_fighter()


def test_invalid_snapshots_rejected() -> None:
    with pytest.raises(ValidationError):
        state_from_json("{not json")
    data = json.loads(state_to_json(make_state()))
    data["version"] = 99
    with pytest.raises(ValidationError):
        state_from_json(json.dumps(data))
    data["version"] = 1
    data["day"] = 0
    with pytest.raises(ValidationError):
        state_from_json(json.dumps(data))


def test_snapshot_rejects_inconsistent_roster() -> None:
    snapshot = state_to_snapshot(_played_state())
    bad = snapshot.model_copy(update={"active_fighter_id": "ghost"})
    with pytest.raises(ValidationError):
        state_from_json(bad.model_dump_json(by_alias=True))


def test_rules_are_not_serialized() -> None:
    state = make_state()
    assert "rules" not in json.loads(state_to_json(state))
    custom = replace(state.rules, training=replace(state.rules.training, stat_gain_chance=1.0))
    assert state_from_json(state_to_json(state), rules=custom).rules.training.stat_gain_chance == 1.0
