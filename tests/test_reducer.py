from __future__ import annotations

from dataclasses import dataclass

from ludus_sim.domain.actions import (
    AddFighter,
    AdvanceDay,
    AssignTraining,
    ClearTraining,
    HireFighter,
    RemoveFighter,
    ResolveDailyEvent,
    ResolveFight,
    RunTournament,
    SetActiveFighter,
)
from ludus_sim.domain.daily_events import DailyEventOptionId
from ludus_sim.domain.types import TrainingType
from ludus_sim.sim.reducer import apply_action
from tests.helpers.factories import make_fighter, make_state


def test_advance_day_blocked_by_pending_event() -> None:
    state = make_state(fighters=[make_fighter("Crixus")])
    result = apply_action(state, AdvanceDay())
    assert result.ok
    assert result.state.day == 2
    assert any(e.kind == "daily_event" for e in result.ui_events)

    blocked = apply_action(result.state, AdvanceDay())
    assert blocked.ok is False
    assert blocked.message_kind == "error"
    assert blocked.state is result.state

    resolved = apply_action(result.state, ResolveDailyEvent(DailyEventOptionId.OPTION_A))
    assert resolved.ok
    assert resolved.message == resolved.state.last_daily_event_resolution.summary


def test_hire_and_roster_actions() -> None:
    state = make_state()
    hired = apply_action(state, HireFighter())
    assert hired.ok
    assert hired.ui_events[0].kind == "fighter_hired"
    fighter_id = hired.state.fighters[0].id

    added = apply_action(hired.state, AddFighter(make_fighter("Varro")))
    assert added.ok and added.state.count == 2
    assert apply_action(added.state, AddFighter(make_fighter("Varro"))).ok is False

    active = apply_action(added.state, SetActiveFighter("varro"))
    assert active.state.active_fighter_id == "varro"

    removed = apply_action(active.state, RemoveFighter(fighter_id))
    assert removed.ok and removed.state.count == 1
    assert apply_action(removed.state, RemoveFighter(fighter_id)).ok is False


def test_training_actions() -> None:
    state = make_state(fighters=[make_fighter("Crixus", strength=10)])
    assert apply_action(state, AssignTraining("crixus", TrainingType.STRENGTH)).ok is False
    assigned = apply_action(state, AssignTraining("crixus", TrainingType.STAMINA))
    assert assigned.ok
    assert assigned.state.get_fighter("crixus").current_training == TrainingType.STAMINA
    cleared = apply_action(assigned.state, ClearTraining("crixus"))
    assert cleared.state.get_fighter("crixus").current_training is None


def test_fight_action_reports_result() -> None:
    state = make_state(fighters=[make_fighter("Crixus"), make_fighter("Varro")])
    result = apply_action(state, ResolveFight("crixus", "varro"))
    assert result.ok
    assert result.fight_result is not None
    finished = [e for e in result.ui_events if e.kind == "fight_finished"]
    assert finished[0].data["winner_id"] == result.fight_result.winner.id

    again = apply_action(result.state, ResolveFight("crixus", "varro"))
    assert again.ok is False


def test_tournament_action() -> None:
    state = make_state(fighters=[make_fighter("Crixus"), make_fighter("Varro"), make_fighter("Spiculus")])
    result = apply_action(state, RunTournament(("crixus", "varro", "spiculus")))
    assert result.ok
    assert result.tournament_result is not None
    assert result.state.money == state.money + result.tournament_result.total_prize
    assert result.ui_events[-1].kind == "tournament_finished"

    too_few = apply_action(state, RunTournament(("crixus",)))
    assert too_few.ok is False
    assert too_few.state is state


def test_unknown_action() -> None:
    @dataclass(frozen=True)
    class Bribe:
        amount: int

    result = apply_action(make_state(), Bribe(10))
    assert result.ok is False
    assert "Bribe" in result.message
