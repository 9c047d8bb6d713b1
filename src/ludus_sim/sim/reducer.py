from __future__ import annotations

from dataclasses import dataclass

from ludus_sim.domain.actions import (
    Action,
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
from ludus_sim.domain.errors import LudusError
from ludus_sim.domain.events import UiEvent
from ludus_sim.domain.reports import FightResult, TournamentResult
from ludus_sim.sim.state import LudusState


@dataclass()
class ActionResult:
    ok: bool
    message: str | None
    message_kind: str | None
    state: LudusState
    ui_events: list[UiEvent]
    fight_result: FightResult | None = None
    tournament_result: TournamentResult | None = None


def apply_action(state: LudusState, action: Action) -> ActionResult:
    """Apply one player action. Failures leave ``state`` untouched and report why."""
    ui_events: list[UiEvent] = []

    def ok(
        new_state: LudusState,
        message: str | None,
        kind: str = "info",
        fight_result: FightResult | None = None,
        tournament_result: TournamentResult | None = None,
    ) -> ActionResult:
        return ActionResult(
            ok=True,
            message=message,
            message_kind=kind,
            state=new_state,
            ui_events=list(ui_events),
            fight_result=fight_result,
            tournament_result=tournament_result,
        )

    def fail(message: str) -> ActionResult:
        return ActionResult(
            ok=False,
            message=message,
            message_kind="error",
            state=state,
            ui_events=list(ui_events),
        )

    if isinstance(action, AdvanceDay):
        try:
            new_state = state.advance_day()
        except LudusError as exc:
            return fail(str(exc))
        released = {f.id for f in state.fighters} - {f.id for f in new_state.fighters}
        for fighter in state.fighters:
            if fighter.id in released:
                ui_events.append(
                    UiEvent("fighter_released", f"{fighter.name} left over unpaid wages", {"fighter_id": fighter.id})
                )
        before_by_id = {f.id: f for f in state.fighters}
        for after in new_state.fighters:
            before = before_by_id.get(after.id)
            if before is not None and after.stats != before.stats:
                ui_events.append(
                    UiEvent("stat_gain", f"{after.name} improved through training", {"fighter_id": after.id})
                )
        event = new_state.pending_daily_event
        if event is not None:
            ui_events.append(UiEvent("daily_event", event.title, {"type": event.type.value}))
        return ok(new_state, f"Day {new_state.day} begins", "info")

    if isinstance(action, ResolveDailyEvent):
        try:
            new_state = state.resolve_daily_event(action.option)
        except LudusError as exc:
            return fail(str(exc))
        resolution = new_state.last_daily_event_resolution
        return ok(new_state, resolution.summary if resolution else None, "accent")

    if isinstance(action, ResolveFight):
        try:
            new_state, result = state.resolve_fight(action.first_id, action.second_id)
        except LudusError as exc:
            return fail(str(exc))
        ui_events.append(
            UiEvent(
                "fight_finished",
                f"{result.winner.name} defeats {result.loser.name}",
                {"winner_id": result.winner.id, "loser_id": result.loser.id, "rounds": result.log.rounds},
            )
        )
        if result.winner.is_injured:
            ui_events.append(
                UiEvent("injury", f"{result.winner.name} was injured", {"fighter_id": result.winner.id})
            )
        return ok(new_state, f"{result.winner.name} wins", "accent", fight_result=result)

    if isinstance(action, RunTournament):
        try:
            new_state, result = state.run_tournament(action.participant_ids, action.prize_pool)
        except LudusError as exc:
            return fail(str(exc))
        champion = new_state.get_fighter(result.champion_id)
        ui_events.append(
            UiEvent(
                "tournament_finished",
                f"{champion.name} is champion",
                {"champion_id": result.champion_id, "prize": result.total_prize},
            )
        )
        return ok(new_state, f"{champion.name} wins the tournament", "accent", tournament_result=result)

    if isinstance(action, HireFighter):
        try:
            new_state = state.hire_fighter()
        except LudusError as exc:
            return fail(str(exc))
        hired = new_state.fighters[-1]
        ui_events.append(UiEvent("fighter_hired", f"{hired.name} joins the ludus", {"fighter_id": hired.id}))
        return ok(new_state, f"Hired {hired.name}", "accent")

    if isinstance(action, AddFighter):
        try:
            return ok(state.add_fighter(action.fighter), f"{action.fighter.name} added", "info")
        except LudusError as exc:
            return fail(str(exc))

    if isinstance(action, RemoveFighter):
        try:
            return ok(state.remove_fighter(action.fighter_id), "Fighter removed", "info")
        except LudusError as exc:
            return fail(str(exc))

    if isinstance(action, SetActiveFighter):
        try:
            return ok(state.set_active_fighter(action.fighter_id), "Active fighter set", "info")
        except LudusError as exc:
            return fail(str(exc))

    if isinstance(action, AssignTraining):
        try:
            new_state = state.assign_training(action.fighter_id, action.training)
        except LudusError as exc:
            return fail(str(exc))
        return ok(new_state, "Training assigned", "info")

    if isinstance(action, ClearTraining):
        try:
            return ok(state.clear_training(action.fighter_id), "Training cleared", "info")
        except LudusError as exc:
            return fail(str(exc))

    return fail(f"Unknown action: {type(action).__name__}")
