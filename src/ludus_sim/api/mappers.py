"""Convert between ``LudusState`` and its pydantic snapshot.

Rules are not part of a snapshot; a reloaded state uses the ruleset passed
in (or the default one).
"""

from __future__ import annotations

import pydantic

from ludus_sim.api import schemas
from ludus_sim.domain.daily_events import DailyEventInstance, DailyEventOption, DailyEventResolution
from ludus_sim.domain.errors import ValidationError
from ludus_sim.domain.events import FightEvent, FightLog
from ludus_sim.domain.reports import FightResult, TournamentMatch, TournamentResult, TournamentRound
from ludus_sim.domain.types import ContractState, ContractTerms, Fighter, Injury, Stats
from ludus_sim.rules.ruleset import Ruleset, load_default_ruleset
from ludus_sim.sim.state import LudusState


def state_to_snapshot(state: LudusState) -> schemas.LudusSnapshot:
    return schemas.LudusSnapshot(
        fighters=[_fighter(f) for f in state.fighters],
        active_fighter_id=state.active_fighter_id,
        day=state.day,
        money=state.money,
        seed=state.seed,
        name_seed=state.name_seed,
        names_issued=state.names_issued,
        pending_daily_event=_daily_event(state.pending_daily_event),
        last_daily_event_resolution=_resolution(state.last_daily_event_resolution),
        last_tournament_result=_tournament(state.last_tournament_result),
    )


def state_to_json(state: LudusState, indent: int | None = None) -> str:
    return state_to_snapshot(state).model_dump_json(by_alias=True, indent=indent)


def snapshot_to_state(snapshot: schemas.LudusSnapshot, rules: Ruleset | None = None) -> LudusState:
    if snapshot.version != schemas.SNAPSHOT_VERSION:
        raise ValidationError(f"Unsupported snapshot version {snapshot.version}")
    pending = snapshot.pending_daily_event
    resolution = snapshot.last_daily_event_resolution
    return LudusState(
        fighters=tuple(_to_fighter(f) for f in snapshot.fighters),
        active_fighter_id=snapshot.active_fighter_id,
        day=snapshot.day,
        money=snapshot.money,
        seed=snapshot.seed,
        name_seed=snapshot.name_seed,
        names_issued=snapshot.names_issued,
        pending_daily_event=_to_daily_event(pending) if pending else None,
        last_daily_event_resolution=(
            DailyEventResolution(
                type=resolution.type,
                selected_option=resolution.selected_option,
                money_delta=resolution.money_delta,
                summary=resolution.summary,
            )
            if resolution
            else None
        ),
        last_tournament_result=_to_tournament(snapshot.last_tournament_result),
        rules=rules or load_default_ruleset(),
    )


def state_from_json(text: str | bytes, rules: Ruleset | None = None) -> LudusState:
    try:
        snapshot = schemas.LudusSnapshot.model_validate_json(text)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid snapshot: {exc}") from exc
    return snapshot_to_state(snapshot, rules)


def _fighter(fighter: Fighter) -> schemas.FighterSnapshot:
    injury = fighter.current_injury
    terms = fighter.contract.terms
    return schemas.FighterSnapshot(
        id=fighter.id,
        name=fighter.name,
        stats=schemas.StatsSnapshot(
            strength=fighter.stats.strength,
            agility=fighter.stats.agility,
            stamina=fighter.stats.stamina,
        ),
        health=fighter.health,
        max_health=fighter.max_health,
        current_training=fighter.current_training,
        current_injury=(
            schemas.InjurySnapshot(type=injury.type, recovery_days_left=injury.recovery_days_left)
            if injury
            else None
        ),
        morale=fighter.morale,
        fatigue=fighter.fatigue,
        contract=schemas.ContractSnapshot(
            terms=schemas.ContractTermsSnapshot(
                daily_wage=terms.daily_wage,
                duration_days=terms.duration_days,
                max_overdue_days=terms.max_overdue_days,
                auto_renew=terms.auto_renew,
            ),
            days_remaining=fighter.contract.days_remaining,
            overdue_days=fighter.contract.overdue_days,
        ),
    )


def _to_fighter(snapshot: schemas.FighterSnapshot) -> Fighter:
    terms = snapshot.contract.terms
    injury = snapshot.current_injury
    return Fighter(
        id=snapshot.id,
        name=snapshot.name,
        stats=Stats(snapshot.stats.strength, snapshot.stats.agility, snapshot.stats.stamina),
        health=snapshot.health,
        max_health=snapshot.max_health,
        current_training=snapshot.current_training,
        current_injury=Injury(injury.type, injury.recovery_days_left) if injury else None,
        morale=snapshot.morale,
        fatigue=snapshot.fatigue,
        contract=ContractState(
            terms=ContractTerms(
                daily_wage=terms.daily_wage,
                duration_days=terms.duration_days,
                max_overdue_days=terms.max_overdue_days,
                auto_renew=terms.auto_renew,
            ),
            days_remaining=snapshot.contract.days_remaining,
            overdue_days=snapshot.contract.overdue_days,
        ),
    )


def _fight_result(result: FightResult | None) -> schemas.FightResultSnapshot | None:
    if result is None:
        return None
    return schemas.FightResultSnapshot(
        winner=_fighter(result.winner),
        loser=_fighter(result.loser),
        events=[
            schemas.FightEventSnapshot(
                round=e.round,
                attacker_name=e.attacker_name,
                defender_name=e.defender_name,
                type=e.type,
                value=e.value,
            )
            for e in result.log
        ],
    )


def _to_fight_result(snapshot: schemas.FightResultSnapshot | None) -> FightResult | None:
    if snapshot is None:
        return None
    events = tuple(
        FightEvent(
            round=e.round,
            attacker_name=e.attacker_name,
            defender_name=e.defender_name,
            type=e.type,
            value=e.value,
        )
        for e in snapshot.events
    )
    return FightResult(
        winner=_to_fighter(snapshot.winner),
        loser=_to_fighter(snapshot.loser),
        log=FightLog(events),
    )


def _tournament(result: TournamentResult | None) -> schemas.TournamentResultSnapshot | None:
    if result is None:
        return None
    return schemas.TournamentResultSnapshot(
        rounds=[
            schemas.TournamentRoundSnapshot(
                round_number=r.round_number,
                matches=[
                    schemas.TournamentMatchSnapshot(
                        fighter1_id=m.fighter1_id,
                        fighter2_id=m.fighter2_id,
                        winner_id=m.winner_id,
                        result=_fight_result(m.result),
                    )
                    for m in r.matches
                ],
            )
            for r in result.rounds
        ],
        participant_ids=list(result.participant_ids),
        champion_id=result.champion_id,
        runner_up_id=result.runner_up_id,
        prize_pool=result.prize_pool,
        champion_prize=result.champion_prize,
        runner_up_prize=result.runner_up_prize,
    )


def _to_tournament(snapshot: schemas.TournamentResultSnapshot | None) -> TournamentResult | None:
    if snapshot is None:
        return None
    return TournamentResult(
        rounds=tuple(
            TournamentRound(
                round_number=r.round_number,
                matches=tuple(
                    TournamentMatch(
                        fighter1_id=m.fighter1_id,
                        fighter2_id=m.fighter2_id,
                        winner_id=m.winner_id,
                        result=_to_fight_result(m.result),
                    )
                    for m in r.matches
                ),
            )
            for r in snapshot.rounds
        ),
        participant_ids=tuple(snapshot.participant_ids),
        champion_id=snapshot.champion_id,
        runner_up_id=snapshot.runner_up_id,
        prize_pool=snapshot.prize_pool,
        champion_prize=snapshot.champion_prize,
        runner_up_prize=snapshot.runner_up_prize,
    )


def _daily_event(event: DailyEventInstance | None) -> schemas.DailyEventSnapshot | None:
    if event is None:
        return None

    def option(opt: DailyEventOption) -> schemas.DailyEventOptionSnapshot:
        return schemas.DailyEventOptionSnapshot(id=opt.id, label=opt.label, description=opt.description)

    return schemas.DailyEventSnapshot(
        type=event.type,
        title=event.title,
        description=event.description,
        option_a=option(event.option_a),
        option_b=option(event.option_b),
        target_fighter_id=event.target_fighter_id,
    )


def _to_daily_event(snapshot: schemas.DailyEventSnapshot) -> DailyEventInstance:
    def option(opt: schemas.DailyEventOptionSnapshot) -> DailyEventOption:
        return DailyEventOption(id=opt.id, label=opt.label, description=opt.description)

    return DailyEventInstance(
        type=snapshot.type,
        title=snapshot.title,
        description=snapshot.description,
        option_a=option(snapshot.option_a),
        option_b=option(snapshot.option_b),
        target_fighter_id=snapshot.target_fighter_id,
    )


def _resolution(resolution: DailyEventResolution | None) -> schemas.DailyEventResolutionSnapshot | None:
    if resolution is None:
        return None
    return schemas.DailyEventResolutionSnapshot(
        type=resolution.type,
        selected_option=resolution.selected_option,
        money_delta=resolution.money_delta,
        summary=resolution.summary,
    )
