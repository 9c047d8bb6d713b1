from __future__ import annotations

import logging
from dataclasses import replace

from ludus_sim.domain.errors import ValidationError
from ludus_sim.domain.types import Fighter
from ludus_sim.rules.ruleset import Ruleset
from ludus_sim.sim.rng import Rng
from ludus_sim.sim.state import LudusState, prune_tournament_result
from ludus_sim.systems import condition, contracts, daily_events, training, upkeep

logger = logging.getLogger(__name__)


class DayAdvanceError(ValidationError):
    pass


def _tick_fighter(fighter: Fighter, rng: Rng, rules: Ruleset) -> Fighter:
    if not fighter.is_alive:
        return fighter
    fighter = fighter.tick_recovery()
    fighter = upkeep.apply_daily_healing(fighter, rules.economy)
    fighter = condition.apply_daily_tick(fighter, rules.condition)
    fighter = training.apply_daily_training(fighter, rng, rules.training, rules.condition)
    return contracts.tick_contract(fighter)


def advance_day(state: LudusState) -> LudusState:
    if state.pending_daily_event is not None:
        raise DayAdvanceError("Resolve the pending daily event before advancing the day")

    rules = state.rules
    rng = state.create_rng()

    fighters = tuple(_tick_fighter(f, rng, rules) for f in state.fighters)
    fighters, money, released = upkeep.settle_wages(fighters, state.money)

    active_id = state.active_fighter_id
    if active_id is not None and all(f.id != active_id for f in fighters):
        active_id = None

    event = daily_events.roll_event(fighters, rng, rules.daily_events)
    seed = rng.next_seed()
    logger.debug(
        "Day %d -> %d: money %d -> %d, released %d, event %s",
        state.day,
        state.day + 1,
        state.money,
        money,
        len(released),
        event.type.value,
    )
    return replace(
        state,
        fighters=fighters,
        active_fighter_id=active_id,
        day=state.day + 1,
        money=money,
        seed=seed,
        pending_daily_event=event,
        last_daily_event_resolution=None,
        last_tournament_result=prune_tournament_result(state.last_tournament_result, fighters),
    )
