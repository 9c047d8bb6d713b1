from __future__ import annotations

from typing import Sequence

from ludus_sim.domain.daily_events import (
    DailyEventInstance,
    DailyEventOption,
    DailyEventOptionId,
    DailyEventResolution,
)
from ludus_sim.domain.errors import ValidationError
from ludus_sim.domain.types import Fighter
from ludus_sim.rules.ruleset import DailyEventDef, DailyEventOptionDef, DailyEventsConfig
from ludus_sim.sim.rng import Rng


def _option_def(definition: DailyEventDef, option_id: DailyEventOptionId) -> DailyEventOptionDef:
    return definition.option_a if option_id == DailyEventOptionId.OPTION_A else definition.option_b


def build_instance(definition: DailyEventDef, target: Fighter | None = None) -> DailyEventInstance:
    target_name = target.name if target is not None else ""
    instance = DailyEventInstance(
        type=definition.type,
        title=definition.title,
        description=definition.description.format(target=target_name),
        option_a=DailyEventOption(
            DailyEventOptionId.OPTION_A, definition.option_a.label, definition.option_a.description
        ),
        option_b=DailyEventOption(
            DailyEventOptionId.OPTION_B, definition.option_b.label, definition.option_b.description
        ),
        target_fighter_id=target.id if target is not None else None,
    )
    instance.validate()
    return instance


def roll_event(fighters: Sequence[Fighter], rng: Rng, config: DailyEventsConfig) -> DailyEventInstance:
    """Pick today's event; targeted events pick a living fighter or fall back when nobody is alive."""
    alive = [f for f in fighters if f.is_alive]
    definition = config.events[rng.next_below(len(config.events))]
    if not definition.targeted:
        return build_instance(definition)
    if not alive:
        return build_instance(config.get(config.fallback))
    target = alive[rng.next_below(len(alive))]
    return build_instance(definition, target)


def apply_choice(
    fighters: Sequence[Fighter],
    money: int,
    event: DailyEventInstance,
    option_id: DailyEventOptionId,
    config: DailyEventsConfig,
) -> tuple[tuple[Fighter, ...], int, DailyEventResolution]:
    event.validate()
    event.get_option(option_id)
    definition = config.get(event.type)
    effect = _option_def(definition, option_id)

    target_name = ""
    if definition.targeted:
        if event.target_fighter_id is None:
            raise ValidationError(f"{event.type.value} event requires a target fighter")
        target = next((f for f in fighters if f.id == event.target_fighter_id), None)
        if target is None:
            raise ValidationError(f"Daily event target not found: {event.target_fighter_id}")
        if not target.is_alive:
            raise ValidationError("Daily event target must be alive")
        target_name = target.name

    updated = []
    for fighter in fighters:
        affected = fighter.is_alive and (not definition.targeted or fighter.id == event.target_fighter_id)
        if affected:
            fighter = fighter.with_morale(fighter.morale + effect.morale_delta).with_fatigue(
                fighter.fatigue + effect.fatigue_delta
            )
        updated.append(fighter)

    resolution = DailyEventResolution(
        type=event.type,
        selected_option=option_id,
        money_delta=effect.money_delta,
        summary=effect.summary.format(target=target_name),
    )
    return tuple(updated), money + effect.money_delta, resolution
