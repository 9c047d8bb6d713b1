from __future__ import annotations

import logging
from typing import Sequence

from ludus_sim.domain.errors import ValidationError
from ludus_sim.domain.reports import TournamentMatch, TournamentResult, TournamentRound
from ludus_sim.domain.types import Fighter
from ludus_sim.rules.ruleset import InjuryModel, TournamentModel
from ludus_sim.sim.rng import Rng
from ludus_sim.systems.combat import CombatResolver
from ludus_sim.systems.fight import run_fight

logger = logging.getLogger(__name__)


def next_power_of_two(n: int) -> int:
    power = 1
    while power < n:
        power *= 2
    return power


def shuffle_ids(ids: Sequence[str], rng: Rng) -> list[str]:
    items = list(ids)
    for i in range(len(items) - 1, 0, -1):
        j = rng.next_below(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def seed_bracket(participant_ids: Sequence[str], rng: Rng) -> list[str | None]:
    """Round-1 slots: real pairs fill from the left, byes take the second slot of the last pairs."""
    bracket_size = next_power_of_two(len(participant_ids))
    shuffled = shuffle_ids(participant_ids, rng)
    bye_count = bracket_size - len(shuffled)
    real_pairs = bracket_size // 2 - bye_count

    slots: list[str | None] = []
    it = iter(shuffled)
    for _ in range(real_pairs):
        slots.extend((next(it), next(it)))
    for _ in range(bye_count):
        slots.extend((next(it), None))
    return slots


def _validate_participants(
    pool: dict[str, Fighter],
    participant_ids: Sequence[str],
    model: TournamentModel,
) -> None:
    if len(participant_ids) < model.min_participants:
        raise ValidationError(
            f"At least {model.min_participants} participants required, got {len(participant_ids)}"
        )
    if len(set(participant_ids)) != len(participant_ids):
        raise ValidationError("Tournament participants must be distinct")
    for fighter_id in participant_ids:
        fighter = pool.get(fighter_id)
        if fighter is None:
            raise ValidationError(f"Participant {fighter_id} not found")
        if not fighter.can_fight:
            raise ValidationError(f"Participant {fighter.name} cannot fight")


def _resolve_match(
    slot1: str | None,
    slot2: str | None,
    pool: dict[str, Fighter],
    rng: Rng,
    resolver: CombatResolver,
    injury_model: InjuryModel,
) -> TournamentMatch:
    if slot1 is None and slot2 is not None:
        return TournamentMatch(None, slot2, slot2)
    if slot2 is None and slot1 is not None:
        return TournamentMatch(slot1, None, slot1)
    if slot1 is None or slot2 is None:
        raise ValidationError("A bracket pair cannot be empty on both sides")

    first = pool[slot1]
    second = pool[slot2]
    if not first.can_fight and not second.can_fight:
        return TournamentMatch(slot1, slot2, slot1)
    if not first.can_fight:
        return TournamentMatch(slot1, slot2, slot2)
    if not second.can_fight:
        return TournamentMatch(slot1, slot2, slot1)

    result = run_fight(first, second, rng, resolver, injury_model)
    pool[result.winner.id] = result.winner
    pool[result.loser.id] = result.loser
    return TournamentMatch(slot1, slot2, result.winner.id, result)


def run_tournament(
    fighters: Sequence[Fighter],
    participant_ids: Sequence[str],
    prize_pool: int,
    rng: Rng,
    model: TournamentModel,
    resolver: CombatResolver | None = None,
    injury_model: InjuryModel | None = None,
) -> tuple[tuple[Fighter, ...], TournamentResult]:
    """Single-elimination bracket over the given participants.

    Returns the full fighter list (input order) with fight damage, injuries
    and condition changes carried through, plus the bracket result.
    """
    model.validate()
    if prize_pool < 0:
        raise ValidationError("prize_pool must be >= 0")
    resolver = resolver or CombatResolver()
    injury_model = injury_model or InjuryModel.default()
    injury_model.validate()

    pool = {fighter.id: fighter for fighter in fighters}
    _validate_participants(pool, participant_ids, model)

    slots = seed_bracket(participant_ids, rng)
    rounds: list[TournamentRound] = []
    round_number = 0
    while len(slots) > 1:
        round_number += 1
        matches = []
        for i in range(0, len(slots), 2):
            matches.append(_resolve_match(slots[i], slots[i + 1], pool, rng, resolver, injury_model))
        rounds.append(TournamentRound(round_number, tuple(matches)))
        slots = [match.winner_id for match in matches]

    final = rounds[-1].matches[0]
    champion_id = final.winner_id

    runner_up_id = None
    if final.fighter1_id is not None and final.fighter2_id is not None:
        runner_up_id = final.fighter2_id if final.winner_id == final.fighter1_id else final.fighter1_id

    champion_prize = int(prize_pool * model.champion_prize_share)
    runner_up_prize = int(prize_pool * model.runner_up_prize_share) if runner_up_id is not None else 0

    result = TournamentResult(
        rounds=tuple(rounds),
        participant_ids=tuple(participant_ids),
        champion_id=champion_id,
        runner_up_id=runner_up_id,
        prize_pool=prize_pool,
        champion_prize=champion_prize,
        runner_up_prize=runner_up_prize,
    )
    logger.info("Tournament champion %s (%d rounds, prize %d)", pool[champion_id].name, len(rounds), champion_prize)
    return tuple(pool[fighter.id] for fighter in fighters), result
