from __future__ import annotations

from itertools import groupby

from ludus_sim.domain.events import FightEvent, FightEventType, FightLog


def format_event(event: FightEvent) -> str:
    attacker = event.attacker_name
    defender = event.defender_name
    if event.type == FightEventType.MISS:
        return f"{attacker} misses {defender} ({event.value:.0%} to hit)"
    if event.type == FightEventType.HIT:
        return f"{attacker} strikes {defender} ({event.value:.0%} to hit)"
    if event.type == FightEventType.CRIT:
        return f"Critical blow! ({event.value:.0%} crit chance)"
    if event.type == FightEventType.DAMAGE_APPLIED:
        return f"{defender} takes {int(event.value)} damage"
    if event.type == FightEventType.KILL:
        return f"{attacker} fells {defender}"
    return f"{attacker} wins the fight"


def format_fight_log(log: FightLog) -> str:
    """Plain-text log, one block per round."""
    blocks = []
    for round_number, events in groupby(log.events, key=lambda e: e.round):
        lines = [f"Round {round_number}"]
        lines.extend(f"  {format_event(event)}" for event in events)
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def summarize(log: FightLog) -> dict:
    damage = {}
    for event in log.of_type(FightEventType.DAMAGE_APPLIED):
        damage[event.attacker_name] = damage.get(event.attacker_name, 0) + int(event.value)
    return {
        "rounds": log.rounds,
        "hits": len(log.of_type(FightEventType.HIT)),
        "misses": len(log.of_type(FightEventType.MISS)),
        "crits": len(log.of_type(FightEventType.CRIT)),
        "damage_by_attacker": damage,
    }
