from __future__ import annotations

from typing import Sequence

from ludus_sim.domain.types import Fighter


def tick_contract(fighter: Fighter) -> Fighter:
    return fighter.tick_contract_day().renew_contract_if_needed()


def total_daily_wages(fighters: Sequence[Fighter]) -> int:
    return sum(f.contract.terms.daily_wage for f in fighters if f.is_alive)


def apply_balance(fighters: Sequence[Fighter], balance: int) -> tuple[Fighter, ...]:
    """Negative balance marks an overdue day on every living fighter; otherwise overdue is cleared."""
    overdue = balance < 0
    updated = []
    for fighter in fighters:
        if fighter.is_alive:
            fighter = fighter.mark_contract_overdue() if overdue else fighter.clear_contract_overdue()
        updated.append(fighter)
    return tuple(updated)


def split_terminated(fighters: Sequence[Fighter]) -> tuple[tuple[Fighter, ...], tuple[Fighter, ...]]:
    retained = tuple(f for f in fighters if not (f.is_alive and f.contract.is_overdue_limit_reached))
    released = tuple(f for f in fighters if f.is_alive and f.contract.is_overdue_limit_reached)
    return retained, released
