from __future__ import annotations

import logging
from typing import Sequence

from ludus_sim.domain.types import Fighter
from ludus_sim.rules.ruleset import EconomyConfig
from ludus_sim.systems.contracts import apply_balance, split_terminated, total_daily_wages

logger = logging.getLogger(__name__)


def daily_heal_amount(fighter: Fighter, economy: EconomyConfig) -> int:
    if not fighter.is_alive or fighter.health >= fighter.max_health:
        return 0
    return max(economy.min_daily_heal, int(fighter.max_health * economy.daily_heal_fraction))


def apply_daily_healing(fighter: Fighter, economy: EconomyConfig) -> Fighter:
    amount = daily_heal_amount(fighter, economy)
    if amount == 0:
        return fighter
    return fighter.restore_health(amount)


def settle_wages(
    fighters: Sequence[Fighter],
    money: int,
) -> tuple[tuple[Fighter, ...], int, tuple[Fighter, ...]]:
    """Charge wages, update overdue counters and release fighters past their overdue limit.

    Returns (retained fighters, new balance, released fighters).
    """
    balance = money - total_daily_wages(fighters)
    marked = apply_balance(fighters, balance)
    retained, released = split_terminated(marked)
    for fighter in released:
        logger.warning(
            "Releasing %s after %d days of unpaid wages", fighter.name, fighter.contract.overdue_days
        )
    return retained, balance, released
