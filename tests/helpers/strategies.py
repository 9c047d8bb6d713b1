from __future__ import annotations

from hypothesis import strategies as st

from ludus_sim.domain.types import Fighter, Stats

stat_values = st.integers(min_value=1, max_value=10)
seeds = st.integers(min_value=0, max_value=2**31 - 2)


def stats_strategy() -> st.SearchStrategy[Stats]:
    return st.builds(Stats, strength=stat_values, agility=stat_values, stamina=stat_values)


def fighter_strategy(name: str = "Fighter", fighter_id: str = "fighter") -> st.SearchStrategy[Fighter]:
    return st.builds(
        lambda stats, morale, fatigue: Fighter.create(name, stats, fighter_id=fighter_id)
        .with_morale(morale)
        .with_fatigue(fatigue),
        stats=stats_strategy(),
        morale=st.integers(min_value=0, max_value=100),
        fatigue=st.integers(min_value=0, max_value=100),
    )


def name_parts_strategy(max_size: int = 6) -> st.SearchStrategy[list[str]]:
    return st.lists(
        st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=8),
        min_size=1,
        max_size=max_size,
        unique=True,
    )
