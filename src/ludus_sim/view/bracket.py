from __future__ import annotations

from typing import Iterable

from ludus_sim.domain.reports import TournamentResult
from ludus_sim.domain.types import Fighter

BYE_LABEL = "(bye)"


def build_bracket_view(result: TournamentResult, fighters: Iterable[Fighter]) -> list[dict]:
    """Rows for rendering a bracket: one per match, in round order."""
    names = {f.id: f.name for f in fighters}

    def label(fighter_id: str | None) -> str:
        if fighter_id is None:
            return BYE_LABEL
        return names.get(fighter_id, fighter_id)

    rows = []
    for tournament_round in result.rounds:
        for index, match in enumerate(tournament_round.matches):
            rows.append(
                {
                    "round": tournament_round.round_number,
                    "match": index,
                    "slot1": label(match.fighter1_id),
                    "slot2": label(match.fighter2_id),
                    "winner": label(match.winner_id),
                    "is_bye": match.is_bye,
                    "walkover": not match.is_bye and match.result is None,
                    "event_count": len(match.result.log) if match.result else 0,
                }
            )
    return rows


def podium(result: TournamentResult, fighters: Iterable[Fighter]) -> dict:
    names = {f.id: f.name for f in fighters}
    return {
        "champion": names.get(result.champion_id, result.champion_id),
        "champion_prize": result.champion_prize,
        "runner_up": names.get(result.runner_up_id, result.runner_up_id) if result.runner_up_id else None,
        "runner_up_prize": result.runner_up_prize,
    }
