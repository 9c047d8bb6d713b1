"""Fight and tournament results."""

from __future__ import annotations

from dataclasses import dataclass

from ludus_sim.domain.events import FightLog
from ludus_sim.domain.types import Fighter


@dataclass(frozen=True)
class FightResult:
    winner: Fighter
    loser: Fighter
    log: FightLog


@dataclass(frozen=True)
class TournamentMatch:
    fighter1_id: str | None  # None = bye
    fighter2_id: str | None
    winner_id: str
    result: FightResult | None = None  # None for byes and walkovers

    @property
    def is_bye(self) -> bool:
        return self.fighter1_id is None or self.fighter2_id is None

    @property
    def loser_id(self) -> str | None:
        if self.is_bye:
            return None
        return self.fighter2_id if self.winner_id == self.fighter1_id else self.fighter1_id


@dataclass(frozen=True)
class TournamentRound:
    round_number: int
    matches: tuple[TournamentMatch, ...]


@dataclass(frozen=True)
class TournamentResult:
    rounds: tuple[TournamentRound, ...]
    participant_ids: tuple[str, ...]
    champion_id: str
    runner_up_id: str | None
    prize_pool: int
    champion_prize: int
    runner_up_prize: int

    @property
    def bracket_size(self) -> int:
        if not self.rounds:
            return 1
        return len(self.rounds[0].matches) * 2

    @property
    def bye_count(self) -> int:
        if not self.rounds:
            return 0
        return sum(1 for match in self.rounds[0].matches if match.is_bye)

    @property
    def total_prize(self) -> int:
        return self.champion_prize + self.runner_up_prize
