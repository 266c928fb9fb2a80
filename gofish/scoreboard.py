"""Helpers for tracking results across consecutive games."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .rules import PlayerFinalScore

__all__ = ["GameSummary", "PlayerMatchTotal", "MatchHistory"]


@dataclass(frozen=True, slots=True)
class GameSummary:
    """Summary captured when a game ends (or is aborted)."""

    game_number: int
    scores: Sequence[PlayerFinalScore]
    turns: int
    truncated: bool = False

    @property
    def winners(self) -> tuple[str, ...]:
        return tuple(score.name for score in self.scores if score.won)

    @property
    def best_score(self) -> int:
        return max((score.books for score in self.scores), default=0)

    @property
    def is_tie(self) -> bool:
        return len(self.winners) > 1


@dataclass(frozen=True, slots=True)
class PlayerMatchTotal:
    """Aggregate totals accumulated across all recorded games."""

    name: str
    wins: int
    books: int


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates game summaries for a session."""

    players: Sequence[str]
    games: list[GameSummary] = field(default_factory=list)
    _wins: dict[str, int] = field(init=False, repr=False)
    _books: dict[str, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.players = tuple(self.players)
        if not self.players:
            raise ValueError("a match needs at least one player")
        self._wins = {name: 0 for name in self.players}
        self._books = {name: 0 for name in self.players}

    def record(self, summary: GameSummary) -> None:
        """Record ``summary``; a tie counts as a win for every tied player."""

        names = [score.name for score in summary.scores]
        if sorted(names) != sorted(self.players):
            raise ValueError("summary players do not match the match roster")
        self.games.append(summary)
        for score in summary.scores:
            self._books[score.name] += score.books
            if score.won:
                self._wins[score.name] += 1

    def totals(self) -> list[PlayerMatchTotal]:
        return [
            PlayerMatchTotal(name=name, wins=self._wins[name], books=self._books[name])
            for name in self.players
        ]
