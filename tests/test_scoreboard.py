from __future__ import annotations

import pytest

from gofish import scoreboard
from gofish.rules import PlayerFinalScore


def _score(player_index: int, name: str, books: int, won: bool) -> PlayerFinalScore:
    return PlayerFinalScore(
        player_index=player_index,
        name=name,
        is_bot=player_index > 0,
        books=books,
        book_ranks=(),
        cards_left=0,
        won=won,
    )


def test_match_history_accumulates_totals() -> None:
    history = scoreboard.MatchHistory(players=["You", "Emily"])
    history.record(
        scoreboard.GameSummary(
            game_number=1,
            scores=[_score(0, "You", 8, True), _score(1, "Emily", 5, False)],
            turns=40,
        )
    )
    history.record(
        scoreboard.GameSummary(
            game_number=2,
            scores=[_score(0, "You", 6, True), _score(1, "Emily", 6, True)],
            turns=35,
        )
    )

    totals = history.totals()
    assert len(history.games) == 2
    assert [total.wins for total in totals] == [2, 1]
    assert [total.books for total in totals] == [14, 11]
    assert history.games[1].is_tie
    assert history.games[1].winners == ("You", "Emily")
    assert history.games[0].best_score == 8


def test_match_history_validates_roster() -> None:
    history = scoreboard.MatchHistory(players=["You", "Emily"])
    summary = scoreboard.GameSummary(
        game_number=1,
        scores=[_score(0, "You", 13, True)],
        turns=10,
    )
    with pytest.raises(ValueError):
        history.record(summary)


def test_match_history_needs_players() -> None:
    with pytest.raises(ValueError):
        scoreboard.MatchHistory(players=[])
