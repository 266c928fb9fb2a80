"""Benchmark harness comparing belief-tracking bots with blind bots."""

from __future__ import annotations

import random
from dataclasses import dataclass

import numpy as np

from . import scoreboard
from .engine import GameEngine
from .state import GameConfig

__all__ = ["AgentBreakdown", "BenchmarkReport", "run_bot_games"]


@dataclass(frozen=True, slots=True)
class AgentBreakdown:
    """Aggregate statistics collected for one kind of bot across a benchmark."""

    seats: int
    wins: float
    mean_books: float
    win_rate: float


@dataclass(frozen=True, slots=True)
class BenchmarkReport:
    """Summary of a tracking vs. blind benchmark."""

    history: scoreboard.MatchHistory
    tracking: AgentBreakdown
    blind: AgentBreakdown
    truncated_games: int


def _breakdown(books: np.ndarray, wins: np.ndarray, mask: np.ndarray) -> AgentBreakdown:
    seats = int(mask.sum())
    if seats == 0:
        return AgentBreakdown(seats=0, wins=0.0, mean_books=0.0, win_rate=0.0)
    return AgentBreakdown(
        seats=seats,
        wins=float(wins[mask].sum()),
        mean_books=float(books[mask].mean()),
        win_rate=float(wins[mask].mean()),
    )


def run_bot_games(
    games: int,
    *,
    num_players: int = 4,
    seed: int = 123,
    hand_size: int = 13,
) -> BenchmarkReport:
    """Play ``games`` bot-only games and compare the two bot kinds.

    Seats alternate between tracking and blind bots, and the pattern flips
    every game so neither kind keeps the opening seat. A tied win is split
    between the tied players.
    """

    if games <= 0:
        raise ValueError("games must be positive")

    rng = random.Random(seed)
    config = GameConfig(num_players=num_players, humans=0, hand_size=hand_size)
    history = scoreboard.MatchHistory(players=config.names())

    books = np.zeros((games, num_players), dtype=np.float64)
    wins = np.zeros((games, num_players), dtype=np.float64)
    tracking = np.zeros((games, num_players), dtype=bool)
    truncated = 0

    for game_index in range(games):
        pattern = [(seat + game_index) % 2 == 0 for seat in range(num_players)]
        engine = GameEngine.setup(config, rng, track_exchanges=pattern, game_number=game_index + 1)
        summary = engine.play()
        history.record(summary)
        truncated += int(summary.truncated)

        winners = summary.winners
        for score in summary.scores:
            books[game_index, score.player_index] = score.books
            if score.won:
                wins[game_index, score.player_index] = 1.0 / len(winners)
        tracking[game_index] = pattern

    return BenchmarkReport(
        history=history,
        tracking=_breakdown(books, wins, tracking),
        blind=_breakdown(books, wins, ~tracking),
        truncated_games=truncated,
    )
