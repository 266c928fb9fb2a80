"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable

from rich import box
from rich.console import RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, Suit
from ..scoreboard import GameSummary, MatchHistory
from ..state import GameState
from .views import StateSummaryView

_SUIT_COLORS = {
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "magenta",
    Suit.CLUBS: "green",
    Suit.SPADES: "cyan",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    color = _SUIT_COLORS.get(card.suit, "white")
    return f"[{color}]{card.label()}[/{color}]"


def render_state(
    state: GameState,
    *,
    reveal_players: Iterable[int] | None = None,
    title: str = "Current Game Status",
) -> RenderableType:
    """Return a Rich panel describing the current table state."""

    view = StateSummaryView(
        state=state,
        reveal_players=set(reveal_players or set()),
        card_formatter=format_card,
    )
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")


def render_final_scores(summary: GameSummary, *, title: str | None = None) -> Table:
    """Return a Rich table describing the outcome of a game."""

    table = Table(title=title or f"Game {summary.game_number}: Final Scores", box=box.SIMPLE_HEAVY)
    table.add_column("Player", justify="center")
    table.add_column("Role", justify="center")
    table.add_column("Books", justify="right")
    table.add_column("Ranks", justify="left")
    table.add_column("Result", justify="center")

    for entry in summary.scores:
        label = entry.name
        result = "Loss"
        if entry.won:
            label = f"[bold green]{label}[/bold green]"
            result = "[bold green]Tie[/bold green]" if summary.is_tie else "[bold green]Win[/bold green]"
        ranks = " ".join(rank.value for rank in entry.book_ranks) or "—"
        table.add_row(label, "🤖" if entry.is_bot else "👤", str(entry.books), ranks, result)

    if summary.truncated:
        table.caption = f"Stopped at the turn limit after {summary.turns} turns."
    return table


def render_match_summary(history: MatchHistory) -> Table:
    """Return the aggregated summary across every recorded game."""

    totals = history.totals()
    table = Table(title=f"Match Summary ({len(history.games)} games)", box=box.DOUBLE_EDGE)
    table.add_column("Player", justify="center")
    table.add_column("Wins", justify="right")
    table.add_column("Books", justify="right")

    best_wins = max((total.wins for total in totals), default=0)
    for total in totals:
        label = total.name
        wins = str(total.wins)
        if total.wins == best_wins and history.games:
            label = f"[bold blue]{label}[/bold blue]"
            wins = f"[bold blue]{wins}[/bold blue]"
        table.add_row(label, wins, str(total.books))
    return table
