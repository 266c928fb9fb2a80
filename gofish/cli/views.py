"""Composable view primitives for the Go Fish CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Set

from rich import box
from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from ..cards import Card
from ..state import GameState


@dataclass(slots=True)
class StateSummaryView:
    """Renderable summarising the current table state."""

    state: GameState
    reveal_players: Set[int]
    card_formatter: Callable[[Card], str]

    def _hand_markup(self, cards: list[Card], visible: bool) -> str:
        if not visible:
            return f"{len(cards)} cards"
        if not cards:
            return "—"
        return " ".join(self.card_formatter(card) for card in cards)

    def render(self) -> RenderableType:
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Player", justify="left", style="bold")
        table.add_column("Role", justify="left")
        table.add_column("Cards", justify="right")
        table.add_column("Books", justify="left")
        table.add_column("Hand", justify="left")

        for idx, player in enumerate(self.state.players):
            name = player.name
            if idx == self.state.current_player_index:
                name = f"[bold yellow]{name}[/bold yellow]"
            role = "🤖 Bot" if player.is_bot else "👤 Human"
            books = " ".join(book.rank.value for book in player.books) or "—"
            books = f"{player.score} 📚 {books}" if player.score else books
            hand = self._hand_markup(player.sorted_hand(), idx in self.reveal_players)
            table.add_row(name, role, str(player.hand_size), books, hand)

        deck_line = Text(f"Cards left in deck: {len(self.state.deck)}", style="cyan")
        return Group(table, deck_line)
