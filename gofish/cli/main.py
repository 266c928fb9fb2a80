"""Typer entry-point wiring for the Go Fish CLI."""

from __future__ import annotations

import random
import sys
import termios
import time
import tty
from typing import Callable, Sequence, TypeVar

import typer
from rich import box
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from ..benchmark import run_bot_games
from ..engine import EventKind, GameEngine, GameEvent, Pacing
from ..logging_utils import LOG_LEVEL, setup_logging
from ..scoreboard import MatchHistory
from ..state import GameConfig, GameState
from .render import render_final_scores, render_match_summary, render_state

T = TypeVar("T")

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

RULES = (
    "Collect books: all four suits of one rank.\n"
    "Ask another player for one exact card. If they have it, it is yours and you ask again.\n"
    "If they don't, you draw from the deck and your turn ends.\n"
    "Most books when the cards run out wins."
)

_EVENT_STYLES: dict[EventKind, tuple[str, str]] = {
    EventKind.DEAL: ("🎴 ", "bold"),
    EventKind.TURN: ("🎲 ", "bold yellow"),
    EventKind.ASK: ("❓ ", "cyan"),
    EventKind.REASONING: ("   💭 ", "dim italic"),
    EventKind.GIVE: ("✅ ", "green"),
    EventKind.MISS: ("❌ ", "red"),
    EventKind.DRAW: ("🎴 ", ""),
    EventKind.BOOK: ("🎉 ", "bold magenta"),
    EventKind.SKIP: ("⏭  ", "yellow"),
    EventKind.CANCEL: ("🛑 ", "yellow"),
    EventKind.GAME_OVER: ("🏁 ", "bold green"),
}


class ConsoleNotifier:
    """Print engine events; status snapshots are rendered as a table."""

    def __init__(self, output: Console, *, reveal_all: bool = False) -> None:
        self.output = output
        self.reveal_all = reveal_all
        self.state: GameState | None = None

    def attach(self, state: GameState) -> None:
        self.state = state

    def _reveal(self) -> list[int]:
        if self.state is None:
            return []
        return [
            idx
            for idx, player in enumerate(self.state.players)
            if self.reveal_all or not player.is_bot
        ]

    def __call__(self, event: GameEvent) -> None:
        if event.kind is EventKind.STATUS:
            if self.state is not None:
                self.output.print(render_state(self.state, reveal_players=self._reveal()))
            else:
                self.output.print(Text(event.message, style="cyan"))
            return
        if event.kind is EventKind.TURN:
            self.output.rule(style="dim")
        prefix, style = _EVENT_STYLES.get(event.kind, ("", ""))
        self.output.print(Text(prefix + event.message, style=style))


def _read_key() -> str:
    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch == "\x1b":
            ch += sys.stdin.read(2)
        return ch
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def _interactive_select(
    entries: Sequence[str],
    update_fn: Callable[[int], None],
    *,
    initial_index: int = 0,
) -> int | None:
    if not entries:
        raise ValueError("interactive selection requires at least one entry")
    index = initial_index % len(entries)
    while True:
        update_fn(index)
        key = _read_key()
        if key in {"\r", "\n"}:
            return index
        if key == "\x03":  # Ctrl+C
            raise KeyboardInterrupt
        if key in {"q", "Q", "\x04"}:  # q or Ctrl+D cancels the choice
            return None
        if key in {"\x1b[A", "k", "w"}:
            index = (index - 1) % len(entries)
            continue
        if key in {"\x1b[B", "j", "s"}:
            index = (index + 1) % len(entries)
            continue
        if key.isdigit() and key != "0":
            value = int(key) - 1
            if 0 <= value < len(entries):
                return value
        # ignore all other keys


class TerminalSelector:
    """Arrow-key menu on a TTY, numbered prompt otherwise."""

    def __init__(self, output: Console) -> None:
        self.output = output

    def _menu(self, label: str, entries: Sequence[str], selected: int) -> Panel:
        menu = Table.grid(expand=True)
        menu.add_column(justify="left")
        for idx, entry in enumerate(entries):
            display = f"{idx + 1}. {entry}"
            if idx == selected:
                menu.add_row(Text(f"➤ {display}", style="reverse"))
            else:
                menu.add_row(Text(f"  {display}"))
        return Panel(
            Group(Text(label), menu),
            title="Your move",
            subtitle="↑/↓ + Enter, q to end turn",
            border_style="yellow",
            box=box.ROUNDED,
        )

    def select_one(self, label: str, choices: Sequence[tuple[str, T]]) -> T | None:
        if not choices:
            return None
        entries = [text for text, _ in choices]
        if not sys.stdin.isatty():
            return self._prompt_select(label, choices)

        with Live(
            self._menu(label, entries, 0), console=self.output, auto_refresh=False, transient=True
        ) as live:
            index = _interactive_select(
                entries,
                lambda idx: live.update(self._menu(label, entries, idx), refresh=True),
            )
        if index is None:
            return None
        self.output.print(Text(f"➤ {entries[index]}", style="bold"))
        return choices[index][1]

    def _prompt_select(self, label: str, choices: Sequence[tuple[str, T]]) -> T | None:
        self.output.print(label)
        for idx, (text, _) in enumerate(choices, start=1):
            self.output.print(f"  [bold]{idx}[/bold] {text}")
        options = [str(idx) for idx in range(1, len(choices) + 1)] + ["q"]
        try:
            answer = Prompt.ask("Choose", choices=options, console=self.output)
        except EOFError:
            return None
        if answer == "q":
            return None
        return choices[int(answer) - 1][1]


def _ask_play_again() -> bool:
    try:
        return Confirm.ask("🔄 Would you like to play again?", console=console, default=False)
    except EOFError:
        return False


@app.command()
def play(
    players: int = typer.Option(4, min=2, max=7, help="Number of seated players."),
    humans: int = typer.Option(1, min=0, help="Human-controlled seats starting from the first seat."),
    hand_size: int = typer.Option(13, min=1, help="Cards dealt to each player."),
    seed: int | None = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    delay: float = typer.Option(1.0, min=0.0, help="Scale factor for pauses around bot turns (0 disables)."),
    reveal: bool = typer.Option(False, "--reveal", help="Show every player's hand in status tables."),
    log_level: str = typer.Option(LOG_LEVEL, help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
) -> None:
    """Play Go Fish against bots in the terminal."""

    if humans > players:
        raise typer.BadParameter("Humans cannot exceed the total number of players.")
    setup_logging(log_level)

    rng = random.Random(seed)
    config = GameConfig(num_players=players, humans=humans, hand_size=hand_size)
    history = MatchHistory(players=config.names())
    selector = TerminalSelector(console)
    pacing = Pacing().scaled(delay)

    console.print(Panel(RULES, title="🎮 Card Collection Game 🃏", border_style="cyan"))
    console.print("[dim]Press Ctrl+C to quit at any time.[/dim]")

    engine: GameEngine | None = None
    in_progress = False
    try:
        while True:
            notifier = ConsoleNotifier(console, reveal_all=reveal)
            engine = GameEngine.setup(
                config,
                rng,
                selector=selector,
                notify=notifier,
                pause=time.sleep,
                pacing=pacing,
                game_number=len(history.games) + 1,
            )
            notifier.attach(engine.state)
            in_progress = True
            summary = engine.play()
            in_progress = False
            history.record(summary)
            console.print(render_final_scores(summary))
            if not _ask_play_again():
                break
    except KeyboardInterrupt:
        console.print()
        if engine is not None and in_progress:
            console.print(render_final_scores(engine.summary(), title="Scores when the game was stopped"))

    if len(history.games) > 1:
        console.print(render_match_summary(history))
    console.print("👋 Thanks for playing! Goodbye!")


@app.command("benchmark")
def benchmark_cli(
    games: int = typer.Option(50, min=1, help="Number of bot-only games."),
    players: int = typer.Option(4, min=2, max=7, help="Number of seated bots."),
    seed: int = typer.Option(123, help="Random seed for the benchmark."),
    log_level: str = typer.Option(LOG_LEVEL, help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
) -> None:
    """Pit belief-tracking bots against bots that ignore other players' exchanges."""

    setup_logging(log_level)
    report = run_bot_games(games, num_players=players, seed=seed)

    table = Table(title="Tracking vs. Blind Bots", box=box.SIMPLE_HEAVY)
    table.add_column("Bot", justify="center")
    table.add_column("Seats", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Win rate", justify="right")
    table.add_column("Books / game", justify="right")

    for label, breakdown in (("Tracking", report.tracking), ("Blind", report.blind)):
        table.add_row(
            label,
            str(breakdown.seats),
            f"{breakdown.wins:.1f}",
            f"{breakdown.win_rate:.1%}",
            f"{breakdown.mean_books:.2f}",
        )

    console.print(table)
    console.print(f"[cyan]{len(report.history.games)} game(s) simulated.[/cyan]")
    if report.truncated_games:
        console.print(f"[yellow]{report.truncated_games} game(s) hit the turn limit.[/yellow]")


def main() -> None:
    """Entry-point for the ``gofish`` console script."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
