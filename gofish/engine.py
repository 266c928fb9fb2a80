"""Turn engine driving a Go Fish game from the deal to the final scores."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Sequence

from .cards import Deck, Rank, Suit, format_cards
from .logging_utils import get_logger
from .policy import BotPolicy, DecisionPolicy, HumanPolicy, Selector
from .rules import (
    DrawResult,
    RequestResult,
    advance_turn,
    draw_from_deck,
    final_scores,
    has_legal_request,
    is_game_over,
    resolve_request,
)
from .scoreboard import GameSummary
from .state import Book, GameConfig, GameState, PlayerState, deal_new_game

__all__ = ["EventKind", "GameEvent", "Pacing", "GameEngine"]

logger = get_logger(__name__)


class EventKind(str, Enum):
    """Kinds of narration emitted while a game is played."""

    DEAL = "deal"
    STATUS = "status"
    TURN = "turn"
    ASK = "ask"
    REASONING = "reasoning"
    GIVE = "give"
    MISS = "miss"
    DRAW = "draw"
    BOOK = "book"
    SKIP = "skip"
    CANCEL = "cancel"
    GAME_OVER = "game_over"


@dataclass(frozen=True, slots=True)
class GameEvent:
    kind: EventKind
    message: str
    player: str | None = None


Notifier = Callable[[GameEvent], None]


@dataclass(frozen=True, slots=True)
class Pacing:
    """Delays (seconds) inserted around bot activity for readability."""

    before_bot_turn: float = 2.0
    after_bot_turn: float = 3.0
    before_bot_ask: float = 0.8
    after_bot_success: float = 0.5

    def scaled(self, factor: float) -> "Pacing":
        return Pacing(
            before_bot_turn=self.before_bot_turn * factor,
            after_bot_turn=self.after_bot_turn * factor,
            before_bot_ask=self.before_bot_ask * factor,
            after_bot_success=self.after_bot_success * factor,
        )


def _ignore_event(event: GameEvent) -> None:
    return


def _no_pause(seconds: float) -> None:
    return


class GameEngine:
    """Owns a :class:`GameState` and plays it turn by turn.

    The engine never inspects which kind of policy sits in a seat beyond the
    ``is_bot`` flag used for narration, pacing and exchange broadcasts.
    """

    def __init__(
        self,
        state: GameState,
        policies: Sequence[DecisionPolicy],
        *,
        notify: Notifier | None = None,
        pause: Callable[[float], None] | None = None,
        pacing: Pacing = Pacing(),
        game_number: int = 1,
    ) -> None:
        if len(policies) != len(state.players):
            raise ValueError("every seat needs exactly one policy")
        self.state = state
        self.policies = list(policies)
        self.notify = notify or _ignore_event
        self.pause = pause or _no_pause
        self.pacing = pacing
        self.game_number = game_number
        self.history: list[RequestResult] = []
        self.truncated = False
        self._started = False
        self._finished = False

    @classmethod
    def setup(
        cls,
        config: GameConfig,
        rng: Any,
        *,
        selector: Selector | None = None,
        deck: Deck | None = None,
        track_exchanges: bool | Sequence[bool] = True,
        **kwargs: Any,
    ) -> "GameEngine":
        """Shuffle (unless ``deck`` is given), deal and seat the policies."""

        if config.humans and selector is None:
            raise ValueError("human seats require a selector")
        if deck is None:
            deck = Deck.standard()
            deck.shuffle(rng)

        state = deal_new_game(config, deck)
        if isinstance(track_exchanges, bool):
            tracking = [track_exchanges] * len(state.players)
        else:
            tracking = list(track_exchanges)

        policies: list[DecisionPolicy] = []
        for idx, player in enumerate(state.players):
            if player.is_bot:
                policies.append(BotPolicy(player.name, rng, track_exchanges=tracking[idx]))
            else:
                assert selector is not None
                policies.append(HumanPolicy(selector))
        return cls(state, policies, **kwargs)

    def _emit(self, kind: EventKind, message: str, player: str | None = None) -> None:
        self.notify(GameEvent(kind=kind, message=message, player=player))

    def is_over(self) -> bool:
        return self.truncated or is_game_over(self.state)

    def start(self) -> None:
        """Announce the deal; books completed while dealing are reported here."""

        if self._started:
            return
        self._started = True
        sizes = ", ".join(f"{p.name}: {p.hand_size}" for p in self.state.players)
        self._emit(EventKind.DEAL, f"Cards dealt ({sizes}). {len(self.state.deck)} left in the deck.")
        for player in self.state.players:
            for book in player.books:
                self._announce_book(player, book)
        self.emit_status()

    def emit_status(self) -> None:
        parts = [
            f"{p.name}: {p.hand_size} cards, {p.score} books" for p in self.state.players
        ]
        parts.append(f"deck: {len(self.state.deck)}")
        self._emit(EventKind.STATUS, " | ".join(parts))

    def step(self) -> bool:
        """Play the current player's turn; return ``False`` once play has stopped."""

        self.start()
        state = self.state
        if self.is_over():
            return False
        if state.turn_number >= state.config.max_turns:
            logger.warning("turn limit %d reached, stopping the game", state.config.max_turns)
            self.truncated = True
            return False

        self.take_turn(state.current_player_index)
        advance_turn(state)
        return not self.is_over()

    def play(self) -> GameSummary:
        """Play to completion and return the final summary."""

        self.start()
        while self.step():
            pass
        return self.finish()

    def finish(self) -> GameSummary:
        summary = self.summary()
        if not self._finished:
            self._finished = True
            if summary.is_tie:
                message = (
                    f"Game over! It's a tie between {', '.join(summary.winners)} "
                    f"with {summary.best_score} books each."
                )
            else:
                message = f"Game over! {summary.winners[0]} wins with {summary.best_score} books."
            logger.info("game %d finished after %d turns", self.game_number, summary.turns)
            self._emit(EventKind.GAME_OVER, message)
        return summary

    def summary(self) -> GameSummary:
        """Return the scores as they stand; safe to call at any point."""

        return GameSummary(
            game_number=self.game_number,
            scores=final_scores(self.state),
            turns=self.state.turn_number,
            truncated=self.truncated,
        )

    def take_turn(self, player_index: int) -> None:
        """Let ``player_index`` ask repeatedly until a request fails or stops."""

        state = self.state
        player = state.players[player_index]
        if player.hand_size == 0:
            return
        policy = self.policies[player_index]

        self._emit(EventKind.TURN, f"{player.name}'s turn", player.name)
        if policy.is_bot:
            self.pause(self.pacing.before_bot_turn)
        else:
            self.emit_status()

        continues = True
        while continues and player.hand_size > 0:
            if not has_legal_request(state, player_index):
                self._go_fish(player)
                break

            opponents = state.opponents_of(player_index)
            rank = policy.choose_rank(player, opponents)
            suit = policy.choose_suit(rank, player) if rank is not None else None
            target = (
                policy.choose_target(rank, suit, opponents)
                if rank is not None and suit is not None
                else None
            )
            if rank is None or suit is None or target is None:
                if not policy.is_bot:
                    self._emit(EventKind.CANCEL, f"{player.name} ends the turn.", player.name)
                break

            continues = self.ask(player_index, self._index_of(target), rank, suit)

        if policy.is_bot:
            self.pause(self.pacing.after_bot_turn)

    def ask(self, asker_index: int, target_index: int, rank: Rank, suit: Suit) -> bool:
        """Resolve one request, narrate it and return whether the turn continues."""

        state = self.state
        asker = state.players[asker_index]
        target = state.players[target_index]
        policy = self.policies[asker_index]
        card = f"{rank.value}{suit.icon}"

        self._emit(EventKind.ASK, f"{asker.name} asks {target.name} for {card}...", asker.name)
        if policy.is_bot:
            reasons = policy.explain(rank, suit, target, asker)
            if reasons:
                self._emit(EventKind.REASONING, " ".join(reasons), asker.name)
            self.pause(self.pacing.before_bot_ask)

        result = resolve_request(state, asker_index, target_index, rank, suit)
        self.history.append(result)
        logger.debug(
            "turn %d: %s asked %s for %s -> %s",
            state.turn_number,
            asker.name,
            target.name,
            card,
            "hit" if result.succeeded else "miss",
        )

        if result.succeeded:
            self._broadcast(asker_index, target_index, rank, suit)
            self._emit(EventKind.GIVE, f"{target.name} gives {asker.name} the {card}!", asker.name)
            for book in result.books:
                self._announce_book(asker, book)
            if policy.is_bot:
                self.pause(self.pacing.after_bot_success)
        else:
            self._emit(EventKind.MISS, f"{target.name} doesn't have the {card}.", asker.name)
            self._announce_draw(asker, result.draw)
        return result.turn_continues

    def _broadcast(self, asker_index: int, target_index: int, rank: Rank, suit: Suit) -> None:
        giver = self.state.players[target_index].name
        receiver = self.state.players[asker_index].name
        for idx, observer in enumerate(self.policies):
            if not observer.is_bot:
                continue
            if idx in (asker_index, target_index):
                observer.settle_exchange(giver, receiver, rank, suit)
            else:
                observer.observe_exchange(giver, receiver, rank, suit)

    def _go_fish(self, player: PlayerState) -> None:
        draw = draw_from_deck(self.state, player)
        if draw.card is None:
            self._emit(EventKind.SKIP, f"{player.name} has nothing to ask for. Turn skipped.", player.name)
            return
        self._emit(EventKind.SKIP, f"{player.name} has nothing to ask for and goes fishing.", player.name)
        self._announce_draw(player, draw)

    def _announce_draw(self, player: PlayerState, draw: DrawResult) -> None:
        if draw.card is None:
            return
        if player.is_bot:
            message = f"{player.name} draws a card from the deck."
        else:
            message = f"{player.name} draws {draw.card.label()} from the deck."
        self._emit(EventKind.DRAW, message, player.name)
        for book in draw.books:
            self._announce_book(player, book)

    def _announce_book(self, player: PlayerState, book: Book) -> None:
        self._emit(
            EventKind.BOOK,
            f"{player.name} completed a book of {book.rank.value}s ({format_cards(book.cards)})! "
            f"Score: {player.score}",
            player.name,
        )

    def _index_of(self, player: PlayerState) -> int:
        for idx, candidate in enumerate(self.state.players):
            if candidate is player:
                return idx
        raise ValueError(f"{player.name} is not seated in this game")
