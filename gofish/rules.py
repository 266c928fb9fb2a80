"""Rule utilities for Go Fish."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .cards import Card, Rank, Suit
from .state import Book, GameState, PlayerState

__all__ = [
    "DrawResult",
    "RequestResult",
    "PlayerFinalScore",
    "candidate_ranks",
    "candidate_suits",
    "has_legal_request",
    "draw_from_deck",
    "resolve_request",
    "advance_turn",
    "is_game_over",
    "winners",
    "final_scores",
]


@dataclass(frozen=True, slots=True)
class DrawResult:
    """Card drawn from the deck (``None`` when it was empty) and books it completed."""

    card: Card | None = None
    books: tuple[Book, ...] = ()


@dataclass(frozen=True, slots=True)
class RequestResult:
    """Outcome of one player asking another for an exact card."""

    asker: str
    target: str
    rank: Rank
    suit: Suit
    received: tuple[Card, ...] = ()
    books: tuple[Book, ...] = ()
    draw: DrawResult = field(default_factory=DrawResult)

    @property
    def succeeded(self) -> bool:
        return bool(self.received)

    @property
    def turn_continues(self) -> bool:
        """A turn carries on exactly when the requested card was handed over."""

        return self.succeeded


@dataclass(frozen=True, slots=True)
class PlayerFinalScore:
    """Per-player result captured at the end of a game."""

    player_index: int
    name: str
    is_bot: bool
    books: int
    book_ranks: tuple[Rank, ...]
    cards_left: int
    won: bool


def candidate_ranks(player: PlayerState, opponents: Sequence[PlayerState]) -> list[Rank]:
    """Return ranks the player holds that some opponent's hand also contains.

    The filter looks at opponents' actual hands, not only at what was
    publicly observed.
    """

    opponent_ranks = {card.rank for opponent in opponents for card in opponent.hand}
    return [rank for rank in player.ranks() if rank in opponent_ranks]


def candidate_suits(rank: Rank, player: PlayerState) -> list[Suit]:
    held = set(player.suits_for(rank))
    return [suit for suit in Suit if suit not in held]


def has_legal_request(state: GameState, player_index: int) -> bool:
    player = state.players[player_index]
    opponents = state.opponents_of(player_index)
    return bool(opponents) and bool(candidate_ranks(player, opponents))


def draw_from_deck(state: GameState, player: PlayerState) -> DrawResult:
    if state.deck.is_empty():
        return DrawResult()
    card = state.deck.pop_one()
    books = player.add_card(card)
    return DrawResult(card=card, books=tuple(books))


def resolve_request(
    state: GameState,
    asker_index: int,
    target_index: int,
    rank: Rank,
    suit: Suit,
) -> RequestResult:
    """Resolve ``asker_index`` asking ``target_index`` for one exact card.

    When the target holds the card it changes hands and the turn continues.
    Otherwise the asker draws one card if the deck still has any and the turn
    ends, whatever was drawn.
    """

    asker = state.players[asker_index]
    target = state.players[target_index]

    received = target.take_of_rank_and_suit(rank, suit)
    if received:
        books = asker.add_cards(received)
        return RequestResult(
            asker=asker.name,
            target=target.name,
            rank=rank,
            suit=suit,
            received=tuple(received),
            books=tuple(books),
        )

    return RequestResult(
        asker=asker.name,
        target=target.name,
        rank=rank,
        suit=suit,
        draw=draw_from_deck(state, asker),
    )


def advance_turn(state: GameState) -> int:
    state.current_player_index = (state.current_player_index + 1) % len(state.players)
    state.turn_number += 1
    return state.current_player_index


def is_game_over(state: GameState) -> bool:
    """Return ``True`` once no further useful play is possible.

    Play stops when every hand is empty, or when the deck is exhausted and
    nobody holds more than one card: single leftovers can no longer be
    matched.
    """

    if state.cards_in_hands() == 0:
        return True
    return state.deck.is_empty() and all(player.hand_size <= 1 for player in state.players)


def winners(state: GameState) -> list[PlayerState]:
    """Return every player sharing the highest score."""

    best = max(player.score for player in state.players)
    return [player for player in state.players if player.score == best]


def final_scores(state: GameState) -> list[PlayerFinalScore]:
    winning = {player.name for player in winners(state)}
    return [
        PlayerFinalScore(
            player_index=idx,
            name=player.name,
            is_bot=player.is_bot,
            books=player.score,
            book_ranks=tuple(book.rank for book in player.books),
            cards_left=player.hand_size,
            won=player.name in winning,
        )
        for idx, player in enumerate(state.players)
    ]
