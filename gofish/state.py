"""Core game state data structures for Go Fish."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .cards import BOOK_SIZE, Card, Deck, Rank, Suit, sort_cards

DEFAULT_BOT_NAMES = ("Emily", "Sarah", "Jessica", "Olivia", "Grace", "Chloe", "Maya")


@dataclass(slots=True)
class GameConfig:
    """Runtime configuration for a single game.

    Human seats come first; every remaining seat is played by a bot.
    """

    num_players: int = 4
    humans: int = 1
    hand_size: int = 13
    max_turns: int = 2000
    player_names: Sequence[str] | None = None

    def __post_init__(self) -> None:
        if self.num_players < 2:
            raise ValueError("a game needs at least two players")
        if not 0 <= self.humans <= self.num_players:
            raise ValueError("humans must be between 0 and num_players")
        if self.hand_size < 1:
            raise ValueError("hand_size must be positive")
        if self.max_turns < 1:
            raise ValueError("max_turns must be positive")
        if self.player_names is not None:
            names = tuple(self.player_names)
            if len(names) != self.num_players:
                raise ValueError("player_names must name every seat")
            if len(set(names)) != len(names):
                raise ValueError("player names must be unique")
            self.player_names = names

    def names(self) -> tuple[str, ...]:
        """Return the seat names in turn order."""

        if self.player_names is not None:
            return tuple(self.player_names)
        if self.humans == 1:
            human_names = ["You"]
        else:
            human_names = [f"Player {idx + 1}" for idx in range(self.humans)]
        bot_count = self.num_players - self.humans
        bot_names = [
            DEFAULT_BOT_NAMES[idx] if idx < len(DEFAULT_BOT_NAMES) else f"Bot {idx + 1}"
            for idx in range(bot_count)
        ]
        return tuple(human_names + bot_names)

    def is_bot(self, player_index: int) -> bool:
        return player_index >= self.humans


@dataclass(frozen=True, slots=True)
class Book:
    """Four cards of one rank, removed from a hand as a scored unit."""

    rank: Rank
    cards: tuple[Card, ...]

    def __post_init__(self) -> None:
        if len(self.cards) != BOOK_SIZE or any(card.rank != self.rank for card in self.cards):
            raise ValueError(f"a book needs exactly {BOOK_SIZE} cards of rank {self.rank.value}")


@dataclass(slots=True)
class PlayerState:
    """Hand and book tracker for one seated player."""

    name: str
    is_bot: bool = False
    hand: list[Card] = field(default_factory=list)
    books: list[Book] = field(default_factory=list)

    @property
    def score(self) -> int:
        return len(self.books)

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def add_card(self, card: Card) -> list[Book]:
        """Add ``card`` to the hand and return any books it completed."""

        self.hand.append(card)
        return self._collect_books()

    def add_cards(self, cards: Iterable[Card]) -> list[Book]:
        self.hand.extend(cards)
        return self._collect_books()

    def has_rank(self, rank: Rank) -> bool:
        return any(card.rank == rank for card in self.hand)

    def has_rank_and_suit(self, rank: Rank, suit: Suit) -> bool:
        return Card(rank, suit) in self.hand

    def take_all_of_rank(self, rank: Rank) -> list[Card]:
        taken = [card for card in self.hand if card.rank == rank]
        self.hand = [card for card in self.hand if card.rank != rank]
        return taken

    def take_of_rank_and_suit(self, rank: Rank, suit: Suit) -> list[Card]:
        """Remove and return the exact card, or an empty list when not held."""

        wanted = Card(rank, suit)
        taken = [card for card in self.hand if card == wanted]
        self.hand = [card for card in self.hand if card != wanted]
        return taken

    def ranks(self) -> list[Rank]:
        """Return the distinct ranks held, in first-seen order."""

        return list(dict.fromkeys(card.rank for card in self.hand))

    def suits_for(self, rank: Rank) -> list[Suit]:
        return [card.suit for card in self.hand if card.rank == rank]

    def sorted_hand(self) -> list[Card]:
        return sort_cards(self.hand)

    def _collect_books(self) -> list[Book]:
        by_rank: dict[Rank, list[Card]] = {}
        for card in self.hand:
            by_rank.setdefault(card.rank, []).append(card)

        completed = [
            Book(rank=rank, cards=tuple(cards))
            for rank, cards in by_rank.items()
            if len(cards) == BOOK_SIZE
        ]
        if completed:
            finished = {book.rank for book in completed}
            self.hand = [card for card in self.hand if card.rank not in finished]
            self.books.extend(completed)
        return completed


@dataclass(slots=True)
class GameState:
    """Mutable table state owned by the turn engine."""

    config: GameConfig
    deck: Deck
    players: list[PlayerState]
    current_player_index: int = 0
    turn_number: int = 0

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    def player_named(self, name: str) -> PlayerState:
        for player in self.players:
            if player.name == name:
                return player
        raise KeyError(name)

    def opponents_of(self, player_index: int) -> list[PlayerState]:
        """Return the other players that still hold cards."""

        return [
            player
            for idx, player in enumerate(self.players)
            if idx != player_index and player.hand_size > 0
        ]

    def cards_in_hands(self) -> int:
        return sum(player.hand_size for player in self.players)

    def cards_in_books(self) -> int:
        return sum(BOOK_SIZE * player.score for player in self.players)

    def total_cards(self) -> int:
        return len(self.deck) + self.cards_in_hands() + self.cards_in_books()


def new_players(config: GameConfig) -> list[PlayerState]:
    return [
        PlayerState(name=name, is_bot=config.is_bot(idx))
        for idx, name in enumerate(config.names())
    ]


def deal_new_game(config: GameConfig, deck: Deck) -> GameState:
    """Deal a fresh game round-robin and return the initialised state.

    Each round hands one card to every seat in turn; dealing stops after
    ``config.hand_size`` rounds or as soon as the deck runs out. Books
    completed while dealing are scored immediately.
    """

    players = new_players(config)
    for _ in range(config.hand_size):
        for player in players:
            if deck.is_empty():
                break
            player.add_card(deck.pop_one())
        if deck.is_empty():
            break

    return GameState(config=config, deck=deck, players=players)
