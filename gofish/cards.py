"""Card abstractions and deck helpers for Go Fish."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Sequence


class Suit(str, Enum):
    """Enumeration of the four suits in a standard deck."""

    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    SPADES = "Spades"

    @property
    def icon(self) -> str:
        return _SUIT_ICONS[self]


_SUIT_ICONS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


class Rank(str, Enum):
    """Enumeration of the thirteen card ranks, lowest first."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


BOOK_SIZE = len(Suit)


class EmptyDeck(RuntimeError):
    """Raised when a card is popped from an empty deck."""


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical playing card."""

    rank: Rank
    suit: Suit

    def label(self) -> str:
        """Create a compact label suitable for CLI representations."""

        return f"{self.rank.value}{self.suit.icon}"

    def detailed_label(self) -> str:
        return f"{self.rank.value} of {self.suit.value} {self.suit.icon}"


def iter_full_deck() -> Iterable[Card]:
    """Yield all 52 cards of a fresh deck, one per rank and suit."""

    for suit in Suit:
        for rank in Rank:
            yield Card(rank=rank, suit=suit)


class Deck:
    """Ordered draw pile; cards are dealt and drawn from the end."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: list[Card] = list(cards)

    @classmethod
    def standard(cls) -> "Deck":
        return cls(iter_full_deck())

    def shuffle(self, rng: Any) -> None:
        """Shuffle in place using ``rng.shuffle``."""

        rng.shuffle(self._cards)

    def pop_one(self) -> Card:
        """Remove and return the last card of the deck."""

        if not self._cards:
            raise EmptyDeck("cannot draw from an empty deck")
        return self._cards.pop()

    def is_empty(self) -> bool:
        return not self._cards

    @property
    def cards(self) -> Sequence[Card]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(card.label() for card in cards)


def sort_cards(cards: Iterable[Card]) -> list[Card]:
    rank_order = {rank: idx for idx, rank in enumerate(Rank)}
    suit_order = {suit: idx for idx, suit in enumerate(Suit)}
    return sorted(cards, key=lambda c: (rank_order[c.rank], suit_order[c.suit]))
