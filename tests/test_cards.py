from __future__ import annotations

import pytest

from gofish.cards import Card, Deck, EmptyDeck, Rank, Suit, format_cards, iter_full_deck, sort_cards


def test_full_deck_has_one_card_per_rank_and_suit() -> None:
    cards = list(iter_full_deck())

    assert len(cards) == 52
    assert len(set(cards)) == 52
    assert {card.rank for card in cards} == set(Rank)
    assert {card.suit for card in cards} == set(Suit)


def test_cards_compare_structurally() -> None:
    assert Card(Rank.KING, Suit.HEARTS) == Card(Rank.KING, Suit.HEARTS)
    assert Card(Rank.KING, Suit.HEARTS) != Card(Rank.KING, Suit.SPADES)
    assert len({Card(Rank.TWO, Suit.CLUBS), Card(Rank.TWO, Suit.CLUBS)}) == 1


def test_card_labels() -> None:
    card = Card(Rank.TEN, Suit.DIAMONDS)

    assert card.label() == "10♦"
    assert card.detailed_label() == "10 of Diamonds ♦"
    assert format_cards([card, Card(Rank.ACE, Suit.SPADES)]) == "10♦ A♠"


def test_pop_one_takes_from_the_end() -> None:
    first = Card(Rank.TWO, Suit.HEARTS)
    last = Card(Rank.ACE, Suit.CLUBS)
    deck = Deck([first, last])

    assert deck.pop_one() == last
    assert deck.pop_one() == first
    assert deck.is_empty()


def test_pop_one_on_empty_deck_raises() -> None:
    with pytest.raises(EmptyDeck):
        Deck().pop_one()


def test_shuffle_uses_injected_rng() -> None:
    class ReverseShuffle:
        def shuffle(self, seq: list[Card]) -> None:
            seq.reverse()

    deck = Deck.standard()
    original = list(deck.cards)

    deck.shuffle(ReverseShuffle())

    assert list(deck.cards) == list(reversed(original))
    assert len(deck) == 52


def test_sort_cards_orders_by_rank_then_suit() -> None:
    cards = [Card(Rank.ACE, Suit.HEARTS), Card(Rank.TWO, Suit.SPADES), Card(Rank.TWO, Suit.HEARTS)]

    assert sort_cards(cards) == [
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.TWO, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
    ]
