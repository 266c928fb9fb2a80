from __future__ import annotations

from collections import deque
from typing import Iterable, Sequence

from gofish.cards import Card, Deck, Rank, Suit
from gofish.policy import DecisionPolicy
from gofish.state import GameConfig, GameState, PlayerState


class FirstChoice:
    """Deterministic random source: always the first option, never shuffles."""

    def choice(self, seq: Sequence[object]) -> object:
        return seq[0]

    def shuffle(self, seq: list[object]) -> None:
        return None


class ScriptedPolicy(DecisionPolicy):
    """Human-like seat that replays a fixed list of asks, then stops."""

    def __init__(self, asks: Iterable[tuple[Rank, Suit, str]]) -> None:
        self.asks = deque(asks)
        self.current: tuple[Rank, Suit, str] | None = None

    def choose_rank(self, player, opponents):
        if not self.asks:
            return None
        self.current = self.asks.popleft()
        return self.current[0]

    def choose_suit(self, rank, player):
        assert self.current is not None
        return self.current[1]

    def choose_target(self, rank, suit, opponents):
        assert self.current is not None
        for opponent in opponents:
            if opponent.name == self.current[2]:
                return opponent
        return None


def c(code: str) -> Card:
    """Build a card from a short code such as ``"QS"`` or ``"10H"``."""

    suits = {suit.value[0]: suit for suit in Suit}
    return Card(Rank(code[:-1]), suits[code[-1]])


def make_state(
    hands: dict[str, list[str]],
    deck: Sequence[str] = (),
    *,
    bots: Sequence[str] = (),
) -> GameState:
    names = list(hands)
    config = GameConfig(num_players=len(names), humans=0, player_names=names)
    players = [
        PlayerState(name=name, is_bot=name in bots, hand=[c(code) for code in codes])
        for name, codes in hands.items()
    ]
    return GameState(config=config, deck=Deck(c(code) for code in deck), players=players)
