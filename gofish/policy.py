"""Decision policies for bots and human-controlled seats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, Sequence, TypeVar

from .belief import BeliefModel
from .cards import Rank, Suit, format_cards
from .logging_utils import get_logger
from .rules import candidate_ranks, candidate_suits
from .state import PlayerState

__all__ = ["DecisionPolicy", "BotPolicy", "HumanPolicy", "Selector"]

logger = get_logger(__name__)

T = TypeVar("T")


class Selector(Protocol):
    """Interactive chooser used by human seats."""

    def select_one(self, label: str, choices: Sequence[tuple[str, T]]) -> T | None:
        """Return the chosen value, or ``None`` when the operator cancels."""
        ...


class DecisionPolicy(ABC):
    """Contract shared by every seat controller.

    A ``None`` result from any ``choose_*`` method means no choice was made.
    """

    is_bot: bool = False

    @abstractmethod
    def choose_rank(
        self, player: PlayerState, opponents: Sequence[PlayerState] | None
    ) -> Rank | None:
        ...

    @abstractmethod
    def choose_suit(self, rank: Rank, player: PlayerState) -> Suit | None:
        ...

    @abstractmethod
    def choose_target(
        self, rank: Rank, suit: Suit, opponents: Sequence[PlayerState]
    ) -> PlayerState | None:
        ...

    def observe_exchange(self, giver: str, receiver: str, rank: Rank, suit: Suit) -> None:
        """Hook for tracking exchanges between other players."""
        return

    def settle_exchange(self, giver: str, receiver: str, rank: Rank, suit: Suit) -> None:
        """Hook for exchanges this seat gave or received."""
        return

    def explain(
        self, rank: Rank, suit: Suit, target: PlayerState, player: PlayerState
    ) -> list[str]:
        return []

    def reset(self) -> None:
        """Hook called before a new game starts."""
        return


def _ranks_in_play(
    player: PlayerState, opponents: Sequence[PlayerState] | None
) -> list[Rank]:
    if opponents is None:
        return player.ranks()
    return candidate_ranks(player, opponents)


class BotPolicy(DecisionPolicy):
    """Automatic player that steers its asks with a :class:`BeliefModel`."""

    is_bot = True

    def __init__(
        self,
        name: str,
        rng: Any,
        *,
        track_exchanges: bool = True,
        belief: BeliefModel | None = None,
    ) -> None:
        self.name = name
        self.rng = rng
        self.track_exchanges = track_exchanges
        self.belief = belief if belief is not None else BeliefModel()

    def observe_exchange(self, giver: str, receiver: str, rank: Rank, suit: Suit) -> None:
        if not self.track_exchanges:
            return
        self.belief.observe_exchange(giver, receiver, rank, suit)

    def settle_exchange(self, giver: str, receiver: str, rank: Rank, suit: Suit) -> None:
        if not self.track_exchanges:
            return
        self.belief.settle_exchange(giver, receiver, rank, suit)

    def reset(self) -> None:
        self.belief.forget()

    def _pick(self, tiers: Sequence[Sequence[T]], what: str) -> T | None:
        for level, tier in enumerate(tiers, start=1):
            if tier:
                choice = self.rng.choice(list(tier))
                logger.debug("%s picks %s %s from tier %d of %d", self.name, what, choice, level, len(tiers))
                return choice
        return None

    def _tracked_owners(self) -> list[str]:
        return [owner for owner in self.belief.known_owners() if owner != self.name]

    def choose_rank(
        self, player: PlayerState, opponents: Sequence[PlayerState] | None
    ) -> Rank | None:
        candidates = _ranks_in_play(player, opponents)
        if not candidates:
            return None
        others = list(opponents or ())
        belief = self.belief

        # Both sides hold several of the rank: best odds of finishing a book.
        paired = [
            rank
            for rank in candidates
            if len(player.suits_for(rank)) >= 2
            and any(belief.likely_has_multiple_of_rank(other.name, rank) for other in others)
        ]
        # Someone was seen taking a suit we are missing.
        spotted = [
            rank
            for rank in candidates
            if any(
                belief.likely_has(other.name, rank, suit)
                for suit in candidate_suits(rank, player)
                for other in others
            )
        ]
        return self._pick([paired, spotted, candidates], "rank")

    def choose_suit(self, rank: Rank, player: PlayerState) -> Suit | None:
        candidates = candidate_suits(rank, player)
        if not candidates:
            return None
        owners = self._tracked_owners()
        belief = self.belief

        tiers: list[list[Suit]] = []
        if len(player.suits_for(rank)) >= 2:
            tiers.append(
                [
                    suit
                    for suit in candidates
                    if any(
                        belief.likely_has_multiple_of_rank(owner, rank)
                        and not belief.has_given_away(owner, rank, suit)
                        for owner in owners
                    )
                ]
            )
        tiers.append(
            [
                suit
                for suit in candidates
                if any(belief.likely_has(owner, rank, suit) for owner in owners)
            ]
        )
        tiers.append(candidates)
        return self._pick(tiers, "suit")

    def choose_target(
        self, rank: Rank, suit: Suit, opponents: Sequence[PlayerState]
    ) -> PlayerState | None:
        if not opponents:
            return None
        belief = self.belief
        confirmed = [p for p in opponents if belief.likely_has(p.name, rank, suit)]
        not_given = [p for p in opponents if not belief.has_given_away(p.name, rank, suit)]
        collectors = [
            p for p in not_given if belief.likely_has_multiple_of_rank(p.name, rank)
        ]
        return self._pick([confirmed, collectors, not_given, list(opponents)], "target")

    def explain(
        self, rank: Rank, suit: Suit, target: PlayerState, player: PlayerState
    ) -> list[str]:
        """Return human-readable reasons behind asking ``target`` for the card."""

        belief = self.belief
        card = f"{rank.value}{suit.icon}"
        held = len(player.suits_for(rank))
        collecting = belief.likely_has_multiple_of_rank(target.name, rank)
        reasons: list[str] = []

        if belief.likely_has(target.name, rank, suit):
            reasons.append(f"I saw {target.name} receive {card} before.")
        if collecting:
            reasons.append(f"{target.name} likely has multiple {rank.value}s.")
            if held >= 2:
                reasons.append(
                    f"High probability play: I have {held} {rank.value}s, they likely have more."
                )
        if belief.has_given_away(target.name, rank, suit):
            reasons.append(f"But {target.name} already gave away {card}.")
        elif belief.likely_has(target.name, rank, suit):
            reasons.append("Confirmed target based on card tracking!")

        if held == 3:
            reasons.append(f"This would complete my {rank.value} book!")
        elif held == 2:
            reasons.append(f"Getting closer to completing the {rank.value} book ({held}/4).")
        return reasons


class HumanPolicy(DecisionPolicy):
    """Seat controller that defers every decision to a :class:`Selector`."""

    is_bot = False

    def __init__(self, selector: Selector) -> None:
        self.selector = selector

    def choose_rank(
        self, player: PlayerState, opponents: Sequence[PlayerState] | None
    ) -> Rank | None:
        candidates = _ranks_in_play(player, opponents)
        if not candidates:
            return None
        choices = [(rank.value, rank) for rank in candidates]
        label = f"Your hand: {format_cards(player.sorted_hand())}\nWhat rank do you want to ask for?"
        return self.selector.select_one(label, choices)

    def choose_suit(self, rank: Rank, player: PlayerState) -> Suit | None:
        candidates = candidate_suits(rank, player)
        if not candidates:
            return None
        held = ", ".join(f"{suit.value} {suit.icon}" for suit in player.suits_for(rank))
        choices = [(f"{suit.value} {suit.icon}", suit) for suit in candidates]
        label = f"You have {rank.value} in: {held}\nChoose a suit to ask for:"
        return self.selector.select_one(label, choices)

    def choose_target(
        self, rank: Rank, suit: Suit, opponents: Sequence[PlayerState]
    ) -> PlayerState | None:
        available = [p for p in opponents if p.hand_size > 0]
        if not available:
            return None
        choices = [
            (f"{p.name}{' (bot)' if p.is_bot else ''} ({p.hand_size} cards)", p)
            for p in available
        ]
        return self.selector.select_one(f"Who do you ask for {rank.value}{suit.icon}?", choices)
