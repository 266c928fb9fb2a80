"""Belief tracking used by bots to infer opponents' holdings."""

from __future__ import annotations

from dataclasses import dataclass, field

from .cards import Rank, Suit

Holdings = dict[str, dict[Rank, set[Suit]]]


@dataclass(slots=True)
class BeliefModel:
    """Advisory view of which player holds which card.

    ``known_has`` records cards an owner was seen receiving and has not been
    seen giving away since. ``given_away`` records cards an owner was seen
    handing over. Both are keyed by player name.
    """

    known_has: Holdings = field(default_factory=dict)
    given_away: Holdings = field(default_factory=dict)

    def observe_exchange(self, giver: str, receiver: str, rank: Rank, suit: Suit) -> None:
        """Record that ``giver`` handed the ``rank``/``suit`` card to ``receiver``."""

        self.known_has.setdefault(receiver, {}).setdefault(rank, set()).add(suit)
        self.given_away.setdefault(giver, {}).setdefault(rank, set()).add(suit)

        # A card handed back to an earlier giver is held again.
        receiver_given = self.given_away.get(receiver)
        if receiver_given and rank in receiver_given:
            receiver_given[rank].discard(suit)
            if not receiver_given[rank]:
                del receiver_given[rank]

        giver_known = self.known_has.get(giver)
        if giver_known and rank in giver_known:
            giver_known[rank].discard(suit)
            if not giver_known[rank]:
                del giver_known[rank]

    def settle_exchange(self, giver: str, receiver: str, rank: Rank, suit: Suit) -> None:
        """Record an exchange seen first-hand, as giver or receiver.

        The card is known to sit with ``receiver``, so no other owner keeps it.
        """

        for owner, ranks in self.known_has.items():
            if owner == receiver or rank not in ranks:
                continue
            ranks[rank].discard(suit)
            if not ranks[rank]:
                del ranks[rank]
        self.observe_exchange(giver, receiver, rank, suit)

    def likely_has(self, owner: str, rank: Rank, suit: Suit) -> bool:
        if suit in self.known_has.get(owner, {}).get(rank, ()):
            return True
        return False

    def has_given_away(self, owner: str, rank: Rank, suit: Suit) -> bool:
        return suit in self.given_away.get(owner, {}).get(rank, ())

    def likely_has_multiple_of_rank(self, owner: str, rank: Rank) -> bool:
        """Return ``True`` once ``owner`` is known to hold any card of ``rank``.

        Receiving one card of a rank is taken as a sign that more of that rank
        are being collected in the same hand.
        """

        return len(self.known_has.get(owner, {}).get(rank, ())) > 0

    def known_owners(self) -> list[str]:
        return [owner for owner, ranks in self.known_has.items() if ranks]

    def forget(self) -> None:
        self.known_has.clear()
        self.given_away.clear()
