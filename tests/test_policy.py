from __future__ import annotations

from typing import Sequence

from gofish.cards import Rank, Suit
from gofish.policy import BotPolicy, HumanPolicy
from gofish.state import PlayerState

from helpers import FirstChoice, c


def _player(name: str, *codes: str) -> PlayerState:
    return PlayerState(name=name, is_bot=True, hand=[c(code) for code in codes])


class RecordingSelector:
    def __init__(self, answers: Sequence[object]) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, list[tuple[str, object]]]] = []

    def select_one(self, label, choices):
        self.calls.append((label, list(choices)))
        return self.answers.pop(0) if self.answers else None


def test_rank_candidates_require_an_opponent_holding_the_rank() -> None:
    bot = BotPolicy("X", FirstChoice())
    me = _player("X", "5C", "KH")
    opponent = _player("B", "KD", "9S")

    assert bot.choose_rank(me, [opponent]) == Rank.KING
    assert bot.choose_rank(me, [_player("B", "9S")]) is None


def test_rank_prefers_pairs_against_a_collector() -> None:
    bot = BotPolicy("X", FirstChoice())
    bot.observe_exchange("C", "B", Rank.KING, Suit.SPADES)
    me = _player("X", "5C", "KH", "KD")
    opponent = _player("B", "5D", "KS")

    assert bot.choose_rank(me, [opponent]) == Rank.KING


def test_rank_prefers_a_missing_suit_someone_was_seen_taking() -> None:
    bot = BotPolicy("X", FirstChoice())
    bot.observe_exchange("C", "B", Rank.SEVEN, Suit.DIAMONDS)
    me = _player("X", "5C", "7H")
    opponent = _player("B", "5D", "7D")

    assert bot.choose_rank(me, [opponent]) == Rank.SEVEN


def test_rank_falls_back_to_any_candidate() -> None:
    bot = BotPolicy("X", FirstChoice())
    me = _player("X", "5C", "7H")
    opponent = _player("B", "5D", "7D")

    assert bot.choose_rank(me, [opponent]) == Rank.FIVE


def test_rank_without_opponent_list_uses_own_ranks() -> None:
    bot = BotPolicy("X", FirstChoice())

    assert bot.choose_rank(_player("X", "4S"), None) == Rank.FOUR


def test_suit_skips_suits_already_held() -> None:
    bot = BotPolicy("X", FirstChoice())
    me = _player("X", "KH", "KD")

    assert bot.choose_suit(Rank.KING, me) == Suit.CLUBS


def test_suit_prefers_confirmed_holding() -> None:
    bot = BotPolicy("X", FirstChoice())
    bot.observe_exchange("C", "B", Rank.KING, Suit.SPADES)
    me = _player("X", "KH")

    assert bot.choose_suit(Rank.KING, me) == Suit.SPADES


def test_suit_with_pair_avoids_suits_the_collector_gave_away() -> None:
    bot = BotPolicy("X", FirstChoice())
    bot.observe_exchange("C", "B", Rank.KING, Suit.SPADES)
    bot.observe_exchange("B", "X", Rank.KING, Suit.CLUBS)
    me = _player("X", "KH", "KD")

    # B still collects Kings but already gave the Clubs away.
    assert bot.choose_suit(Rank.KING, me) == Suit.SPADES


def test_suit_returns_none_when_nothing_is_missing() -> None:
    bot = BotPolicy("X", FirstChoice())
    me = PlayerState(name="X", hand=[c("KH"), c("KD"), c("KC")])
    me.hand.append(c("KS"))  # bypass book detection

    assert bot.choose_suit(Rank.KING, me) is None


def test_target_tiers() -> None:
    bot = BotPolicy("X", FirstChoice())
    b_player = _player("B", "2H")
    c_player = _player("C", "2D")
    opponents = [b_player, c_player]

    assert bot.choose_target(Rank.KING, Suit.SPADES, opponents) is b_player

    bot.observe_exchange("B", "C", Rank.KING, Suit.SPADES)
    bot.settle_exchange("X", "C", Rank.QUEEN, Suit.SPADES)
    assert bot.choose_target(Rank.KING, Suit.SPADES, opponents) is c_player

    # C is known to collect Kings and never gave the Clubs away.
    assert bot.choose_target(Rank.KING, Suit.CLUBS, opponents) is c_player

    bot.observe_exchange("C", "D", Rank.QUEEN, Suit.HEARTS)
    assert bot.choose_target(Rank.QUEEN, Suit.HEARTS, opponents) is b_player

    bot.observe_exchange("B", "D", Rank.QUEEN, Suit.HEARTS)
    assert bot.choose_target(Rank.QUEEN, Suit.HEARTS, opponents) is b_player
    assert bot.choose_target(Rank.QUEEN, Suit.HEARTS, []) is None


def test_blind_bot_ignores_exchanges() -> None:
    bot = BotPolicy("X", FirstChoice(), track_exchanges=False)
    bot.settle_exchange("X", "C", Rank.QUEEN, Suit.SPADES)
    bot.observe_exchange("B", "C", Rank.KING, Suit.SPADES)

    assert bot.belief.known_has == {}


def test_reset_forgets_beliefs() -> None:
    bot = BotPolicy("X", FirstChoice())
    bot.observe_exchange("B", "C", Rank.KING, Suit.SPADES)

    bot.reset()

    assert not bot.belief.likely_has("C", Rank.KING, Suit.SPADES)


def test_explain_lists_reasons() -> None:
    bot = BotPolicy("X", FirstChoice())
    bot.observe_exchange("C", "B", Rank.KING, Suit.SPADES)
    me = _player("X", "KH", "KD", "KC")
    target = _player("B", "KS")

    reasons = bot.explain(Rank.KING, Suit.SPADES, target, me)

    assert any("saw B receive" in reason for reason in reasons)
    assert any("complete my K book" in reason for reason in reasons)
    assert "Confirmed target based on card tracking!" in reasons


def test_human_rank_choice_offers_shared_ranks() -> None:
    selector = RecordingSelector([Rank.KING])
    human = HumanPolicy(selector)
    me = _player("You", "5C", "KH")

    assert human.choose_rank(me, [_player("B", "KD")]) == Rank.KING
    label, choices = selector.calls[0]
    assert [value for _, value in choices] == [Rank.KING]
    assert "Your hand" in label


def test_human_rank_choice_without_opponents_offers_own_ranks() -> None:
    selector = RecordingSelector([Rank.FIVE])
    human = HumanPolicy(selector)

    human.choose_rank(_player("You", "5C", "KH"), None)

    _, choices = selector.calls[0]
    assert [value for _, value in choices] == [Rank.FIVE, Rank.KING]


def test_human_rank_choice_with_no_candidates_skips_selector() -> None:
    selector = RecordingSelector([])
    human = HumanPolicy(selector)

    assert human.choose_rank(_player("You", "5C"), [_player("B", "KD")]) is None
    assert selector.calls == []


def test_human_suit_and_target_choices() -> None:
    b_player = _player("B", "KD")
    empty = _player("C")
    selector = RecordingSelector([Suit.SPADES, b_player])
    human = HumanPolicy(selector)
    me = _player("You", "KH", "KC")

    assert human.choose_suit(Rank.KING, me) == Suit.SPADES
    assert human.choose_target(Rank.KING, Suit.SPADES, [b_player, empty]) is b_player

    _, suit_choices = selector.calls[0]
    assert [value for _, value in suit_choices] == [Suit.DIAMONDS, Suit.SPADES]
    _, target_choices = selector.calls[1]
    assert [value for _, value in target_choices] == [b_player]


def test_human_cancellation_maps_to_none() -> None:
    human = HumanPolicy(RecordingSelector([]))

    assert human.choose_rank(_player("You", "KH"), [_player("B", "KD")]) is None
