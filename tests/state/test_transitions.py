"""
Tests for the round state machine.

Covers the phase guards, the deal order, player hits and busts, dealer
play on stand, settlement and the end-to-end scenarios.
"""

import random
from collections import Counter

import pytest

from roundsharp.blackjack.outcome import Outcome
from roundsharp.common.card import FULL_DECK
from roundsharp.common.shoe import Shoe
from roundsharp.errors import ExhaustedShoe, InvalidPhase, InvalidRound
from roundsharp.state import (
    RoundPhase,
    deal_initial_cards,
    finalize,
    new_round,
    no_more,
    place_wager,
    player_hit,
    stand,
)


def all_cards(round_):
    return round_.shoe.cards + round_.player_hand.cards + round_.dealer_hand.cards


# new_round


def test_new_round_defaults():
    round_ = new_round(1000)
    assert round_.phase is RoundPhase.BETTING
    assert round_.wager == 0
    assert round_.outcome is None
    assert len(round_.shoe) == 0
    assert len(round_.player_hand) == 0
    assert len(round_.dealer_hand) == 0


def test_new_round_accepts_zero_and_large_bankrolls():
    assert new_round(0).bankroll == 0
    assert new_round(10**12).bankroll == 10**12


@pytest.mark.parametrize("bankroll", [-1, None, 10.5])
def test_new_round_rejects_invalid_bankroll(bankroll):
    with pytest.raises(InvalidRound):
        new_round(bankroll)


# deal_initial_cards


def test_bet_then_deal():
    round_ = new_round(1000)
    place_wager(round_, 200)
    assert round_.bankroll == 800
    assert round_.wager == 200

    deal_initial_cards(round_, random.Random(11))
    assert len(round_.player_hand) == 2
    assert len(round_.dealer_hand) == 2
    assert len(round_.shoe) == 48
    assert round_.phase is RoundPhase.PLAYER_TURN
    assert Counter(all_cards(round_)) == Counter(FULL_DECK)


def test_deal_alternates_player_and_dealer():
    round_ = new_round(1000)
    place_wager(round_, 10)
    order = Shoe.build(random.Random(8)).cards

    deal_initial_cards(round_, random.Random(8))

    # Draws come off the end of the shoe
    assert round_.player_hand.cards == [order[-1], order[-3]]
    assert round_.dealer_hand.cards == [order[-2], order[-4]]


def test_deal_without_wager_is_rejected():
    round_ = new_round(1000)
    with pytest.raises(InvalidPhase):
        deal_initial_cards(round_)
    assert len(round_.shoe) == 0
    assert round_.phase is RoundPhase.BETTING


def test_deal_twice_is_rejected():
    round_ = new_round(1000)
    place_wager(round_, 10)
    deal_initial_cards(round_, random.Random(1))
    before = round_.to_dict()
    with pytest.raises(InvalidPhase):
        deal_initial_cards(round_, random.Random(1))
    assert round_.to_dict() == before


# player_hit


def test_hit_adds_a_card(deal_round):
    round_ = deal_round(player=("7", "8"), dealer=("K", "6"))
    player_hit(round_)
    assert len(round_.player_hand) == 3
    assert round_.player_score == 20


def test_hit_without_bust_stays_in_player_turn(deal_round):
    round_ = deal_round(player=("7", "2"), dealer=("K", "6"), shoe=("5",))
    player_hit(round_)
    assert round_.player_score == 14
    assert round_.phase is RoundPhase.PLAYER_TURN
    assert round_.outcome is None


def test_bust_finishes_with_dealer_wins(deal_round):
    round_ = deal_round(player=("9", "8"), dealer=("K", "6"), bet=100, shoe=("9",))
    player_hit(round_)
    assert round_.player_score == 26
    assert round_.phase is RoundPhase.FINISHED
    assert round_.outcome is Outcome.DEALER_WINS
    assert round_.bankroll == 900
    assert len(round_.dealer_hand) == 2


def test_hit_outside_player_turn_is_rejected():
    round_ = new_round(1000)
    with pytest.raises(InvalidPhase):
        player_hit(round_)


# stand


def test_stand_finishes_the_round(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("K", "8"))
    stand(round_)
    assert round_.phase is RoundPhase.FINISHED
    assert round_.outcome is not None


def test_dealer_draws_until_seventeen(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("5", "6"), shoe=("7",))
    stand(round_)
    assert round_.dealer_score == 18
    assert len(round_.dealer_hand) == 3


def test_dealer_keeps_drawing_below_seventeen(deal_round):
    round_ = deal_round(
        player=("K", "9"), dealer=("2", "3"), shoe=("2", "2", "A", "3", "K")
    )
    stand(round_)
    # 5 -> 7 -> 9 -> 20, stops before the 3
    assert round_.dealer_score == 20
    assert len(round_.shoe) == 2


def test_dealer_stands_on_soft_seventeen(deal_round):
    round_ = deal_round(player=("K", "8"), dealer=("A", "6"), shoe=("4",))
    stand(round_)
    assert len(round_.dealer_hand) == 2
    assert round_.dealer_score == 17
    assert round_.outcome is Outcome.PLAYER_WINS


def test_dealer_on_hard_seventeen_does_not_draw(deal_round):
    round_ = deal_round(player=("K", "7"), dealer=("K", "7"), shoe=())
    stand(round_)
    assert round_.outcome is Outcome.PUSH


def test_stand_outside_player_turn_is_rejected(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("K", "8"))
    stand(round_)
    with pytest.raises(InvalidPhase):
        stand(round_)


def test_no_more_is_stand(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("K", "8"))
    no_more(round_)
    assert round_.outcome is Outcome.PLAYER_WINS


# End-to-end scenarios


def test_player_blackjack_pays_three_to_two(deal_round):
    round_ = deal_round(player=("A", "K"), dealer=("5", "7"), bet=100)
    assert round_.bankroll == 900
    stand(round_)
    assert round_.outcome is Outcome.PLAYER_BLACKJACK
    assert round_.bankroll == 1150


def test_player_win_pays_one_to_one(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("K", "7"), bet=100, shoe=())
    stand(round_)
    assert round_.outcome is Outcome.PLAYER_WINS
    assert round_.bankroll == 1100


def test_dealer_win_returns_no_payout(deal_round):
    round_ = deal_round(player=("K", "7"), dealer=("K", "9"), bet=100, shoe=())
    stand(round_)
    assert round_.outcome is Outcome.DEALER_WINS
    assert round_.bankroll == 900


def test_push_returns_the_bet(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("K", "9"), bet=100, shoe=())
    stand(round_)
    assert round_.outcome is Outcome.PUSH
    assert round_.bankroll == 1000


def test_dealer_blackjack_beats_player(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("A", "K"), bet=100)
    stand(round_)
    assert round_.outcome is Outcome.DEALER_BLACKJACK
    assert round_.bankroll == 900


def test_both_blackjack_is_a_push(deal_round):
    round_ = deal_round(player=("A", "K"), dealer=("A", "Q"), bet=100)
    stand(round_)
    assert round_.outcome is Outcome.PUSH
    assert round_.bankroll == 1000


def test_player_wins_when_dealer_busts(deal_round):
    round_ = deal_round(player=("K", "7"), dealer=("K", "6"), bet=100, shoe=("K",))
    stand(round_)
    assert round_.dealer_score == 26
    assert round_.outcome is Outcome.PLAYER_WINS
    assert round_.bankroll == 1100


def test_full_seeded_round_conserves_cards():
    round_ = new_round(1000)
    place_wager(round_, 100)
    deal_initial_cards(round_, random.Random(99))
    while round_.phase is RoundPhase.PLAYER_TURN and round_.player_score < 15:
        player_hit(round_)
    if round_.phase is RoundPhase.PLAYER_TURN:
        stand(round_)

    assert round_.phase is RoundPhase.FINISHED
    assert round_.outcome is not None
    assert Counter(all_cards(round_)) == Counter(FULL_DECK)
    round_.validate()


# Finished rounds


def test_finished_round_rejects_everything(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("K", "8"))
    stand(round_)
    before = round_.to_dict()

    for action in (
        lambda: place_wager(round_, 10),
        lambda: deal_initial_cards(round_),
        lambda: player_hit(round_),
        lambda: stand(round_),
        lambda: finalize(round_, Outcome.PUSH),
    ):
        with pytest.raises(InvalidPhase):
            action()

    assert round_.to_dict() == before


def test_finalize_applies_payout_once(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("K", "8"), bet=100)
    finalize(round_, Outcome.PLAYER_WINS)
    assert round_.bankroll == 1100
    with pytest.raises(InvalidPhase):
        finalize(round_, Outcome.PLAYER_WINS)
    assert round_.bankroll == 1100


def test_finalize_rejects_betting_round():
    round_ = new_round(1000)
    with pytest.raises(InvalidPhase):
        finalize(round_, Outcome.PUSH)


# Atomicity


def test_exhausted_shoe_during_hit_leaves_round_unchanged(deal_round):
    round_ = deal_round(player=("7", "2"), dealer=("K", "6"), shoe=())
    before = round_.to_dict()
    with pytest.raises(ExhaustedShoe):
        player_hit(round_)
    assert round_.to_dict() == before


def test_exhausted_shoe_during_dealer_play_leaves_round_unchanged(deal_round):
    round_ = deal_round(player=("K", "9"), dealer=("2", "3"), shoe=("2",))
    before = round_.to_dict()
    with pytest.raises(ExhaustedShoe):
        stand(round_)
    assert round_.to_dict() == before
    assert round_.phase is RoundPhase.PLAYER_TURN
