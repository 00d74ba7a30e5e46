"""
Pytest configuration shared by all roundsharp tests.

Provides card-building helpers and a factory for rounds that are already in
the player's turn with chosen hands and shoe.
"""

import pytest

from roundsharp.blackjack.hand import BlackjackHand
from roundsharp.common.card import Card, Rank, Suit
from roundsharp.common.hand import HandRole
from roundsharp.common.shoe import Shoe
from roundsharp.events import EventBus
from roundsharp.state import RoundPhase, new_round, place_wager


@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def card():
    """Build a card from its rank label, spades unless a suit is given."""

    def _card(label: str, suit: str = "♠") -> Card:
        return Card(Rank(label), Suit(suit))

    return _card


@pytest.fixture
def cards(card):
    """Build a list of cards from rank labels."""

    def _cards(*labels: str):
        return [card(label) for label in labels]

    return _cards


@pytest.fixture
def deal_round(cards):
    """
    Build a round in the player's turn with the given hands.

    `shoe` lists rank labels in draw order: the first label is drawn first.
    """

    def _deal_round(player, dealer, bet=100, bankroll=1000, shoe=("5", "6", "7", "8", "9")):
        round_ = new_round(bankroll)
        place_wager(round_, bet)
        round_.player_hand = BlackjackHand(HandRole.PLAYER, cards(*player))
        round_.dealer_hand = BlackjackHand(HandRole.DEALER, cards(*dealer))
        round_.shoe = Shoe(reversed(cards(*shoe)))
        round_.phase = RoundPhase.PLAYER_TURN
        return round_

    return _deal_round
