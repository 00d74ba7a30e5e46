"""
roundsharp: a single-player blackjack round engine.

A round is created with a bankroll, takes one wager, deals two cards each to
the player and the dealer, lets the player hit or stand, plays the dealer out
and settles into an outcome with a payout.
"""

from roundsharp.errors import (
    RoundError,
    InvalidWager,
    InsufficientFunds,
    InvalidPhase,
    ExhaustedShoe,
    InvalidRound,
    RoundNotFound,
)
from roundsharp.state import (
    Round,
    RoundPhase,
    StateTransitionEngine,
    new_round,
    place_wager,
    deal_initial_cards,
    player_hit,
    stand,
    no_more,
    finalize,
)
from roundsharp.blackjack.outcome import Outcome, determine_outcome, payout_for
from roundsharp.blackjack.hand import BlackjackHand, score, is_blackjack, is_bust
from roundsharp.common.card import Card, Rank, Suit
from roundsharp.common.shoe import Shoe
from roundsharp.engine import RoundTable

__version__ = "0.1.0"

__all__ = [
    "RoundError",
    "InvalidWager",
    "InsufficientFunds",
    "InvalidPhase",
    "ExhaustedShoe",
    "InvalidRound",
    "RoundNotFound",
    "Round",
    "RoundPhase",
    "StateTransitionEngine",
    "new_round",
    "place_wager",
    "deal_initial_cards",
    "player_hit",
    "stand",
    "no_more",
    "finalize",
    "Outcome",
    "determine_outcome",
    "payout_for",
    "BlackjackHand",
    "score",
    "is_blackjack",
    "is_bust",
    "Card",
    "Rank",
    "Suit",
    "Shoe",
    "RoundTable",
]
