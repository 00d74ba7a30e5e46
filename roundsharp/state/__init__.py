"""
Round state for the roundsharp engine.

This package provides the `Round` model and the transition functions that
move it through its phases.
"""

from roundsharp.state.models import Round, RoundPhase

from roundsharp.state.transitions import (
    StateTransitionEngine,
    new_round,
    place_wager,
    deal_initial_cards,
    player_hit,
    stand,
    no_more,
    finalize,
)

__all__ = [
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
]
