"""
Outcome resolution and payouts for a finished round.
"""

from enum import Enum
from typing import Iterable

from roundsharp.blackjack.hand import BLACKJACK, is_blackjack, score
from roundsharp.common.card import Card


class Outcome(Enum):
    """The categorical result of a round, seen from the player's side."""

    PLAYER_BLACKJACK = "player_blackjack"
    PLAYER_WINS = "player_wins"
    PUSH = "push"
    DEALER_WINS = "dealer_wins"
    DEALER_BLACKJACK = "dealer_blackjack"

    def __str__(self) -> str:
        return self.value


def determine_outcome(
    player_cards: Iterable[Card], dealer_cards: Iterable[Card]
) -> Outcome:
    """
    Compare the final player and dealer hands.

    Naturals are checked before busts, so a player blackjack wins even against
    a dealer who has drawn to 21 with more cards.

    Args:
        player_cards: The player's final cards
        dealer_cards: The dealer's final cards

    Returns:
        The outcome of the round
    """
    player_cards = list(player_cards)
    dealer_cards = list(dealer_cards)

    player_bj = is_blackjack(player_cards)
    dealer_bj = is_blackjack(dealer_cards)

    if player_bj and dealer_bj:
        return Outcome.PUSH
    if player_bj:
        return Outcome.PLAYER_BLACKJACK
    if dealer_bj:
        return Outcome.DEALER_BLACKJACK

    player_score = score(player_cards)
    dealer_score = score(dealer_cards)

    if player_score > BLACKJACK:
        return Outcome.DEALER_WINS
    if dealer_score > BLACKJACK:
        return Outcome.PLAYER_WINS
    if player_score > dealer_score:
        return Outcome.PLAYER_WINS
    if player_score < dealer_score:
        return Outcome.DEALER_WINS
    return Outcome.PUSH


def payout_for(outcome: Outcome, wager: int) -> int:
    """
    Amount credited back to the bankroll for an outcome.

    The wager has already been debited, so a push returns exactly the wager and
    a loss returns nothing. A blackjack pays 3:2, rounded down.
    """
    match outcome:
        case Outcome.PLAYER_BLACKJACK:
            return wager * 5 // 2
        case Outcome.PLAYER_WINS:
            return wager * 2
        case Outcome.PUSH:
            return wager
        case Outcome.DEALER_WINS | Outcome.DEALER_BLACKJACK:
            return 0
    raise ValueError(f"Unknown outcome: {outcome!r}")
