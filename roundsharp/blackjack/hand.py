"""
Blackjack hand evaluation.

The module-level functions score any sequence of cards; `BlackjackHand`
wraps them for a `Hand`.
"""

from typing import Iterable, Tuple

from roundsharp.common.card import Card, Rank
from roundsharp.common.hand import Hand

BLACKJACK = 21


def _split_aces(cards: Iterable[Card]) -> Tuple[int, int]:
    """Return (number of aces, total of the non-ace cards)."""
    num_aces = 0
    non_ace_value = 0
    for card in cards:
        if card.rank == Rank.ACE:
            num_aces += 1
        else:
            non_ace_value += card.rank.points
    return num_aces, non_ace_value


def _total_and_soft_aces(cards: Iterable[Card]) -> Tuple[int, int]:
    num_aces, total = _split_aces(cards)

    # Every ace starts soft; demote one at a time only while the hand is over 21.
    total += num_aces * Rank.ACE.points
    soft_aces = num_aces
    while total > BLACKJACK and soft_aces:
        total -= 10
        soft_aces -= 1

    return total, soft_aces


def score(cards: Iterable[Card]) -> int:
    """
    Calculate the blackjack total of a sequence of cards.

    >>> from roundsharp.common.card import Suit
    >>> score([Card(Rank.ACE, Suit.SPADES), Card(Rank.NINE, Suit.SPADES)])
    20
    >>> score([])
    0
    """
    return _total_and_soft_aces(cards)[0]


def is_soft(cards: Iterable[Card]) -> bool:
    """True if at least one ace is still counted as 11."""
    return _total_and_soft_aces(cards)[1] > 0


def is_blackjack(cards: Iterable[Card]) -> bool:
    """True iff the cards are exactly two and total 21."""
    cards = list(cards)
    return len(cards) == 2 and score(cards) == BLACKJACK


def is_bust(cards: Iterable[Card]) -> bool:
    return score(cards) > BLACKJACK


class BlackjackHand(Hand):
    """A hand in the game of Blackjack."""

    __slots__ = ()

    def value(self) -> int:
        """Calculate the optimal value of the hand with ace handling."""
        return score(self._cards)

    @property
    def is_soft(self) -> bool:
        """Determine if the hand is soft (contains an ace counted as 11)."""
        return is_soft(self._cards)

    @property
    def is_blackjack(self) -> bool:
        """Determine if the hand is a natural blackjack."""
        return is_blackjack(self._cards)

    @property
    def is_bust(self) -> bool:
        return is_bust(self._cards)
