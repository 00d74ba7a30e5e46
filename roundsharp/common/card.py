"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Spades, Hearts, Diamonds, and Clubs.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Two through Ten, Jack, Queen, King, and Ace. Each rank knows its
blackjack point value.

- `Card`: An immutable playing card. Two cards are equal when their rank and
suit are equal.

This module is part of the `roundsharp` package, a single-player blackjack round engine.
"""

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.

    The value of each member is its printed label, so Jack, Queen and King stay
    distinct members even though they score the same.
    """

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def label(self) -> str:
        """A string representation of the rank."""
        return self.value

    @property
    def points(self) -> int:
        """The value of the rank, used for scoring. Aces count 11 here."""
        return _POINTS[self]

    @property
    def is_face(self) -> bool:
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)

    def __str__(self) -> str:
        return self.label


_POINTS: Dict[Rank, int] = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
    Rank.ACE: 11,
}


@dataclass(frozen=True)
class Card:
    """
    Class representing a playing card.

    >>> card = Card(Rank.TWO, Suit.HEARTS)
    >>> print(card)
    2♥
    >>> card == Card(Rank.TWO, Suit.HEARTS)
    True
    """

    rank: Rank
    suit: Suit

    def __post_init__(self):
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "Card":
        """
        Build a card from its persisted form.

        :param data: A mapping with "rank" (e.g. "10", "K") and "suit" (e.g. "♠")
        :return: The matching card
        :raises ValueError: If either field is not a known rank or suit
        """
        return cls(Rank(data["rank"]), Suit(data["suit"]))

    def to_dict(self) -> Dict[str, str]:
        """Return the persisted form of the card."""
        return {"rank": self.rank.label, "suit": self.suit.value}

    def __repr__(self) -> str:
        return f"Card(Rank.{self.rank.name}, Suit.{self.suit.name})"

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.value}"


# Every (rank, suit) pair exactly once, in rank-major order.
FULL_DECK = tuple(Card(rank, suit) for rank in Rank for suit in Suit)
