"""
This module contains classes to represent a hand of cards.

It includes the `HandRole` enum and the `Hand` class. A hand is an ordered,
append-only sequence of cards held by either the player or the dealer.
"""

from enum import Enum
from typing import Iterable, Iterator, List, Optional

from roundsharp.common.card import Card


class HandRole(Enum):
    """Who holds a hand."""

    PLAYER = "player"
    DEALER = "dealer"


class Hand:
    """
    An ordered sequence of cards belonging to one role.

    Cards can only be appended; a hand never loses a card during a round.
    """

    __slots__ = ("_cards", "_role")

    def __init__(
        self,
        role: HandRole = HandRole.PLAYER,
        cards: Optional[Iterable[Card]] = None,
    ):
        self._role = role
        self._cards: List[Card] = list(cards) if cards is not None else []

    @property
    def role(self) -> HandRole:
        return self._role

    @property
    def cards(self) -> List[Card]:
        """Returns a copy of the cards in the hand."""
        return list(self._cards)

    def add_card(self, card: Card) -> None:
        """
        Adds a card to the hand.

        Args:
            card: The card to add.
        """
        if not isinstance(card, Card):
            raise TypeError(f"Expected a Card, got {card!r}")
        self._cards.append(card)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __getitem__(self, index):
        return self._cards[index]

    def __eq__(self, other):
        if isinstance(other, Hand):
            return self._role == other._role and self._cards == other._cards
        return NotImplemented

    def __repr__(self) -> str:
        """
        Returns a string representation of the hand for debugging.

        Returns:
            A string in the form "Hand(HandRole.PLAYER, [Card(...), ...])".
        """
        return f"{type(self).__name__}({self._role}, {self._cards!r})"

    def __str__(self) -> str:
        """
        Returns a string representation of the hand for display.

        Returns:
            A string in the form "K♠, 9♥".
        """
        return ", ".join(str(card) for card in self._cards)
