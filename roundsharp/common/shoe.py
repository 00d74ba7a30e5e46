"""
This module contains the Shoe class, the drawable pack of cards for one round.

>>> import random
>>> shoe = Shoe.build(random.Random(7))
>>> len(shoe)
52
>>> card = shoe.draw()
>>> len(shoe)
51
"""

import logging
import random
from typing import Iterable, Iterator, List, Optional

from roundsharp.common.card import FULL_DECK, Card
from roundsharp.errors import ExhaustedShoe

logger = logging.getLogger(__name__)


class Shoe:
    """
    An ordered pack of cards drawn from the end.

    A shoe built with `build` holds each of the 52 cards once, in a uniformly
    random order. It is never reshuffled; once drained, `draw` raises
    `ExhaustedShoe`.
    """

    __slots__ = ("_cards",)

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        """
        Initialize a Shoe instance.

        :param cards: Cards in draw order, last card drawn first (optional).
                      If not provided, the shoe starts empty.
        """
        self._cards: List[Card] = list(cards) if cards is not None else []

    @classmethod
    def build(cls, rng: Optional[random.Random] = None) -> "Shoe":
        """
        Build a full 52-card shoe and shuffle it.

        :param rng: Source of randomness. Pass a seeded `random.Random` for a
                    reproducible order; a fresh unseeded one is used otherwise.
        :return: A new shuffled shoe
        """
        rng = rng if rng is not None else random.Random()
        cards = list(FULL_DECK)
        rng.shuffle(cards)
        logger.debug("Built and shuffled a %d card shoe", len(cards))
        return cls(cards)

    def draw(self) -> Card:
        """
        Remove and return the top card.

        :return: The drawn card
        :raises ExhaustedShoe: If no cards remain
        """
        if not self._cards:
            raise ExhaustedShoe("Cannot draw from an empty shoe")
        return self._cards.pop()

    @property
    def cards(self) -> List[Card]:
        """A copy of the remaining cards, top card last."""
        return list(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __eq__(self, other):
        if isinstance(other, Shoe):
            return self._cards == other._cards
        return NotImplemented

    def __repr__(self) -> str:
        return f"Shoe({self._cards!r})"

    def __str__(self) -> str:
        return f"Shoe with {len(self._cards)} cards remaining"
