"""
State models for the round engine.

This module provides the `Round` aggregate, its `RoundPhase` enum, the
read projections used for rendering, and the persisted dictionary form that
lets a caller store a round and resume it exactly where it left off.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
import uuid

from roundsharp.blackjack.hand import BlackjackHand, score
from roundsharp.blackjack.outcome import Outcome
from roundsharp.common.card import FULL_DECK, Card
from roundsharp.common.hand import HandRole
from roundsharp.common.shoe import Shoe
from roundsharp.errors import InvalidPhase, InvalidRound

HIDDEN_CARD = "??"


class RoundPhase(Enum):
    """
    Possible phases of a round.
    """

    BETTING = "betting"
    PLAYER_TURN = "player_turn"
    DEALER_TURN = "dealer_turn"
    FINISHED = "finished"

    def __str__(self) -> str:
        return self.value


def _is_amount(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class Round:
    """
    A single blackjack round, mutated in place by the transitions module.

    Attributes:
        bankroll: Funds available, after any wager has been debited
        wager: Amount staked this round
        phase: Current phase of the round
        outcome: Result of the round, set only once the round is finished
        shoe: The cards left to draw
        player_hand: The player's cards
        dealer_hand: The dealer's cards, the second of which is the hole card
        id: Unique identifier for this round
    """

    bankroll: int
    wager: int = 0
    phase: RoundPhase = RoundPhase.BETTING
    outcome: Optional[Outcome] = None
    shoe: Shoe = field(default_factory=Shoe)
    player_hand: BlackjackHand = field(
        default_factory=lambda: BlackjackHand(HandRole.PLAYER)
    )
    dealer_hand: BlackjackHand = field(
        default_factory=lambda: BlackjackHand(HandRole.DEALER)
    )
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def is_finished(self) -> bool:
        return self.phase is RoundPhase.FINISHED

    def require_phase(self, phase: RoundPhase, action: str) -> None:
        """
        Reject an operation unless the round is in `phase`.

        Args:
            phase: The phase the operation needs
            action: Name of the operation, used in the error message

        Raises:
            InvalidPhase: If the round is in any other phase
        """
        if self.phase is not phase:
            raise InvalidPhase(
                f"Cannot {action} while the round is in the {self.phase} phase"
            )

    def validate(self) -> "Round":
        """
        Check the round's invariants.

        Returns:
            The round itself, so construction can be chained

        Raises:
            InvalidRound: If any invariant does not hold
        """
        if not _is_amount(self.bankroll) or self.bankroll < 0:
            raise InvalidRound(f"Bankroll must be a non-negative integer: {self.bankroll!r}")
        if not _is_amount(self.wager) or self.wager < 0:
            raise InvalidRound(f"Wager must be a non-negative integer: {self.wager!r}")
        if not isinstance(self.phase, RoundPhase):
            raise InvalidRound(f"Unknown phase: {self.phase!r}")
        if self.phase is not RoundPhase.BETTING and self.wager <= 0:
            raise InvalidRound("Wager must be greater than 0 when the round is in progress")
        if (self.outcome is None) == self.is_finished:
            raise InvalidRound(
                f"Outcome {self.outcome} does not match the {self.phase} phase"
            )

        in_play = self.shoe.cards + self.player_hand.cards + self.dealer_hand.cards
        if in_play and Counter(in_play) != Counter(FULL_DECK):
            raise InvalidRound("Shoe and hands must hold each of the 52 cards exactly once")
        return self

    # Read projections

    @property
    def player_score(self) -> int:
        return self.player_hand.value()

    @property
    def dealer_score(self) -> int:
        return self.dealer_hand.value()

    @property
    def dealer_hidden_card(self) -> bool:
        """True while the dealer's hole card is face down."""
        return self.phase in (RoundPhase.BETTING, RoundPhase.PLAYER_TURN)

    @property
    def upcard_value(self) -> int:
        """
        The dealer score a player is allowed to see.

        Only the first dealer card counts while the hole card is hidden.
        """
        if self.dealer_hidden_card:
            return score(self.dealer_hand.cards[:1])
        return self.dealer_score

    def view(self) -> Dict[str, Any]:
        """
        Convert the round to the player-visible format used for rendering.

        Returns:
            Dictionary with the hole card masked until the dealer's turn
        """
        dealer_cards = [str(card) for card in self.dealer_hand]
        if self.dealer_hidden_card:
            dealer_cards = [
                HIDDEN_CARD if i > 0 else card for i, card in enumerate(dealer_cards)
            ]

        return {
            "id": self.id,
            "phase": self.phase.value,
            "outcome": self.outcome.value if self.outcome else None,
            "bankroll": self.bankroll,
            "wager": self.wager,
            "player": {
                "hand": [str(card) for card in self.player_hand],
                "value": self.player_score,
                "is_soft": self.player_hand.is_soft,
            },
            "dealer": {
                "hand": dealer_cards,
                "value": self.upcard_value,
                "hide_second_card": self.dealer_hidden_card,
            },
        }

    # Persistence

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the round to a dictionary suitable for serialization.

        Returns:
            Dictionary holding everything needed to resume the round
        """
        return {
            "id": self.id,
            "bankroll": self.bankroll,
            "wager": self.wager,
            "phase": self.phase.value,
            "outcome": self.outcome.value if self.outcome else None,
            "shoe": [card.to_dict() for card in self.shoe],
            "player_hand": [card.to_dict() for card in self.player_hand],
            "dealer_hand": [card.to_dict() for card in self.dealer_hand],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], validate: bool = True) -> "Round":
        """
        Rebuild a round from `to_dict` output.

        Args:
            data: The persisted round
            validate: Whether to check invariants after loading

        Raises:
            InvalidRound: If the data is malformed or breaks an invariant
        """
        try:
            outcome = data.get("outcome")
            round_ = cls(
                id=data["id"],
                bankroll=data["bankroll"],
                wager=data.get("wager", 0),
                phase=RoundPhase(data.get("phase", RoundPhase.BETTING.value)),
                outcome=Outcome(outcome) if outcome is not None else None,
                shoe=Shoe(_cards(data.get("shoe", []))),
                player_hand=BlackjackHand(
                    HandRole.PLAYER, _cards(data.get("player_hand", []))
                ),
                dealer_hand=BlackjackHand(
                    HandRole.DEALER, _cards(data.get("dealer_hand", []))
                ),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidRound(f"Malformed round data: {exc}") from exc

        return round_.validate() if validate else round_

    def restore(self, snapshot: Dict[str, Any]) -> None:
        """Put every field back to the values held in a `to_dict` snapshot."""
        previous = Round.from_dict(snapshot, validate=False)
        self.bankroll = previous.bankroll
        self.wager = previous.wager
        self.phase = previous.phase
        self.outcome = previous.outcome
        self.shoe = previous.shoe
        self.player_hand = previous.player_hand
        self.dealer_hand = previous.dealer_hand


def _cards(items: List[Dict[str, str]]) -> List[Card]:
    return [Card.from_dict(item) for item in items]
