"""
State transition functions for the round engine.

A round moves betting -> player_turn -> dealer_turn -> finished, or straight
from player_turn to finished when the player busts. Each transition checks
its phase through `Round.require_phase` before touching anything, and both
ways into `finished` go through `finalize`, so the payout is applied in one
place only.

Events describing a transition are emitted on the `EventBus` once the
transition has completed; a rejected call emits nothing.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple
import logging
import random

from roundsharp.blackjack import wager
from roundsharp.blackjack.hand import BlackjackHand
from roundsharp.blackjack.outcome import Outcome, determine_outcome, payout_for
from roundsharp.common.shoe import Shoe
from roundsharp.errors import InvalidPhase
from roundsharp.events import EventBus, RoundEventType
from roundsharp.state.models import Round, RoundPhase

logger = logging.getLogger(__name__)

DEALER_STAND_TOTAL = 17

PendingEvents = List[Tuple[RoundEventType, Dict[str, Any]]]


@contextmanager
def _atomic(round_: Round) -> Iterator[PendingEvents]:
    """
    Run a transition so that it either completes or leaves no trace.

    Yields a list the transition appends its events to. On success the events
    are emitted in order; on any exception the round is restored from a
    snapshot taken on entry and the events are dropped.
    """
    snapshot = round_.to_dict()
    pending: PendingEvents = []
    try:
        yield pending
    except Exception:
        round_.restore(snapshot)
        raise

    event_bus = EventBus.get_instance()
    for event_type, data in pending:
        event_bus.emit(event_type, data)


def _deal_to(
    round_: Round, hand: BlackjackHand, pending: PendingEvents, hole_card: bool = False
) -> None:
    value_before = hand.value()
    card = round_.shoe.draw()
    hand.add_card(card)
    logger.debug("Round %s: %s dealt to %s", round_.id, card, hand.role.value)
    pending.append(
        (
            RoundEventType.CARD_DEALT,
            {
                "round_id": round_.id,
                "to": hand.role.value,
                "card": card.to_dict(),
                "is_hole_card": hole_card,
                "hand_value_before": value_before,
                "hand_value_after": hand.value(),
                "cards_remaining": len(round_.shoe),
            },
        )
    )


def _settle(round_: Round, outcome: Outcome, pending: PendingEvents) -> None:
    credit = payout_for(outcome, round_.wager)
    round_.outcome = outcome
    round_.bankroll += credit
    round_.phase = RoundPhase.FINISHED
    logger.info(
        "Round %s settled: %s, credited %d, bankroll %d",
        round_.id,
        outcome,
        credit,
        round_.bankroll,
    )
    pending.append(
        (
            RoundEventType.ROUND_SETTLED,
            {
                "round_id": round_.id,
                "outcome": outcome.value,
                "player_score": round_.player_score,
                "dealer_score": round_.dealer_score,
                "wager": round_.wager,
                "payout": credit,
            },
        )
    )
    pending.append(
        (
            RoundEventType.BANKROLL_UPDATED,
            {"round_id": round_.id, "bankroll": round_.bankroll},
        )
    )


class StateTransitionEngine:
    """
    Transitions for a single round.

    Each method takes a round, mutates it in place and returns it. Any method
    that raises leaves the round unchanged.
    """

    @staticmethod
    def new_round(bankroll: int) -> Round:
        """
        Create a round in the betting phase.

        Args:
            bankroll: Opening funds, a non-negative integer

        Returns:
            A new round with no wager, empty hands and an empty shoe

        Raises:
            InvalidRound: If the bankroll is negative or not an integer
        """
        round_ = Round(bankroll=bankroll).validate()
        EventBus.get_instance().emit(
            RoundEventType.ROUND_CREATED,
            {"round_id": round_.id, "bankroll": round_.bankroll},
        )
        return round_

    @staticmethod
    def place_wager(round_: Round, amount: int) -> Round:
        """
        Stake an amount on the round. See `roundsharp.blackjack.wager.place_wager`.
        """
        wager.place_wager(round_, amount)
        event_bus = EventBus.get_instance()
        event_bus.emit(
            RoundEventType.WAGER_PLACED,
            {"round_id": round_.id, "amount": amount},
        )
        event_bus.emit(
            RoundEventType.BANKROLL_UPDATED,
            {"round_id": round_.id, "bankroll": round_.bankroll},
        )
        return round_

    @staticmethod
    def deal_initial_cards(
        round_: Round, rng: Optional[random.Random] = None
    ) -> Round:
        """
        Shuffle a fresh shoe and deal two cards each, player first.

        Args:
            round_: A round in the betting phase with a wager placed
            rng: Source of randomness for the shuffle

        Raises:
            InvalidPhase: If the round is not betting or has no wager yet
        """
        round_.require_phase(RoundPhase.BETTING, "deal")
        if round_.wager <= 0:
            raise InvalidPhase("Cannot deal before a wager has been placed")

        with _atomic(round_) as pending:
            round_.shoe = Shoe.build(rng)
            pending.append(
                (
                    RoundEventType.SHUFFLE,
                    {"round_id": round_.id, "cards_remaining": len(round_.shoe)},
                )
            )

            _deal_to(round_, round_.player_hand, pending)
            _deal_to(round_, round_.dealer_hand, pending)
            _deal_to(round_, round_.player_hand, pending)
            _deal_to(round_, round_.dealer_hand, pending, hole_card=True)

            round_.phase = RoundPhase.PLAYER_TURN

        return round_

    @staticmethod
    def player_hit(round_: Round) -> Round:
        """
        Draw one card for the player, finishing the round on a bust.

        Raises:
            InvalidPhase: If it is not the player's turn
        """
        round_.require_phase(RoundPhase.PLAYER_TURN, "hit")

        with _atomic(round_) as pending:
            pending.append(
                (
                    RoundEventType.PLAYER_ACTION,
                    {"round_id": round_.id, "action": "hit"},
                )
            )
            _deal_to(round_, round_.player_hand, pending)

            if round_.player_hand.is_bust:
                pending.append(
                    (
                        RoundEventType.HAND_BUSTED,
                        {"round_id": round_.id, "player_score": round_.player_score},
                    )
                )
                _settle(round_, Outcome.DEALER_WINS, pending)

        return round_

    @staticmethod
    def stand(round_: Round, stand_total: int = DEALER_STAND_TOTAL) -> Round:
        """
        End the player's turn, play out the dealer and settle the round.

        The dealer draws while below `stand_total` and stands on any total at or
        above it, soft totals included.

        Raises:
            InvalidPhase: If it is not the player's turn
        """
        round_.require_phase(RoundPhase.PLAYER_TURN, "stand")

        with _atomic(round_) as pending:
            pending.append(
                (
                    RoundEventType.PLAYER_ACTION,
                    {"round_id": round_.id, "action": "stand"},
                )
            )
            round_.phase = RoundPhase.DEALER_TURN

            while round_.dealer_score < stand_total:
                pending.append(
                    (
                        RoundEventType.DEALER_ACTION,
                        {"round_id": round_.id, "action": "hit"},
                    )
                )
                _deal_to(round_, round_.dealer_hand, pending)

            pending.append(
                (
                    RoundEventType.DEALER_ACTION,
                    {"round_id": round_.id, "action": "stand"},
                )
            )
            _settle(
                round_,
                determine_outcome(round_.player_hand, round_.dealer_hand),
                pending,
            )

        return round_

    @staticmethod
    def finalize(round_: Round, outcome: Outcome) -> Round:
        """
        Record the outcome, apply its payout and finish the round.

        Settlement happens exactly once per round; a finished round rejects
        any further call.

        Raises:
            InvalidPhase: If the round is still betting or already finished
        """
        if round_.phase not in (RoundPhase.PLAYER_TURN, RoundPhase.DEALER_TURN):
            raise InvalidPhase(f"Cannot settle a round in the {round_.phase} phase")

        with _atomic(round_) as pending:
            _settle(round_, outcome, pending)

        return round_


new_round = StateTransitionEngine.new_round
place_wager = StateTransitionEngine.place_wager
deal_initial_cards = StateTransitionEngine.deal_initial_cards
player_hit = StateTransitionEngine.player_hit
stand = StateTransitionEngine.stand
no_more = StateTransitionEngine.stand
finalize = StateTransitionEngine.finalize
