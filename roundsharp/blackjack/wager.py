"""
Wager placement against a round's bankroll.
"""

import logging

from roundsharp.errors import InsufficientFunds, InvalidPhase, InvalidWager
from roundsharp.state.models import Round, RoundPhase

logger = logging.getLogger(__name__)


def place_wager(round_: Round, amount: int) -> Round:
    """
    Stake `amount` on the round and debit it from the bankroll.

    This is the only place the bankroll is debited; all later credits happen
    when the round is settled.

    Args:
        round_: A round in the betting phase with no wager yet
        amount: The stake, a positive integer no larger than the bankroll

    Returns:
        The same round, updated

    Raises:
        InvalidPhase: If the round is not in the betting phase or already has a wager
        InvalidWager: If the amount is not a positive integer
        InsufficientFunds: If the amount exceeds the bankroll
    """
    round_.require_phase(RoundPhase.BETTING, "place a wager")
    if round_.wager > 0:
        raise InvalidPhase("A wager has already been placed for this round")
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidWager(f"Wager must be greater than 0, got {amount!r}")
    if amount > round_.bankroll:
        raise InsufficientFunds(
            f"Insufficient balance: wager {amount} exceeds bankroll {round_.bankroll}"
        )

    round_.wager = amount
    round_.bankroll -= amount
    logger.info(
        "Round %s: wager %d placed, bankroll now %d", round_.id, amount, round_.bankroll
    )
    return round_
