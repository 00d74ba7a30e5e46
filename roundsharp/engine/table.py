"""
Round service.

`RoundTable` is the layer a web handler or console front end talks to. It
keeps rounds by id, works out the opening balance of each new round from the
last finished one, and makes sure only one mutation per round is in flight at
any time.
"""

from typing import Any, Dict, List, Optional
import logging
import random
import threading

from roundsharp.errors import RoundError, RoundNotFound
from roundsharp.state import Round, StateTransitionEngine
from roundsharp.state.transitions import DEALER_STAND_TOTAL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "default_bankroll": 1000,
    "dealer_stand_total": DEALER_STAND_TOTAL,
    "seed": None,
}


class RoundTable:
    """
    In-memory owner of rounds.

    Rounds are kept in creation order. Every mutating call takes the round's
    own lock, so concurrent callers acting on the same round are serialized
    while different rounds proceed independently.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the table.

        Args:
            config: Configuration options, merged over DEFAULT_CONFIG
            rng: Source of randomness for every shuffle. Built from
                 config["seed"] when not given.
        """
        self.config = {**DEFAULT_CONFIG, **(config or {})}
        self.default_bankroll: int = self.config["default_bankroll"]
        self.dealer_stand_total: int = self.config["dealer_stand_total"]
        self.rng = rng if rng is not None else random.Random(self.config["seed"])

        self._rounds: Dict[str, Round] = {}
        self._order: List[str] = []
        self._round_locks: Dict[str, threading.RLock] = {}
        self._table_lock = threading.RLock()

    # Balance

    def resolve_balance(self, new_game: bool = False) -> int:
        """
        Work out the opening bankroll for the next round.

        Args:
            new_game: Start over from the default bankroll

        Returns:
            The bankroll of the most recently finished round, or the default
            bankroll when starting over, when no round has finished yet, or
            when the last finished round ended at zero
        """
        if new_game:
            return self.default_bankroll

        last = self.last_finished()
        if last is None or last.bankroll <= 0:
            return self.default_bankroll
        return last.bankroll

    def wallet(self) -> int:
        """The balance shown to the player between rounds."""
        return self.resolve_balance()

    def last_finished(self) -> Optional[Round]:
        with self._table_lock:
            for round_id in reversed(self._order):
                round_ = self._rounds[round_id]
                if round_.is_finished:
                    return round_
        return None

    # Rounds

    def open_round(self, bet: int, new_game: bool = False) -> Round:
        """
        Start a round: resolve the balance, place the bet and deal.

        The round is only kept once the bet has been accepted and the cards
        dealt.

        Args:
            bet: Amount to wager
            new_game: Start over from the default bankroll

        Raises:
            InvalidWager: If the bet is not positive
            InsufficientFunds: If the bet exceeds the resolved balance
        """
        round_ = StateTransitionEngine.new_round(self.resolve_balance(new_game))
        try:
            StateTransitionEngine.place_wager(round_, bet)
            StateTransitionEngine.deal_initial_cards(round_, self.rng)
        except RoundError as exc:
            logger.warning("Could not open round with bet %r: %s", bet, exc)
            raise

        with self._table_lock:
            self._rounds[round_.id] = round_
            self._order.append(round_.id)
            self._round_locks[round_.id] = threading.RLock()
        return round_

    def get(self, round_id: str) -> Round:
        with self._table_lock:
            try:
                return self._rounds[round_id]
            except KeyError:
                raise RoundNotFound(f"No round with id {round_id!r}") from None

    def hit(self, round_id: str) -> Round:
        """Draw a card for the player in the given round."""
        round_ = self.get(round_id)
        with self._lock_for(round_id):
            return self._apply(round_, StateTransitionEngine.player_hit)

    def stand(self, round_id: str) -> Round:
        """End the player's turn in the given round and settle it."""
        round_ = self.get(round_id)
        with self._lock_for(round_id):
            return self._apply(
                round_,
                lambda r: StateTransitionEngine.stand(r, self.dealer_stand_total),
            )

    no_more = stand

    def rounds(self) -> List[Round]:
        """All rounds, oldest first."""
        with self._table_lock:
            return [self._rounds[round_id] for round_id in self._order]

    def _lock_for(self, round_id: str) -> threading.RLock:
        with self._table_lock:
            return self._round_locks[round_id]

    @staticmethod
    def _apply(round_: Round, transition) -> Round:
        try:
            return transition(round_)
        except RoundError as exc:
            logger.warning("Round %s rejected an action: %s", round_.id, exc)
            raise
