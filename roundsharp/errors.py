"""
Exceptions raised by the round engine.

Every failure is raised synchronously and leaves the round it was raised for
exactly as it was before the call.
"""


class RoundError(Exception):
    """Base class for all round engine errors."""

    pass


class InvalidWager(RoundError, ValueError):
    """Raised when a wager amount is not a positive integer."""

    pass


class InsufficientFunds(RoundError):
    """Raised when a wager exceeds the round's bankroll."""

    pass


class InvalidPhase(RoundError):
    """Raised when an operation is invoked outside the phase it requires."""

    pass


class ExhaustedShoe(RoundError, IndexError):
    """Raised when a card is drawn from an empty shoe."""

    pass


class InvalidRound(RoundError, ValueError):
    """Raised when a round's fields break its invariants."""

    pass


class RoundNotFound(RoundError, KeyError):
    """Raised when a round id is not known to the table."""

    pass
