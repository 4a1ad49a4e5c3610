from __future__ import annotations


class ScratchcardError(Exception):
    """Base class for every error raised by the ticket engine."""

    code = "SCRATCHCARD_ERROR"


class MalformedScenario(ScratchcardError, ValueError):
    code = "MALFORMED_SCENARIO"


class UnknownPayout(ScratchcardError, LookupError):
    code = "UNKNOWN_PAYOUT"


class DeclinedOperation(ScratchcardError):
    """A request the player made that the engine refuses without changing state."""

    code = "DECLINED"


class InvalidPrice(DeclinedOperation):
    code = "INVALID_PRICE"


class InsufficientFunds(DeclinedOperation):
    code = "INSUFFICIENT_FUNDS"


class InvalidIndex(DeclinedOperation):
    code = "INVALID_INDEX"


class AlreadyRevealed(DeclinedOperation):
    code = "ALREADY_REVEALED"


class InvalidPhaseTransition(DeclinedOperation):
    code = "INVALID_PHASE_TRANSITION"
