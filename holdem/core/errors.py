"""
Typed failures raised by the Holdem core.

Every mutating operation either fully applies or raises one of these
before touching any state, so the Round stays usable after an error.
"""

from typing import Optional


class PokerError(Exception):
    """Base class for all game-level failures."""

    code = "POKER_ERROR"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.code)
        self.message = message or self.code


class DeckExhausted(PokerError):
    """A card was drawn from an empty deck."""
    code = "DECK_EXHAUSTED"


class InsufficientCards(PokerError):
    """The evaluator was asked to rank fewer than five cards."""
    code = "INSUFFICIENT_CARDS"


class RoundInProgress(PokerError):
    """A structural operation was attempted mid-hand."""
    code = "ROUND_IN_PROGRESS"


class NotEnoughPlayers(PokerError):
    """Fewer than two funded players are seated."""
    code = "NOT_ENOUGH_PLAYERS"


class NotPlayersTurn(PokerError):
    """The acting player is not the one on turn."""
    code = "NOT_PLAYERS_TURN"


class InvalidPhaseForAction(PokerError):
    """The action is not allowed in the current phase."""
    code = "INVALID_PHASE"


class InsufficientChips(PokerError):
    """The player cannot cover the requested amount."""
    code = "INSUFFICIENT_CHIPS"


class IllegalCheck(PokerError):
    """Check attempted while the player still owes chips."""
    code = "ILLEGAL_CHECK"


class BetTooSmall(PokerError):
    """Bet is not positive or is below the current bet."""
    code = "BET_TOO_SMALL"


class DuplicatePlayer(PokerError):
    """A player with this name is already seated."""
    code = "DUPLICATE_PLAYER"


class UnknownPlayer(PokerError):
    """No seated player has this name."""
    code = "UNKNOWN_PLAYER"


class TableFull(PokerError):
    """Every seat at the table is taken."""
    code = "TABLE_FULL"
