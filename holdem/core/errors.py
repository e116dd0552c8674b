"""
Error types for the Holdem engine.

Every failure the engine can report derives from PokerError. The
``recoverable`` flag tells callers which kind they are looking at:

- Recoverable errors (IllegalActionError) mean nothing happened and the
  player can be re-prompted. The engine never raises these; it returns them
  inside an ActionResult.
- Unrecoverable errors (bad configuration, too few cards, empty deck,
  forbidden stage transition) abort the call that triggered them.
"""


class PokerError(Exception):
    """Base class for all engine errors."""

    recoverable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidConfigurationError(PokerError, ValueError):
    """A table, hand or card set was set up with invalid parameters."""


class InsufficientCardsError(PokerError, ValueError):
    """Hand evaluation was asked to work with too few (or too many) cards."""


class EmptyDeckError(PokerError, ValueError):
    """A card was requested from an exhausted deck."""


class InvalidTransitionError(PokerError, RuntimeError):
    """The requested stage change is not part of the state machine."""


class NoEligiblePlayerError(PokerError, RuntimeError):
    """No seat is left that could take the action."""


class IllegalActionError(PokerError):
    """The action is not legal right now; state was left unchanged."""

    recoverable = True
