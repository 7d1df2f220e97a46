"""Errors raised when an intent is rejected.

Every subclass of GameError is non-fatal: the dispatcher converts it to an
``error`` reply for the sender and persists nothing.
"""


class GameError(Exception):
    """Base class for rejected intents."""

    code = "game_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PhasePreconditionError(GameError):
    """Intent not valid in the room's current phase (not started, full...)."""

    code = "phase_precondition"


class AuthorizationError(GameError):
    """Sender may not do this (not their turn, not the host)."""

    code = "authorization_denied"


class NotFoundError(GameError):
    """Unknown player or card id."""

    code = "not_found"


class RuleViolationError(GameError):
    """Illegal play, missing color choice, calling UNO with the wrong hand."""

    code = "rule_violation"


class MalformedMessageError(GameError):
    """Inbound message could not be parsed."""

    code = "malformed_message"
