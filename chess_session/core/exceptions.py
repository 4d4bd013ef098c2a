"""
Custom exceptions used across layers.

Everything raised on purpose by this package derives from GameError, so callers can catch one top-level type.
"""


class GameError(Exception):
    """Base class of all errors raised by the chess session engine."""


# --- DOMAIN ERRORS ---
class OutOfBoundsError(GameError):
    """Square indices outside of the board. Programming error: callers should never produce these."""


class EmptySquareError(GameError):
    """Moves were requested for a square that holds no piece."""


class IllegalMoveError(GameError):
    """Destination is not among the candidate moves of the piece."""


class NotYourTurnError(GameError):
    """Tried to move a piece of the side that is not to move."""


# --- BOUNDARY ERRORS ---
class InvalidRequestError(GameError):
    """
    Malformed request at the presentation boundary.
    NOTE: Not a ValueError on purpose: pydantic would wrap it in a ValidationError otherwise.
    """


class RepositoryError(GameError):
    """Problems with storing/retrieving sessions."""


class SessionNotFoundError(RepositoryError):
    """No session is registered under the requested ID."""
