"""Custom exceptions. Every error raised on purpose by this project derives from GameError."""


class GameError(Exception):
    """Top-level exception for anything that went wrong while handling a match."""


class InvalidPlayerCountError(GameError):
    """Player count outside of the supported range."""


class GameStateError(GameError):
    """Action not allowed in the current phase of the match."""


class IllegalMoveError(GameError):
    """Placement that is out of bounds, on an occupied cell, or that captures nothing."""


class IllegalPassError(GameError):
    """Pass requested while the player still has a legal placement."""


class InvalidRequestError(GameError, ValueError):
    """Request data that cannot be interpreted. (ValueError so pydantic reports it as a validation error.)"""


class RepositoryError(GameError):
    """Persistence layer could not find / store a match."""
