"""
Errors raised by the game services.

Every operation either succeeds or raises one of these. Controllers map them
to HTTP status codes; nothing in the core retries.
"""


class GameError(Exception):
    """Base exception for game errors."""
    pass


class InvalidArgumentError(GameError):
    """Raised when input is malformed (e.g. non-positive duration)."""
    pass


class NotFoundError(GameError):
    """Raised when a referenced round or user does not exist."""
    pass


class InvalidStateError(GameError):
    """Raised when the operation is not valid for the round's current status."""
    pass


class NotStartedError(GameError):
    """Raised when a guess arrives before the round's start_time."""
    pass


class WindowClosedError(GameError):
    """Raised when a guess arrives at or after the round's end_time."""
    pass


class DuplicateSubmissionError(GameError):
    """Raised when a guess or check-in is already recorded for the key."""
    pass


class AlreadyCheckedInError(DuplicateSubmissionError):
    """Raised when the user already checked in on the current day."""
    pass


class StorageFailureError(GameError):
    """Raised when the database rejects a write."""
    pass
