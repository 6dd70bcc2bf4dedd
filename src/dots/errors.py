class DotsError(Exception):
    """Base class for errors raised by the game core."""


class InvalidStateError(DotsError):
    """Raised when an operation is requested in a round phase that forbids it."""
