"""Errors raised by event sources."""


class EventSourceError(Exception):
    """Raised when events cannot be fetched from a source."""

    pass
