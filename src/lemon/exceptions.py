"""Lemon Learn exceptions."""


class LemonError(Exception):
    """Base class for Lemon Learn errors."""


class MalformedDataError(LemonError):
    """Raised when persisted data cannot be decoded into lessons."""


class SlotError(LemonError):
    """Raised when a durable slot cannot be read or written."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Slot {key!r} unavailable: {reason}")
