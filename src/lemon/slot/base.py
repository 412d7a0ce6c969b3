"""Abstract slot interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class Slot(ABC):
    """Abstract base class for durable key-value slots.

    A slot maps a name to one serialized string. Backends raise SlotError
    when the underlying medium fails.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Remove key. Returns True if it existed."""

    def close(self) -> None:
        """Release any resources held by the slot."""

    def __enter__(self) -> "Slot":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
