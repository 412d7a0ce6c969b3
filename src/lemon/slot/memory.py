"""In-memory slot implementation for testing."""

from __future__ import annotations

from typing import Dict, Optional

from lemon.slot.base import Slot


class MemorySlot(Slot):
    """In-memory slot backed by a dict. Useful for testing."""

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> bool:
        return self._values.pop(key, None) is not None
