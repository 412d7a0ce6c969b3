"""Durable key-value slots for Lemon Learn."""

from lemon.slot.base import Slot
from lemon.slot.file import FileSlot
from lemon.slot.memory import MemorySlot
from lemon.slot.sqlite import SqliteSlot

__all__ = ["Slot", "MemorySlot", "SqliteSlot", "FileSlot"]
