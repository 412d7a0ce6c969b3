"""Lemon Learn: spaced-repetition lesson tracker."""

from lemon.exceptions import LemonError, MalformedDataError, SlotError
from lemon.query import due_today, search
from lemon.schedule import (
    LADDER,
    advance_on_review,
    compute_initial_due_date,
    is_due_today,
    reset_review,
)
from lemon.store import LessonStore
from lemon.types import Lesson, Status

__all__ = [
    "LADDER",
    "Lesson",
    "LessonStore",
    "LemonError",
    "MalformedDataError",
    "SlotError",
    "Status",
    "advance_on_review",
    "compute_initial_due_date",
    "due_today",
    "is_due_today",
    "reset_review",
    "search",
]
