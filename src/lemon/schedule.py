"""Fixed-ladder review scheduling.

Every function takes the reference time explicitly, so nothing here reads the
wall clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import NamedTuple, Tuple

from lemon.types import Status

# Day intervals between successive reviews
LADDER: Tuple[int, ...] = (1, 3, 7, 14, 30)


class ReviewOutcome(NamedTuple):
    """Scheduling state produced by a review or a reset."""

    reviews: int
    due: datetime
    status: Status


def compute_initial_due_date(reference: datetime) -> datetime:
    """Return the due date of a freshly created lesson."""
    return reference + timedelta(days=1)


def interval_for(reviews: int) -> int:
    """Return the interval in days the next review of a lesson would apply.

    The first review lands on ``LADDER[1]``, never ``LADDER[0]``; once the
    review count passes the end of the ladder the last interval repeats.
    """
    if reviews < 0:
        raise ValueError(f"reviews must be non-negative, got {reviews}")
    return LADDER[min(reviews + 1, len(LADDER) - 1)]


def advance_on_review(reviews: int, reference: datetime) -> ReviewOutcome:
    """Advance a lesson's schedule by one completed review."""
    days = interval_for(reviews)
    return ReviewOutcome(
        reviews=reviews + 1,
        due=reference + timedelta(days=days),
        status=Status.REVIEWED,
    )


def reset_review(reference: datetime) -> ReviewOutcome:
    """Return a lesson to the pending state, whatever its history."""
    return ReviewOutcome(
        reviews=0,
        due=compute_initial_due_date(reference),
        status=Status.NOT_REVIEWED,
    )


def is_due_today(due: datetime, today: datetime) -> bool:
    """Return True if *due* falls on the same calendar day as *today*.

    An aware *due* is read in *today*'s timezone, or in local time when
    *today* is naive.
    """
    if due.tzinfo is not None:
        due = due.astimezone(today.tzinfo)
    return due.date() == today.date()
