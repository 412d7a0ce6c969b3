"""Core data types for Lemon Learn."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Status(str, Enum):
    """Review state of a lesson."""

    NOT_REVIEWED = "not_reviewed"
    REVIEWED = "reviewed"


@dataclass(frozen=True)
class Lesson:
    """A single lesson recorded by the learner."""

    id: str
    title: str
    note: str
    tag: str
    link: str
    created_at: datetime
    next_review: datetime
    status: Status = Status.NOT_REVIEWED
    reviews: int = 0

    def __post_init__(self) -> None:
        if self.reviews < 0:
            raise ValueError(f"reviews must be non-negative, got {self.reviews}")
