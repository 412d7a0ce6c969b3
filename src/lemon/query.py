"""Read-only queries over a lesson sequence."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List

from lemon.schedule import is_due_today
from lemon.types import Lesson


def due_today(lessons: Iterable[Lesson], today: datetime) -> List[Lesson]:
    """Return lessons whose next review falls on *today*'s calendar day."""
    return [l for l in lessons if is_due_today(l.next_review, today)]


def search(
    lessons: Iterable[Lesson],
    text_query: str = "",
    tag_query: str = "",
) -> List[Lesson]:
    """Filter lessons by case-insensitive substring matches.

    A lesson is kept when its tag contains *tag_query* and its title or note
    contains *text_query*. An empty query matches everything.
    """
    text = text_query.casefold()
    tag = tag_query.casefold()
    results: List[Lesson] = []
    for lesson in lessons:
        if tag and tag not in lesson.tag.casefold():
            continue
        if text and not (
            text in lesson.title.casefold() or text in lesson.note.casefold()
        ):
            continue
        results.append(lesson)
    return results
