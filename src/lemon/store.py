"""LessonStore: owner of the lesson collection."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from ulid import ULID

from lemon import query
from lemon.codec import (
    FORMAT_VERSION,
    decode_lessons,
    dict_to_lesson,
    encode_lessons,
    lesson_to_dict,
    unwrap,
)
from lemon.exceptions import MalformedDataError, SlotError
from lemon.schedule import (
    ReviewOutcome,
    advance_on_review,
    compute_initial_due_date,
    reset_review,
)
from lemon.slot.base import Slot
from lemon.slot.memory import MemorySlot
from lemon.slot.sqlite import SqliteSlot
from lemon.types import Lesson, Status

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_KEY = "lessons"


def _local_now() -> datetime:
    """Return the current local time as an aware datetime."""
    return datetime.now().astimezone()


class LessonStore:
    """Lesson collection with spaced-repetition scheduling.

    Usage::

        store = LessonStore()
        lesson = store.create(title="Closures", tag="python")
        for due in store.due_today():
            store.review(due.id)

    The collection is ordered newest first and written in full to the slot
    after every mutation.
    """

    def __init__(
        self,
        slot: Optional[Slot] = None,
        key: str = DEFAULT_KEY,
        clock: Optional[Clock] = None,
        db_path: Optional[str] = None,
    ) -> None:
        if slot is None:
            if db_path is None:
                from lemon.config import settings
                db_path = settings.db_path
            try:
                slot = SqliteSlot(db_path)
            except SlotError:
                logger.warning(
                    "Cannot open %s, keeping lessons in memory only",
                    db_path,
                    exc_info=True,
                )
                slot = MemorySlot()
        self._slot = slot
        self._key = key
        self._clock = clock or _local_now
        self._lessons: List[Lesson] = []
        self.load()

    def close(self) -> None:
        """Close the underlying slot."""
        self._slot.close()

    def __enter__(self) -> "LessonStore":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def load(self) -> None:
        """Replace the in-memory collection with the slot's contents.

        An absent, unreadable or malformed slot yields an empty collection.
        """
        try:
            raw = self._slot.read(self._key)
        except SlotError:
            logger.warning("Cannot read lessons, starting empty", exc_info=True)
            raw = None

        lessons: List[Lesson] = []
        if raw:
            try:
                lessons = decode_lessons(raw)
            except MalformedDataError:
                logger.warning(
                    "Discarding malformed lesson data",
                    extra={"key": self._key},
                    exc_info=True,
                )

        seen = set()
        self._lessons = []
        for lesson in lessons:
            if lesson.id in seen:
                logger.warning(
                    "Dropping duplicate lesson %s", lesson.id,
                    extra={"lesson_id": lesson.id},
                )
                continue
            seen.add(lesson.id)
            self._lessons.append(lesson)
        logger.debug("Loaded %d lessons", len(self._lessons))

    def save(self) -> None:
        """Write the full collection to the slot.

        A failing slot is logged and otherwise ignored, so the session keeps
        working from memory.
        """
        try:
            self._slot.write(self._key, encode_lessons(self._lessons))
        except SlotError:
            logger.warning("Cannot save lessons, changes are kept in memory only", exc_info=True)

    def create(
        self,
        title: str = "",
        note: str = "",
        tag: str = "",
        link: str = "",
    ) -> Lesson:
        """Record a new lesson, due one day from now."""
        now = self._clock()
        lesson = Lesson(
            id=self._new_id(),
            title=title,
            note=note,
            tag=tag,
            link=link,
            created_at=now,
            next_review=compute_initial_due_date(now),
            status=Status.NOT_REVIEWED,
            reviews=0,
        )
        self._lessons.insert(0, lesson)
        self.save()
        logger.info("Created lesson %s", lesson.id, extra={"lesson_id": lesson.id})
        return lesson

    def review(self, lesson_id: str) -> Optional[Lesson]:
        """Mark a lesson reviewed and push its due date up the ladder.

        Returns the updated lesson, or None if the id is unknown.
        """
        return self._apply(
            lesson_id, lambda lesson, now: advance_on_review(lesson.reviews, now)
        )

    def reset(self, lesson_id: str) -> Optional[Lesson]:
        """Return a lesson to the pending state, due one day from now."""
        return self._apply(lesson_id, lambda lesson, now: reset_review(now))

    def delete(self, lesson_id: str) -> bool:
        """Delete a lesson by ID. Returns True if it existed."""
        before = len(self._lessons)
        self._lessons = [l for l in self._lessons if l.id != lesson_id]
        existed = len(self._lessons) < before
        self.save()
        if not existed:
            logger.debug("Delete of unknown lesson %s ignored", lesson_id, extra={"lesson_id": lesson_id})
        return existed

    def _apply(
        self,
        lesson_id: str,
        transition: Callable[[Lesson, datetime], ReviewOutcome],
    ) -> Optional[Lesson]:
        updated: Optional[Lesson] = None
        for i, lesson in enumerate(self._lessons):
            if lesson.id == lesson_id:
                outcome = transition(lesson, self._clock())
                updated = replace(
                    lesson,
                    reviews=outcome.reviews,
                    next_review=outcome.due,
                    status=outcome.status,
                )
                self._lessons[i] = updated
                break
        self.save()
        if updated is None:
            logger.debug("Unknown lesson %s ignored", lesson_id, extra={"lesson_id": lesson_id})
        return updated

    def _new_id(self) -> str:
        existing = {l.id for l in self._lessons}
        lesson_id = str(ULID())
        while lesson_id in existing:
            lesson_id = str(ULID())
        return lesson_id

    def get(self, lesson_id: str) -> Optional[Lesson]:
        """Get a lesson by ID."""
        for lesson in self._lessons:
            if lesson.id == lesson_id:
                return lesson
        return None

    def list(self) -> List[Lesson]:
        """Return a snapshot of all lessons, newest first."""
        return list(self._lessons)

    def due_today(self, today: Optional[datetime] = None) -> List[Lesson]:
        """Return lessons due on *today* (defaults to now)."""
        return query.due_today(self._lessons, today or self._clock())

    def search(self, text_query: str = "", tag_query: str = "") -> List[Lesson]:
        """Filter lessons by title/note text and tag."""
        return query.search(self._lessons, text_query=text_query, tag_query=tag_query)

    def export_lessons(self, path: Optional[str] = None) -> List[Dict[str, Any]]:
        """Export all lessons as JSON-serializable dicts.

        If *path* is given, writes ``{"version": 1, "lessons": [...]}``
        to that file and returns the lesson list.
        """
        serialized = [lesson_to_dict(l) for l in self._lessons]
        if path is not None:
            payload: Dict[str, Any] = {
                "version": FORMAT_VERSION,
                "lessons": serialized,
            }
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        return serialized

    def import_lessons(
        self,
        path: Optional[str] = None,
        data: Optional[Union[List[Dict[str, Any]], Dict[str, Any]]] = None,
    ) -> int:
        """Import lessons from a file or data structure.

        Accepts either the wrapped format ``{"version": 1, "lessons": [...]}``
        or a raw list of lesson dicts. Skips duplicates (by ID) and records
        that cannot be decoded; records without an ID get a fresh one.

        Returns the number of lessons actually imported.
        """
        if path is not None:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

        if data is None:
            raise ValueError("Either path or data must be provided")

        existing_ids = {l.id for l in self._lessons}
        imported: List[Lesson] = []
        for item in unwrap(data):
            if isinstance(item, dict) and not item.get("id"):
                item = {**item, "id": self._new_id()}
            try:
                lesson = dict_to_lesson(item)
            except MalformedDataError:
                logger.warning("Skipping malformed lesson record", exc_info=True)
                continue
            if lesson.id in existing_ids:
                continue
            existing_ids.add(lesson.id)
            imported.append(lesson)

        self._lessons.extend(imported)
        self.save()
        logger.info("Imported %d lessons", len(imported))
        return len(imported)
