"""Wire format for persisted lesson collections."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List

from lemon.exceptions import MalformedDataError
from lemon.types import Lesson, Status

FORMAT_VERSION = 1

# Status strings written by the original browser app
_LEGACY_STATUS = {"not reviewed": Status.NOT_REVIEWED}


def lesson_to_dict(lesson: Lesson) -> Dict[str, Any]:
    """Serialize a Lesson to a JSON-compatible record."""
    return {
        "id": lesson.id,
        "title": lesson.title,
        "note": lesson.note,
        "tag": lesson.tag,
        "link": lesson.link,
        "createdAt": lesson.created_at.isoformat(),
        "status": lesson.status.value,
        "reviews": lesson.reviews,
        "nextReview": lesson.next_review.isoformat(),
    }


def dict_to_lesson(data: Dict[str, Any]) -> Lesson:
    """Deserialize a record to a Lesson.

    Raises MalformedDataError if the record does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise MalformedDataError(f"lesson record must be an object, got {type(data).__name__}")
    try:
        lesson_id = data["id"]
        if not isinstance(lesson_id, str) or not lesson_id:
            raise MalformedDataError(f"invalid lesson id: {lesson_id!r}")
        reviews = data.get("reviews", 0)
        if isinstance(reviews, bool) or not isinstance(reviews, int):
            raise MalformedDataError(f"invalid review count: {reviews!r}")
        return Lesson(
            id=lesson_id,
            title=_text(data, "title"),
            note=_text(data, "note"),
            tag=_text(data, "tag"),
            link=_text(data, "link"),
            created_at=_parse_timestamp(data["createdAt"]),
            next_review=_parse_timestamp(data["nextReview"]),
            status=_parse_status(data.get("status", Status.NOT_REVIEWED.value)),
            reviews=reviews,
        )
    except KeyError as exc:
        raise MalformedDataError(f"lesson record missing field {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise MalformedDataError(str(exc)) from exc


def encode_lessons(lessons: List[Lesson]) -> str:
    """Encode an ordered collection as a JSON array string."""
    return json.dumps([lesson_to_dict(l) for l in lessons], ensure_ascii=False)


def decode_lessons(raw: str) -> List[Lesson]:
    """Decode a JSON payload into an ordered collection.

    Accepts either a raw array of records or the wrapped export format
    ``{"version": 1, "lessons": [...]}``.
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedDataError(f"payload is not valid JSON: {exc}") from exc
    records = unwrap(payload)
    return [dict_to_lesson(item) for item in records]


def unwrap(payload: Any) -> List[Any]:
    """Return the list of records from a raw or wrapped payload."""
    if isinstance(payload, dict):
        payload = payload.get("lessons")
    if not isinstance(payload, list):
        raise MalformedDataError("payload must be a list of lesson records")
    return payload


def _text(data: Dict[str, Any], name: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedDataError(f"field {name!r} must be text, got {type(value).__name__}")
    return value


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise MalformedDataError(f"timestamp must be a string, got {value!r}")
    # JavaScript's toISOString() uses a trailing Z
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _parse_status(value: Any) -> Status:
    if isinstance(value, str) and value in _LEGACY_STATUS:
        return _LEGACY_STATUS[value]
    return Status(value)
