"""Tests for due-today and text/tag queries."""

from __future__ import annotations

from datetime import datetime, timedelta

from lemon.query import due_today, search
from lemon.types import Lesson

TS = datetime(2024, 5, 1, 8, 0)


def _make_lesson(id: str, **kwargs) -> Lesson:  # noqa: A002
    defaults = dict(
        id=id,
        title="",
        note="",
        tag="",
        link="",
        created_at=TS,
        next_review=TS + timedelta(days=1),
    )
    defaults.update(kwargs)
    return Lesson(**defaults)


LESSONS = [
    _make_lesson("a", title="Python closures", note="late binding", tag="Python"),
    _make_lesson("b", title="Rust lifetimes", note="borrow checker", tag="rust"),
    _make_lesson("c", title="Decorators", note="functools.wraps in PYTHON", tag="python-advanced"),
    _make_lesson("d", title="Untagged", note="", tag=""),
]


class TestSearch:
    def test_empty_queries_return_everything_in_order(self) -> None:
        assert search(LESSONS) == LESSONS
        assert search(LESSONS, text_query="", tag_query="") == LESSONS

    def test_text_matches_title(self) -> None:
        assert [l.id for l in search(LESSONS, text_query="LIFETIMES")] == ["b"]

    def test_text_matches_note(self) -> None:
        assert [l.id for l in search(LESSONS, text_query="python")] == ["a", "c"]

    def test_tag_substring_case_insensitive(self) -> None:
        assert [l.id for l in search(LESSONS, tag_query="PYTH")] == ["a", "c"]

    def test_text_and_tag_combined(self) -> None:
        results = search(LESSONS, text_query="binding", tag_query="python")
        assert [l.id for l in results] == ["a"]

    def test_tag_query_excludes_untagged(self) -> None:
        assert "d" not in [l.id for l in search(LESSONS, tag_query="r")]

    def test_no_match(self) -> None:
        assert search(LESSONS, text_query="haskell") == []

    def test_does_not_mutate_input(self) -> None:
        lessons = list(LESSONS)
        search(lessons, text_query="rust")
        assert lessons == LESSONS


class TestDueToday:
    def test_filters_by_calendar_day(self) -> None:
        lessons = [
            _make_lesson("late", next_review=datetime(2024, 5, 2, 23, 59)),
            _make_lesson("early", next_review=datetime(2024, 5, 2, 0, 0)),
            _make_lesson("tomorrow", next_review=datetime(2024, 5, 3, 0, 0)),
            _make_lesson("yesterday", next_review=datetime(2024, 5, 1, 23, 59)),
        ]
        results = due_today(lessons, datetime(2024, 5, 2, 12, 0))
        assert [l.id for l in results] == ["late", "early"]

    def test_empty(self) -> None:
        assert due_today([], TS) == []

    def test_composes_with_search(self) -> None:
        lessons = [
            _make_lesson("a", tag="python", next_review=TS),
            _make_lesson("b", tag="rust", next_review=TS),
            _make_lesson("c", tag="python", next_review=TS + timedelta(days=2)),
        ]
        results = search(due_today(lessons, TS), tag_query="python")
        assert [l.id for l in results] == ["a"]
