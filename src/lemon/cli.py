"""Minimal CLI for Lemon Learn using argparse."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional, Sequence

from lemon.config import settings
from lemon.logging_config import setup_logging
from lemon.schedule import interval_for
from lemon.store import LessonStore
from lemon.types import Lesson


def _get_store(db: Optional[str] = None) -> LessonStore:
    return LessonStore(db_path=db or settings.db_path, key=settings.slot_key)


def _print_table(lessons: List[Lesson]) -> None:
    print(f"{'ID':<28} {'Title':<30} {'Tag':<15} {'Status':<13} {'Next review'}")
    print("-" * 100)
    for l in lessons:
        print(
            f"{l.id:<28} {l.title[:30]:<30} {l.tag[:15]:<15} "
            f"{l.status.value:<13} {l.next_review.date().isoformat()}"
        )


def cmd_add(args: argparse.Namespace) -> None:
    with _get_store(args.db) as store:
        lesson = store.create(
            title=args.title,
            note=args.note,
            tag=args.tag,
            link=args.link,
        )
    print(lesson.id)


def cmd_list(args: argparse.Namespace) -> None:
    with _get_store(args.db) as store:
        lessons = store.list()
    if args.limit is not None:
        lessons = lessons[: args.limit]
    if not lessons:
        print("No lessons.")
        return
    _print_table(lessons)


def cmd_today(args: argparse.Namespace) -> None:
    with _get_store(args.db) as store:
        lessons = store.due_today()
    if not lessons:
        print("Nothing to review today.")
        return
    for l in lessons:
        print(f"{l.id}  {l.title}")
        if l.tag:
            print(f"  Tag:  {l.tag}")
        if l.note:
            print(f"  Note: {l.note}")
        if l.link:
            print(f"  Link: {l.link}")
        print(f"  Next step: +{interval_for(l.reviews)} days after review")
        print()


def cmd_review(args: argparse.Namespace) -> None:
    with _get_store(args.db) as store:
        lesson = store.review(args.lesson_id)
    if lesson is None:
        print(f"Lesson not found: {args.lesson_id}", file=sys.stderr)
        sys.exit(1)
    print(f"Reviewed {lesson.reviews}x, next review {lesson.next_review.date().isoformat()}")


def cmd_reset(args: argparse.Namespace) -> None:
    with _get_store(args.db) as store:
        lesson = store.reset(args.lesson_id)
    if lesson is None:
        print(f"Lesson not found: {args.lesson_id}", file=sys.stderr)
        sys.exit(1)
    print(f"Reset, next review {lesson.next_review.date().isoformat()}")


def cmd_delete(args: argparse.Namespace) -> None:
    with _get_store(args.db) as store:
        existed = store.delete(args.lesson_id)
    if not existed:
        print(f"Lesson not found: {args.lesson_id}", file=sys.stderr)
        sys.exit(1)
    print(f"Lesson {args.lesson_id} deleted.")


def cmd_search(args: argparse.Namespace) -> None:
    with _get_store(args.db) as store:
        lessons = store.search(text_query=args.text, tag_query=args.tag)
    if not lessons:
        print("No results.")
        return
    _print_table(lessons)


def cmd_export(args: argparse.Namespace) -> None:
    with _get_store(args.db) as store:
        lessons = store.export_lessons(path=args.output)
    if args.output:
        print(f"Exported {len(lessons)} lessons to {args.output}")
    else:
        payload = {"version": 1, "lessons": lessons}
        print(json.dumps(payload, indent=2, ensure_ascii=False))


def cmd_import(args: argparse.Namespace) -> None:
    with _get_store(args.db) as store:
        count = store.import_lessons(path=args.file)
    print(f"Imported {count} lessons from {args.file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lemon",
        description="Lemon Learn: spaced-repetition lesson tracker",
    )
    parser.add_argument("--db", default=None, help="Path to SQLite database")

    sub = parser.add_subparsers(dest="command")

    # add
    p = sub.add_parser("add", help="Record a new lesson")
    p.add_argument("--title", default="")
    p.add_argument("--note", default="")
    p.add_argument("--tag", default="")
    p.add_argument("--link", default="")

    # list
    p = sub.add_parser("list", help="List lessons, newest first")
    p.add_argument("--limit", type=int, default=None)

    # today
    sub.add_parser("today", help="Show lessons due today")

    # review / reset / delete
    for name, text in (
        ("review", "Mark a lesson reviewed"),
        ("reset", "Reset a lesson's review schedule"),
        ("delete", "Delete a lesson"),
    ):
        p = sub.add_parser(name, help=text)
        p.add_argument("lesson_id", help="Lesson ID")

    # search
    p = sub.add_parser("search", help="Search lessons by text and tag")
    p.add_argument("text", nargs="?", default="", help="Text in title or note")
    p.add_argument("--tag", default="", help="Text in tag")

    # export
    p = sub.add_parser("export", help="Export lessons to JSON")
    p.add_argument("-o", "--output", default=None, help="Output file path")

    # import
    p = sub.add_parser("import", help="Import lessons from JSON")
    p.add_argument("file", help="JSON file to import")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging()

    handlers = {
        "add": cmd_add,
        "list": cmd_list,
        "today": cmd_today,
        "review": cmd_review,
        "reset": cmd_reset,
        "delete": cmd_delete,
        "search": cmd_search,
        "export": cmd_export,
        "import": cmd_import,
    }
    handlers[args.command](args)


if __name__ == "__main__":
    main()
