"""Tests for logging configuration."""

from __future__ import annotations

import json
import logging
import sys

from lemon.config import Settings
from lemon.logging_config import JsonFormatter, setup_logging


def test_json_formatter():
    """JsonFormatter outputs valid JSON with expected fields."""
    fmt = JsonFormatter()
    record = logging.LogRecord(
        name="lemon.store",
        level=logging.INFO,
        pathname="store.py",
        lineno=1,
        msg="Created lesson %s",
        args=("01ABC",),
        exc_info=None,
    )
    record.lesson_id = "01ABC"  # type: ignore[attr-defined]

    data = json.loads(fmt.format(record))

    assert data["level"] == "INFO"
    assert data["logger"] == "lemon.store"
    assert data["message"] == "Created lesson 01ABC"
    assert data["lesson_id"] == "01ABC"
    assert "timestamp" in data


def test_json_formatter_no_extras():
    """JsonFormatter works without extra fields."""
    fmt = JsonFormatter()
    record = logging.LogRecord(
        name="test", level=logging.WARNING, pathname="", lineno=0,
        msg="warn", args=(), exc_info=None,
    )
    data = json.loads(fmt.format(record))
    assert data["level"] == "WARNING"
    assert "lesson_id" not in data


def test_json_formatter_exception():
    fmt = JsonFormatter()
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord(
            name="test", level=logging.ERROR, pathname="", lineno=0,
            msg="failed", args=(), exc_info=sys.exc_info(),
        )
    data = json.loads(fmt.format(record))
    assert "ValueError: boom" in data["exception"]


def test_setup_logging_json():
    root = logging.getLogger()
    setup_logging(Settings(log_format="json", log_level="DEBUG"))
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


def test_setup_logging_pretty_is_idempotent():
    root = logging.getLogger()
    setup_logging(Settings(log_format="pretty", log_level="INFO"))
    setup_logging(Settings(log_format="json", log_level="DEBUG"))
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("LEMON_DB_PATH", "/tmp/l.db")
    monkeypatch.setenv("LEMON_SLOT_KEY", "mine")
    monkeypatch.setenv("LEMON_LOG_FORMAT", "json")
    monkeypatch.setenv("LEMON_LOG_LEVEL", "debug")
    s = Settings.from_env()
    assert s.db_path == "/tmp/l.db"
    assert s.slot_key == "mine"
    assert s.log_format == "json"
    assert s.log_level == "DEBUG"


def test_settings_defaults(monkeypatch):
    for name in ("LEMON_DB_PATH", "LEMON_SLOT_KEY", "LEMON_LOG_FORMAT", "LEMON_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.db_path.endswith("lessons.db")
    assert s.slot_key == "lessons"
    assert s.log_format == "pretty"
    assert s.log_level == "WARNING"


def test_json_formatter_only_emits_known_extras():
    fmt = JsonFormatter()
    record = logging.LogRecord(
        name="lemon.store", level=logging.DEBUG, pathname="", lineno=0,
        msg="Loaded %d lessons", args=(3,), exc_info=None,
    )
    record.key = "lessons"  # type: ignore[attr-defined]
    record.count = 3  # type: ignore[attr-defined]
    data = json.loads(fmt.format(record))
    assert data["key"] == "lessons"
    assert "count" not in data
