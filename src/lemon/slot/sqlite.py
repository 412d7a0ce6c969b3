"""SQLite slot implementation."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from lemon.exceptions import SlotError
from lemon.slot.base import Slot

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS slots (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);
"""


class SqliteSlot(Slot):
    """SQLite-backed slot storing each key as one row."""

    def __init__(self, db_path: str) -> None:
        try:
            if db_path != ":memory:":
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(db_path)
            self._conn.executescript(_SCHEMA)
        except (sqlite3.Error, OSError) as exc:
            raise SlotError(db_path, str(exc)) from exc

    def read(self, key: str) -> Optional[str]:
        try:
            row = self._conn.execute(
                "SELECT value FROM slots WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise SlotError(key, str(exc)) from exc
        if row is None:
            return None
        return row[0]

    def write(self, key: str, value: str) -> None:
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT OR REPLACE INTO slots (key, value, updated_at) VALUES (?, ?, ?)",
                    (key, value, datetime.now(timezone.utc).isoformat()),
                )
        except sqlite3.Error as exc:
            raise SlotError(key, str(exc)) from exc

    def remove(self, key: str) -> bool:
        try:
            with self._conn:
                cursor = self._conn.execute("DELETE FROM slots WHERE key = ?", (key,))
        except sqlite3.Error as exc:
            raise SlotError(key, str(exc)) from exc
        return cursor.rowcount > 0

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
