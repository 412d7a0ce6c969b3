"""JSON file slot implementation."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from lemon.exceptions import SlotError
from lemon.slot.base import Slot

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileSlot(Slot):
    """Slot storing each key as ``<directory>/<key>.json``.

    Writes go to a temporary file first and are moved into place, so a
    crash mid-write leaves the previous value intact.
    """

    def __init__(self, directory: str) -> None:
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise SlotError(key, "invalid key")
        return self._dir / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise SlotError(key, str(exc)) from exc

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as exc:
            raise SlotError(key, str(exc)) from exc

    def remove(self, key: str) -> bool:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise SlotError(key, str(exc)) from exc
        return True
