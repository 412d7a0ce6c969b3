"""Configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _default_db_path() -> str:
    return os.path.join(os.path.expanduser("~"), ".lemon", "lessons.db")


@dataclass
class Settings:
    """Application settings loaded from environment."""

    db_path: str = ""
    slot_key: str = "lessons"

    # Logging
    log_format: str = "pretty"  # "json" or "pretty"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            db_path=os.environ.get("LEMON_DB_PATH") or _default_db_path(),
            slot_key=os.environ.get("LEMON_SLOT_KEY", "lessons"),
            log_format=os.environ.get("LEMON_LOG_FORMAT", "pretty"),
            log_level=os.environ.get("LEMON_LOG_LEVEL", "WARNING").upper(),
        )


settings = Settings.from_env()
