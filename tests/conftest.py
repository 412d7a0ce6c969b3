"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo any setup_logging() call made during a test."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    root._lemon_configured = False  # type: ignore[attr-defined]
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    root._lemon_configured = False  # type: ignore[attr-defined]
