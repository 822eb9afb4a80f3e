"""Persistent JSON config helpers.

Stores the log level and the empty-row marker used by the renderer.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "kiloview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_EMPTY_ROW_MARKER = "~"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_log_level() -> str | None:
    """Return the configured log level name, or ``None`` when unset/invalid."""
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return None
    normalized = value.strip().upper()
    return normalized if normalized in LOG_LEVELS else None


def load_empty_row_marker() -> str:
    """Return the marker drawn on rows past the end of the document.

    Only a single printable ASCII character is accepted.
    """
    value = load_config().get("empty_row_marker")
    if isinstance(value, str) and len(value) == 1 and " " < value < "\x7f":
        return value
    return DEFAULT_EMPTY_ROW_MARKER
