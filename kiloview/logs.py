"""Logging setup for the interactive session.

The terminal belongs to the renderer while a session runs, so records are
written to a log file instead of stdout/stderr. The file and its directory
are only created once the first record is emitted.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "kiloview"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir(LOGGER_NAME, appauthor=False)) / "kiloview.log"


class SessionLogHandler(logging.FileHandler):
    """File handler that creates the log directory on first use."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, encoding="utf-8", delay=True)

    def _open(self):
        try:
            Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
            return super()._open()
        except OSError:
            # Unwritable log location must not take the viewer down.
            return open(os.devnull, "w", encoding="utf-8")


def configure_logging(level: str | None = None, log_file: Path | None = None) -> logging.Logger:
    """Attach one file handler to the ``kiloview`` logger and set its level.

    Calling again replaces the previous handler rather than stacking another.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level or "WARNING", logging.WARNING))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = SessionLogHandler(log_file if log_file is not None else DEFAULT_LOG_PATH)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
