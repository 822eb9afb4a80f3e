"""Command-line front door for kiloview.

Parses CLI options, loads the document, and dispatches into the interactive
viewer runtime. Fatal errors clear the screen, print the cause, and exit 1.
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import NoReturn

from . import __version__
from .config import LOG_LEVELS, load_empty_row_marker, load_log_level
from .document import Document, load_document
from .errors import KiloviewError
from .logs import configure_logging
from .render import screen_rows
from .runtime import run_viewer
from .terminal import CLEAR_SCREEN, CURSOR_HOME
from .viewport import Viewport

_logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_size() -> tuple[int, int]:
    """Resolve default ``--render`` size from the current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.lines), max(1, term.columns)


def die(message: str) -> NoReturn:
    """Clear the screen, report ``message`` on stderr, and exit with status 1."""
    try:
        os.write(sys.stdout.fileno(), CLEAR_SCREEN + CURSOR_HOME)
    except (OSError, ValueError):
        # The terminal itself may be what failed; do not touch it again.
        pass
    sys.stderr.write(f"kiloview: {message}\n")
    sys.stderr.flush()
    raise SystemExit(1)


def render_document_view(document: Document, rows: int, columns: int, marker: str) -> str:
    """Lay out one frame of ``document`` and return its rows as plain text."""
    viewport = Viewport(visible_rows=rows, visible_columns=columns)
    lines = screen_rows(document, viewport, marker.encode("ascii"))
    return "".join(line.decode("utf-8", errors="replace") + "\n" for line in lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kiloview",
        description="View a text file full-screen in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to view. Omit for the welcome screen.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level for the session log file (default: config value or WARNING).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write the session log to this file.")
    parser.add_argument("--render", action="store_true", help="Print one frame as plain text and exit.")
    parser.add_argument("--rows", type=_positive_int, default=None, help="Row count for --render output.")
    parser.add_argument("--cols", type=_positive_int, default=None, help="Column count for --render output.")
    parser.add_argument("--version", action="version", version=f"kiloview {__version__}")
    return parser


def main() -> None:
    """Parse CLI arguments and show the requested file.

    Without a path the viewer opens an empty document with the welcome
    banner. Any ``KiloviewError`` is fatal and ends in ``die``.
    """
    args = build_parser().parse_args()
    configure_logging(args.log_level or load_log_level(), args.log_file)
    marker = load_empty_row_marker()

    try:
        document = load_document(Path(args.path)) if args.path is not None else Document()

        if args.render:
            default_rows, default_cols = _default_render_size()
            rows = args.rows if args.rows is not None else default_rows
            cols = args.cols if args.cols is not None else default_cols
            sys.stdout.write(render_document_view(document, rows, cols, marker))
            return

        status = run_viewer(document, sys.stdin.fileno(), sys.stdout.fileno(), marker.encode("ascii"))
    except KiloviewError as exc:
        _logger.error("fatal: %s", exc)
        die(str(exc))

    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
