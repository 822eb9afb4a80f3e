"""Runtime composition layer for kiloview.

Enters raw mode, sizes the viewport from the terminal, and runs the loop.
Raw mode is released on every exit path before control returns.
"""

from __future__ import annotations

import logging

from ..document import Document
from ..render import DEFAULT_EMPTY_ROW_MARKER, FrameRenderer
from ..terminal import TerminalController
from ..viewport import Viewport
from .loop import run_session
from .state import Session

_logger = logging.getLogger(__name__)


def run_viewer(
    document: Document,
    stdin_fd: int,
    stdout_fd: int,
    marker: bytes = DEFAULT_EMPTY_ROW_MARKER,
) -> int:
    """Show ``document`` full-screen until the user quits."""
    terminal = TerminalController(stdin_fd, stdout_fd)
    with terminal.raw_mode():
        rows, columns = terminal.window_size()
        _logger.info("starting session at %dx%d", rows, columns)
        session = Session(
            document=document,
            viewport=Viewport(visible_rows=rows, visible_columns=columns),
            terminal=terminal,
            renderer=FrameRenderer(terminal.write, marker),
        )
        return run_session(session, stdin_fd)
