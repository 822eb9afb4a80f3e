"""Main interactive loop for the viewer.

Each iteration recomputes the scroll offset, redraws the frame, reads one
key event, and dispatches it. The loop ends when the quit key is pressed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from ..input import Key, KeyEvent, KeyMap, ctrl_key, read_key
from ..viewport import MOVEMENT_KEYS, move_cursor, scroll
from .state import Session

QUIT_KEY = ctrl_key("q")

_logger = logging.getLogger(__name__)


def build_keymap(session: Session) -> KeyMap:
    """Bind the quit key and every cursor-movement key for ``session``."""
    keymap = KeyMap()
    keymap.bind(session.request_quit, QUIT_KEY)
    for key in MOVEMENT_KEYS:
        keymap.bind(partial(move_cursor, session.viewport, session.document, key), key)
    return keymap


def refresh_screen(session: Session) -> None:
    scroll(session.viewport)
    session.renderer.refresh(session.document, session.viewport)


def run_session(
    session: Session,
    stdin_fd: int,
    read_key_fn: Callable[[int], KeyEvent] = read_key,
) -> int:
    """Run render/read/dispatch cycles until quit; return the exit status.

    On quit the screen is cleared and the cursor homed before returning 0.
    Keys with no binding are ignored.
    """
    keymap = build_keymap(session)
    while session.running:
        refresh_screen(session)
        key = read_key_fn(stdin_fd)
        if not keymap.dispatch(key) and isinstance(key, Key):
            _logger.debug("ignoring key %s", key.value)

    session.terminal.clear_screen()
    return 0
