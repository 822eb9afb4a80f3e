"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into key events.
Escape sequences are resolved with at most three follow-up reads, each
bounded by ``READ_TIMEOUT_MS``, so a lone Esc never blocks the loop.
"""

from __future__ import annotations

import logging
import os
import select
from enum import Enum

from ..errors import InputReadError

ESCAPE = b"\x1b"
READ_TIMEOUT_MS = 100

_logger = logging.getLogger(__name__)


class Key(str, Enum):
    """Named keys decoded from escape sequences."""

    ARROW_UP = "UP"
    ARROW_DOWN = "DOWN"
    ARROW_LEFT = "LEFT"
    ARROW_RIGHT = "RIGHT"
    PAGE_UP = "PAGE_UP"
    PAGE_DOWN = "PAGE_DOWN"
    HOME = "HOME"
    END = "END"
    DELETE = "DELETE"
    ESCAPE = "ESC"


# A literal one-byte ``bytes`` value, or a named ``Key``.
KeyEvent = bytes | Key

_TILDE_KEYS: dict[bytes, Key] = {
    b"1": Key.HOME,
    b"3": Key.DELETE,
    b"4": Key.END,
    b"5": Key.PAGE_UP,
    b"6": Key.PAGE_DOWN,
    b"7": Key.HOME,
    b"9": Key.END,
}

_CSI_KEYS: dict[bytes, Key] = {
    b"A": Key.ARROW_UP,
    b"B": Key.ARROW_DOWN,
    b"C": Key.ARROW_RIGHT,
    b"D": Key.ARROW_LEFT,
    b"H": Key.HOME,
    b"F": Key.END,
}

_SS3_KEYS: dict[bytes, Key] = {
    b"H": Key.HOME,
    b"F": Key.END,
}


def ctrl_key(ch: str) -> bytes:
    """Return the byte a terminal sends for Ctrl + ``ch``."""
    return bytes([ord(ch) & 0x1F])


def read_byte(fd: int, timeout_ms: int = READ_TIMEOUT_MS) -> bytes | None:
    """Read one byte, waiting at most ``timeout_ms``.

    Returns ``None`` when no byte arrived in time, ``b""`` at end of input,
    and raises ``InputReadError`` for any other read failure.
    """
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    try:
        return os.read(fd, 1)
    except (BlockingIOError, InterruptedError):
        return None
    except OSError as exc:
        raise InputReadError(f"failed to read input: {exc}") from exc


def read_key(fd: int, timeout_ms: int = READ_TIMEOUT_MS) -> KeyEvent:
    """Block until one complete key event has been read from ``fd``.

    Plain bytes are returned as-is after a single read. An escape byte is
    followed by up to three more reads; a missing or unrecognized follow-up
    yields ``Key.ESCAPE``.
    """
    while True:
        ch = read_byte(fd, timeout_ms)
        if ch is None:
            continue
        if not ch:
            raise InputReadError("input stream closed")
        break

    if ch != ESCAPE:
        return ch

    first = read_byte(fd, timeout_ms)
    if not first:
        return Key.ESCAPE
    second = read_byte(fd, timeout_ms)
    if not second:
        return Key.ESCAPE

    if first == b"[":
        if second.isdigit():
            third = read_byte(fd, timeout_ms)
            if not third:
                return Key.ESCAPE
            if third == b"~" and second in _TILDE_KEYS:
                return _TILDE_KEYS[second]
            _logger.debug("unrecognized sequence ESC [ %r %r", second, third)
            return Key.ESCAPE
        key = _CSI_KEYS.get(second)
    elif first == b"O":
        key = _SS3_KEYS.get(second)
    else:
        key = None

    if key is None:
        _logger.debug("unrecognized sequence ESC %r %r", first, second)
        return Key.ESCAPE
    return key
