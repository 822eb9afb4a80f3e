"""Terminal control helpers for the viewer session.

Owns the raw-mode lifecycle: the original tty attributes are captured once,
raw attributes are installed, and the original state is restored exactly
once on every exit path. Also resolves the window size, falling back to a
cursor-position probe when the direct query is unavailable.
"""

from __future__ import annotations

import atexit
import contextlib
import logging
import os
import re
import sys
import termios

from .errors import (
    InputReadError,
    TerminalModeError,
    TerminalQueryError,
    TerminalWriteError,
    WindowSizeError,
)
from .input.reader import READ_TIMEOUT_MS, read_byte

CLEAR_SCREEN = b"\x1b[2J"
CURSOR_HOME = b"\x1b[H"
CURSOR_TO_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
CURSOR_POSITION_REQUEST = b"\x1b[6n"

# Termios attribute list indices.
IFLAG, OFLAG, CFLAG, LFLAG, ISPEED, OSPEED, CC = range(7)

_CURSOR_REPORT_RE = re.compile(rb"^\x1b\[(\d+);(\d+)$")
_CURSOR_REPORT_MAX_BYTES = 31


def raw_attributes(saved: list) -> list:
    """Return a copy of ``saved`` tty attributes configured for raw input.

    Reads return after one byte or after a 100ms timeout with no data.
    """
    attrs = [list(item) if isinstance(item, list) else item for item in saved]
    attrs[IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    attrs[OFLAG] &= ~termios.OPOST
    attrs[CFLAG] |= termios.CS8
    attrs[LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    attrs[CC][termios.VMIN] = 0
    attrs[CC][termios.VTIME] = 1
    return attrs


class TerminalController:
    """Manage raw-mode transitions and window-size queries for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state: list | None = None
        self._raw_active = False
        self._logger = logging.getLogger("kiloview.TerminalController")

    def enter_raw_mode(self) -> None:
        """Capture the current tty state, then install raw attributes.

        The restore hook is registered with ``atexit`` before any mutation so
        the original state comes back even if the process exits abruptly.
        """
        if self._raw_active:
            raise TerminalModeError("raw mode already entered")
        try:
            self._saved_tty_state = termios.tcgetattr(self.stdin_fd)
        except termios.error as exc:
            raise TerminalQueryError(f"failed to fetch terminal attributes: {exc}") from exc
        atexit.register(self.restore_mode)

        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, raw_attributes(self._saved_tty_state))
        except termios.error as exc:
            raise TerminalModeError(f"failed to set terminal raw mode: {exc}") from exc
        self._raw_active = True
        self._logger.debug("entered raw mode on fd %d", self.stdin_fd)

    def restore_mode(self) -> bool:
        """Reapply the captured tty state; later calls are no-ops.

        A failure is logged and reported on stderr but never retried, so a
        broken tty cannot send restoration into a loop.
        """
        if not self._raw_active or self._saved_tty_state is None:
            return False
        self._raw_active = False
        atexit.unregister(self.restore_mode)
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except termios.error as exc:
            self._logger.error("failed to restore terminal attributes: %s", exc)
            sys.stderr.write(f"kiloview: failed to restore terminal attributes: {exc}\n")
            return False
        self._logger.debug("restored terminal attributes on fd %d", self.stdin_fd)
        return True

    @property
    def raw_active(self) -> bool:
        return self._raw_active

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/restore."""
        self.enter_raw_mode()
        try:
            yield self
        finally:
            self.restore_mode()

    def write(self, data: bytes) -> None:
        """Write ``data`` to the terminal, continuing after short writes."""
        view = memoryview(data)
        while view:
            try:
                written = os.write(self.stdout_fd, view)
            except OSError as exc:
                raise TerminalWriteError(f"failed to write to terminal: {exc}") from exc
            view = view[written:]

    def clear_screen(self) -> None:
        self.write(CLEAR_SCREEN + CURSOR_HOME)

    def window_size(self) -> tuple[int, int]:
        """Return ``(rows, columns)`` of the terminal.

        Uses the direct size query first; when that fails or reports zero
        columns, moves the cursor to the bottom-right corner and asks the
        terminal where it ended up.
        """
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError as exc:
            self._logger.debug("direct window size query failed: %s", exc)
        else:
            if size.columns > 0 and size.lines > 0:
                self._logger.debug("window size %dx%d from size query", size.lines, size.columns)
                return size.lines, size.columns

        try:
            self.write(CURSOR_TO_BOTTOM_RIGHT)
        except TerminalWriteError as exc:
            raise WindowSizeError(f"failed to get window size: {exc}") from exc
        rows, cols = self.cursor_position()
        self._logger.debug("window size %dx%d from cursor probe", rows, cols)
        return rows, cols

    def cursor_position(self) -> tuple[int, int]:
        """Ask the terminal for the cursor position and parse its reply.

        The reply has the form ``ESC [ rows ; cols R``.
        """
        try:
            self.write(CURSOR_POSITION_REQUEST)
        except TerminalWriteError as exc:
            raise WindowSizeError(f"failed to request cursor position: {exc}") from exc

        reply = bytearray()
        while len(reply) < _CURSOR_REPORT_MAX_BYTES:
            try:
                ch = read_byte(self.stdin_fd, READ_TIMEOUT_MS)
            except InputReadError as exc:
                raise WindowSizeError(f"failed to read cursor position: {exc}") from exc
            if not ch or ch == b"R":
                break
            reply += ch

        match = _CURSOR_REPORT_RE.match(bytes(reply))
        if match is None:
            raise WindowSizeError(f"unexpected cursor position reply: {bytes(reply)!r}")
        rows, cols = int(match.group(1)), int(match.group(2))
        if rows <= 0 or cols <= 0:
            raise WindowSizeError(f"terminal reported an empty window: {rows}x{cols}")
        return rows, cols
