"""Full-screen frame composition.

A frame is built in one append-only pass and handed to the terminal as a
single write. The cursor stays hidden while the rows are redrawn and is
shown again only after it has been moved to its final position.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from .. import __version__, config
from ..document import Document
from ..viewport import Viewport

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
ROW_SEPARATOR = b"\r\n"

WELCOME_MESSAGE = f"Kilo editor -- version {__version__}"
DEFAULT_EMPTY_ROW_MARKER = config.DEFAULT_EMPTY_ROW_MARKER.encode("ascii")


def cursor_position_sequence(row: int, column: int) -> bytes:
    """Return the absolute-positioning sequence for 0-based ``row``/``column``."""
    return f"\x1b[{row + 1};{column + 1}H".encode("ascii")


def welcome_row(columns: int, marker: bytes = DEFAULT_EMPTY_ROW_MARKER) -> bytes:
    """Center the welcome banner in ``columns`` cells.

    The first padding cell carries the empty-row marker so the left edge
    stays consistent with the rows around it.
    """
    banner = WELCOME_MESSAGE.encode("ascii")[:columns]
    padding = (columns - len(banner)) // 2
    out = bytearray()
    if padding:
        out += marker
        padding -= 1
    out += b" " * padding
    out += banner
    return bytes(out)


def screen_rows(
    document: Document,
    viewport: Viewport,
    marker: bytes = DEFAULT_EMPTY_ROW_MARKER,
) -> Iterator[bytes]:
    """Yield the plain content of each visible screen row, top to bottom."""
    banner_row = viewport.visible_rows // 3
    for screen_row in range(viewport.visible_rows):
        file_row = screen_row + viewport.row_offset
        if file_row < document.num_rows:
            yield document.rows[file_row].chars[: viewport.visible_columns]
        elif document.is_empty() and screen_row == banner_row:
            yield welcome_row(viewport.visible_columns, marker)
        else:
            yield marker


def _compose(out: bytearray, document: Document, viewport: Viewport, marker: bytes) -> None:
    out += HIDE_CURSOR
    out += CURSOR_HOME
    last_row = viewport.visible_rows - 1
    for index, row in enumerate(screen_rows(document, viewport, marker)):
        out += row
        out += CLEAR_LINE
        if index < last_row:
            out += ROW_SEPARATOR
    out += cursor_position_sequence(*viewport.screen_cursor)
    out += SHOW_CURSOR


def render_frame(
    document: Document,
    viewport: Viewport,
    marker: bytes = DEFAULT_EMPTY_ROW_MARKER,
) -> bytes:
    """Return the complete byte stream that redraws one frame."""
    out = bytearray()
    _compose(out, document, viewport, marker)
    return bytes(out)


class FrameRenderer:
    """Render frames into one reusable buffer and flush each in one write."""

    def __init__(self, write: Callable[[bytes], None], marker: bytes = DEFAULT_EMPTY_ROW_MARKER) -> None:
        self._write = write
        self._marker = marker
        self._buffer = bytearray()

    def refresh(self, document: Document, viewport: Viewport) -> int:
        """Redraw the screen and return the number of bytes written."""
        self._buffer.clear()
        _compose(self._buffer, document, viewport, self._marker)
        self._write(bytes(self._buffer))
        return len(self._buffer)
