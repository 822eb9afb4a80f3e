"""Cursor and vertical scroll state for the visible terminal grid.

The cursor row is document-absolute and may sit one row past the last
content row. The cursor column is clamped to the screen width only; it is
not tied to the length of the row under the cursor.
"""

from __future__ import annotations

from dataclasses import dataclass

from .document import Document
from .input.reader import Key, KeyEvent

MOVEMENT_KEYS: frozenset[Key] = frozenset(
    {
        Key.ARROW_UP,
        Key.ARROW_DOWN,
        Key.ARROW_LEFT,
        Key.ARROW_RIGHT,
        Key.PAGE_UP,
        Key.PAGE_DOWN,
        Key.HOME,
        Key.END,
    }
)


@dataclass
class Viewport:
    visible_rows: int
    visible_columns: int
    cursor_row: int = 0
    cursor_column: int = 0
    row_offset: int = 0

    def __post_init__(self) -> None:
        if self.visible_rows <= 0 or self.visible_columns <= 0:
            raise ValueError(f"viewport must be non-empty, got {self.visible_rows}x{self.visible_columns}")

    @property
    def screen_cursor(self) -> tuple[int, int]:
        """Return the cursor as 0-based ``(row, column)`` screen coordinates."""
        return self.cursor_row - self.row_offset, self.cursor_column


def recompute_scroll(viewport: Viewport) -> int:
    """Return the row offset that keeps the cursor row on screen.

    Pure: only the cursor row, the current offset, and the visible row
    count are consulted, so applying the result twice changes nothing.
    """
    row_offset = viewport.row_offset
    if viewport.cursor_row < row_offset:
        row_offset = viewport.cursor_row
    if viewport.cursor_row >= row_offset + viewport.visible_rows:
        row_offset = viewport.cursor_row - viewport.visible_rows + 1
    return row_offset


def scroll(viewport: Viewport) -> None:
    viewport.row_offset = recompute_scroll(viewport)


def _step(viewport: Viewport, document: Document, key: Key) -> None:
    if key is Key.ARROW_LEFT:
        if viewport.cursor_column > 0:
            viewport.cursor_column -= 1
    elif key is Key.ARROW_RIGHT:
        if viewport.cursor_column < viewport.visible_columns - 1:
            viewport.cursor_column += 1
    elif key is Key.ARROW_UP:
        if viewport.cursor_row > 0:
            viewport.cursor_row -= 1
    elif key is Key.ARROW_DOWN:
        if viewport.cursor_row < document.num_rows:
            viewport.cursor_row += 1


def move_cursor(viewport: Viewport, document: Document, key: KeyEvent) -> bool:
    """Apply one movement key to the cursor.

    Page keys repeat a single Up/Down step ``visible_rows`` times so each
    step is clamped the same way as an arrow key. Returns ``False`` when
    ``key`` is not a movement key.
    """
    if key not in MOVEMENT_KEYS:
        return False

    if key is Key.PAGE_UP or key is Key.PAGE_DOWN:
        step = Key.ARROW_UP if key is Key.PAGE_UP else Key.ARROW_DOWN
        for _ in range(viewport.visible_rows):
            _step(viewport, document, step)
    elif key is Key.HOME:
        viewport.cursor_column = 0
    elif key is Key.END:
        viewport.cursor_column = viewport.visible_columns - 1
    else:
        _step(viewport, document, key)
    return True
