"""Rendering engine for the full-screen document view."""

from .frame import (
    CLEAR_LINE,
    CURSOR_HOME,
    DEFAULT_EMPTY_ROW_MARKER,
    HIDE_CURSOR,
    SHOW_CURSOR,
    WELCOME_MESSAGE,
    FrameRenderer,
    cursor_position_sequence,
    render_frame,
    screen_rows,
    welcome_row,
)

__all__ = [
    "CLEAR_LINE",
    "CURSOR_HOME",
    "DEFAULT_EMPTY_ROW_MARKER",
    "HIDE_CURSOR",
    "SHOW_CURSOR",
    "WELCOME_MESSAGE",
    "FrameRenderer",
    "cursor_position_sequence",
    "render_frame",
    "screen_rows",
    "welcome_row",
]
