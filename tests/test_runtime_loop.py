"""Tests for the render/read/dispatch session loop and its bootstrap."""

from __future__ import annotations

import unittest
from contextlib import contextmanager
from unittest import mock

from kiloview.document import Document
from kiloview.input import Key
from kiloview.render import FrameRenderer, render_frame
from kiloview.runtime import run_session
from kiloview.runtime.app import run_viewer
from kiloview.runtime.loop import QUIT_KEY, build_keymap
from kiloview.runtime.state import Session, SessionStatus
from kiloview.viewport import Viewport


class _FakeTerminal:
    def __init__(self) -> None:
        self.writes: list[bytes] = []
        self.clear_calls = 0

    def write(self, data: bytes) -> None:
        self.writes.append(data)

    def clear_screen(self) -> None:
        self.clear_calls += 1


def _document(rows: int) -> Document:
    document = Document()
    for idx in range(rows):
        document.append_row(f"line {idx}".encode("ascii"))
    return document


def _session(rows: int = 24, columns: int = 80, document_rows: int = 100) -> Session:
    terminal = _FakeTerminal()
    return Session(
        document=_document(document_rows),
        viewport=Viewport(visible_rows=rows, visible_columns=columns),
        terminal=terminal,
        renderer=FrameRenderer(terminal.write),
    )


def _scripted_keys(*keys):
    pending = list(keys)

    def read(_fd: int):
        return pending.pop(0)

    return read


class RunSessionTests(unittest.TestCase):
    def test_quit_key_clears_screen_and_returns_zero(self) -> None:
        session = _session()

        status = run_session(session, 0, read_key_fn=_scripted_keys(QUIT_KEY))

        self.assertEqual(status, 0)
        self.assertIs(session.status, SessionStatus.QUITTING)
        self.assertEqual(session.terminal.clear_calls, 1)
        self.assertEqual(len(session.terminal.writes), 1)

    def test_each_iteration_renders_before_reading(self) -> None:
        session = _session()
        keys = (Key.ARROW_DOWN, b"x", Key.ESCAPE, QUIT_KEY)

        run_session(session, 0, read_key_fn=_scripted_keys(*keys))

        self.assertEqual(len(session.terminal.writes), len(keys))
        self.assertEqual(session.viewport.cursor_row, 1)

    def test_movement_scrolls_before_next_frame(self) -> None:
        session = _session()
        keys = [Key.ARROW_DOWN] * 50 + [QUIT_KEY]

        run_session(session, 0, read_key_fn=_scripted_keys(*keys))

        self.assertEqual(session.viewport.cursor_row, 50)
        self.assertEqual(session.viewport.row_offset, 27)
        self.assertEqual(session.terminal.writes[-1], render_frame(session.document, session.viewport))

    def test_page_down_past_short_document_clamps(self) -> None:
        session = _session(document_rows=10)

        run_session(session, 0, read_key_fn=_scripted_keys(Key.PAGE_DOWN, Key.PAGE_DOWN, QUIT_KEY))

        self.assertEqual(session.viewport.cursor_row, 10)

    def test_unbound_keys_leave_state_unchanged(self) -> None:
        session = _session()

        run_session(session, 0, read_key_fn=_scripted_keys(b"q", Key.DELETE, b"\r", QUIT_KEY))

        self.assertEqual((session.viewport.cursor_row, session.viewport.cursor_column), (0, 0))

    def test_keymap_binds_quit_and_movement(self) -> None:
        session = _session()
        keymap = build_keymap(session)

        self.assertTrue(keymap.dispatch(Key.END))
        self.assertEqual(session.viewport.cursor_column, 79)
        self.assertFalse(keymap.dispatch(b"a"))
        self.assertTrue(keymap.dispatch(QUIT_KEY))
        self.assertFalse(session.running)


class RunViewerTests(unittest.TestCase):
    def test_viewer_sizes_viewport_and_releases_raw_mode(self) -> None:
        events: list[str] = []

        class _Controller:
            def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
                self.stdin_fd = stdin_fd
                self.stdout_fd = stdout_fd

            @contextmanager
            def raw_mode(self):
                events.append("enter")
                try:
                    yield self
                finally:
                    events.append("restore")

            def window_size(self) -> tuple[int, int]:
                return 12, 40

            def write(self, data: bytes) -> None:
                pass

            def clear_screen(self) -> None:
                events.append("clear")

        captured = {}

        def fake_run_session(session: Session, stdin_fd: int) -> int:
            captured["viewport"] = session.viewport
            captured["stdin_fd"] = stdin_fd
            session.terminal.clear_screen()
            return 0

        with mock.patch("kiloview.runtime.app.TerminalController", _Controller), mock.patch(
            "kiloview.runtime.app.run_session", side_effect=fake_run_session
        ):
            status = run_viewer(Document(), 3, 4)

        self.assertEqual(status, 0)
        self.assertEqual(events, ["enter", "clear", "restore"])
        self.assertEqual(captured["stdin_fd"], 3)
        self.assertEqual(
            (captured["viewport"].visible_rows, captured["viewport"].visible_columns),
            (12, 40),
        )

    def test_viewer_restores_raw_mode_when_loop_fails(self) -> None:
        events: list[str] = []

        class _Controller:
            def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
                pass

            @contextmanager
            def raw_mode(self):
                events.append("enter")
                try:
                    yield self
                finally:
                    events.append("restore")

            def window_size(self) -> tuple[int, int]:
                return 24, 80

            def write(self, data: bytes) -> None:
                pass

        with mock.patch("kiloview.runtime.app.TerminalController", _Controller), mock.patch(
            "kiloview.runtime.app.run_session", side_effect=RuntimeError("boom")
        ):
            with self.assertRaises(RuntimeError):
                run_viewer(Document(), 0, 1)

        self.assertEqual(events, ["enter", "restore"])


if __name__ == "__main__":
    unittest.main()
