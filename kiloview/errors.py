"""Fatal error types for kiloview.

Every condition that forces the session to abort is one subclass of
``KiloviewError``. Transient input conditions never raise.
"""

from __future__ import annotations

from pathlib import Path


class KiloviewError(Exception):
    """Base class for fatal terminal, input, and file errors."""


class TerminalQueryError(KiloviewError):
    """Capturing the current terminal attributes failed."""


class TerminalModeError(KiloviewError):
    """Installing raw-mode terminal attributes failed."""


class TerminalWriteError(KiloviewError):
    """Writing to the terminal failed."""


class WindowSizeError(KiloviewError):
    """Neither the size query nor the cursor-position probe gave a size."""


class InputReadError(KiloviewError):
    """Reading from the input stream failed or the stream was closed."""


class FileOpenError(KiloviewError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot open {path}: {reason}")
        self.path = path
