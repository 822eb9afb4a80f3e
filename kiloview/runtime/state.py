"""Session context shared by the runtime loop.

Owns the document and viewport for one interactive session together with
the terminal and renderer they are drawn through.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..document import Document
from ..viewport import Viewport

if TYPE_CHECKING:
    from ..render import FrameRenderer
    from ..terminal import TerminalController


class SessionStatus(Enum):
    RUNNING = "running"
    QUITTING = "quitting"


@dataclass
class Session:
    document: Document
    viewport: Viewport
    terminal: TerminalController
    renderer: FrameRenderer
    status: SessionStatus = SessionStatus.RUNNING

    @property
    def running(self) -> bool:
        return self.status is SessionStatus.RUNNING

    def request_quit(self) -> bool:
        self.status = SessionStatus.QUITTING
        return True
