"""Read-only document model loaded from a file.

A document is an ordered list of rows in on-disk line order. Each row keeps
its raw bytes with the line terminator stripped; no decoding is applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import FileOpenError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """One terminator-stripped line of file content."""

    chars: bytes

    @property
    def size(self) -> int:
        return len(self.chars)


@dataclass
class Document:
    rows: list[Row] = field(default_factory=list)
    path: Path | None = None

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    def is_empty(self) -> bool:
        return not self.rows

    def append_row(self, chars: bytes) -> Row:
        """Append one row, stripping any trailing ``\\r``/``\\n`` bytes."""
        row = Row(strip_line_terminator(chars))
        self.rows.append(row)
        return row


def strip_line_terminator(line: bytes) -> bytes:
    """Remove every trailing carriage-return and line-feed byte."""
    end = len(line)
    while end > 0 and line[end - 1] in (0x0A, 0x0D):
        end -= 1
    return line[:end]


def load_document(path: Path) -> Document:
    """Load ``path`` into a new ``Document``.

    Raises ``FileOpenError`` when the file cannot be opened for reading.
    An empty file gives a document with zero rows.
    """
    document = Document(path=path)
    try:
        with path.open("rb") as handle:
            for line in handle:
                document.append_row(line)
    except OSError as exc:
        raise FileOpenError(path, exc.strerror or str(exc)) from exc
    _logger.info("loaded %s (%d rows)", path, document.num_rows)
    return document
