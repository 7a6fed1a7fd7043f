"""LineReader: splits a text stream into logical lines.

Terminators recognised: ``\\n``, ``\\r\\n``, and a bare ``\\r``. They are
consumed and never part of the line text. The stream must be opened with
newline translation disabled (``newline=""``) so carriage returns reach
the reader untouched.

The reader walks a chunked buffer through a one-character cursor
(:meth:`peek` / :meth:`advance`). All cursor and counter state lives on
the instance, so several readers can coexist in one process.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TextIO

from ecomcon.domain.errors import InputError, LineTooLongError
from ecomcon.domain.types import LogicalLine

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINE_LENGTH = 65536
_CHUNK_SIZE = 8192


class LineReader:
    """Pull-based reader producing :class:`LogicalLine` objects.

    Parameters
    ----------
    stream:
        Text stream to read. Only ``read(n)`` is used.
    max_line_length:
        Hard upper bound on a line's length. A line reaching this many
        characters before its terminator raises :class:`LineTooLongError`.
    """

    def __init__(self, stream: TextIO, max_line_length: int = DEFAULT_MAX_LINE_LENGTH) -> None:
        if max_line_length <= 0:
            msg = f"max_line_length must be positive, got {max_line_length}"
            raise ValueError(msg)
        self._stream = stream
        self._max_line_length = max_line_length
        self._buffer = ""
        self._pos = 0
        self._eof = False
        self._line_nr = 0

    @property
    def line_nr(self) -> int:
        """Number of lines produced so far."""
        return self._line_nr

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def peek(self) -> str:
        """Current character, or ``""`` at end of stream."""
        if self._pos >= len(self._buffer) and not self._fill():
            return ""
        return self._buffer[self._pos]

    def advance(self) -> None:
        """Move the cursor past the current character."""
        self._pos += 1

    def _fill(self) -> bool:
        if self._eof:
            return False
        try:
            chunk = self._stream.read(_CHUNK_SIZE)
        except (OSError, UnicodeDecodeError) as exc:
            raise InputError(f"Read error: {exc}", line_nr=self._line_nr + 1) from exc
        if not chunk:
            self._eof = True
            return False
        self._buffer = chunk
        self._pos = 0
        return True

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def read_line(self) -> LogicalLine | None:
        """Return the next line, or None once the stream is exhausted.

        A final line without a terminator is still returned.
        """
        chars: list[str] = []
        while True:
            ch = self.peek()
            if ch == "":
                if not chars:
                    return None
                break
            self.advance()
            if ch == "\n":
                break
            if ch == "\r":
                if self.peek() == "\n":
                    self.advance()
                break
            chars.append(ch)
            if len(chars) >= self._max_line_length:
                logger.debug("Line %d reached %d characters", self._line_nr + 1, len(chars))
                raise LineTooLongError(self._line_nr + 1, self._max_line_length)

        self._line_nr += 1
        return LogicalLine("".join(chars), self._line_nr)

    def __iter__(self) -> Iterator[LogicalLine]:
        while (line := self.read_line()) is not None:
            yield line
