"""Emitter: writes surviving lines and banner comments to the output.

Every line is terminated with a single ``\\n`` regardless of the input's
original terminator. Any write failure (broken pipe included) surfaces
as :class:`OutputError`; the caller attaches the input line number.
"""

from __future__ import annotations

from typing import TextIO

from ecomcon.domain.errors import OutputError
from ecomcon.domain.types import MARKER


class Emitter:
    """Thin writer around an output text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.lines_written = 0

    def emit_line(self, text: str, offset: int = 0) -> None:
        """Write ``text[offset:]`` followed by a line feed."""
        self._write(text[offset:] + "\n")
        self.lines_written += 1

    def emit_banner(self, text: str) -> None:
        """Write *text* as a marker comment line: ``// <text>``."""
        self._write(f"{MARKER} {text}\n")
        self.lines_written += 1

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as exc:
            raise OutputError(f"Write error: {exc}") from exc

    def _write(self, data: str) -> None:
        try:
            self._stream.write(data)
        except (OSError, UnicodeEncodeError) as exc:
            raise OutputError(f"Write error: {exc}") from exc
