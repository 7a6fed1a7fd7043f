"""Fatal error types raised by the activation engine.

Every failure is fatal: there is no recovery and no skip-and-continue.
Each error carries a stable ``code`` (surfaced in ``ServiceError.code``)
and, when known, the 1-based line number it was detected on.
"""

from __future__ import annotations


class EcomconError(Exception):
    """Base class for all fatal ecomcon conditions."""

    code: str = "ECOMCON_ERROR"

    def __init__(self, message: str, *, line_nr: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_nr = line_nr


class TagSyntaxError(EcomconError):
    """A tag argument contains characters outside ``[A-Za-z0-9_]``."""

    code = "TAG_SYNTAX"

    def __init__(self, tag: str) -> None:
        super().__init__(f"Invalid tag: {tag!r}")
        self.tag = tag


class LineTooLongError(EcomconError):
    """An input line reached the maximum line length."""

    code = "LINE_TOO_LONG"

    def __init__(self, line_nr: int, limit: int) -> None:
        super().__init__("Line too long.", line_nr=line_nr)
        self.limit = limit


class InputError(EcomconError):
    """Reading from the input stream failed."""

    code = "READ_ERROR"


class OutputError(EcomconError):
    """Writing to the output stream failed."""

    code = "WRITE_ERROR"
