"""Open input/output text streams with newline translation disabled.

``-`` means the process's stdin/stdout. Standard streams are wrapped
around their binary buffers and detached afterwards so the wrapper never
closes them.
"""

from __future__ import annotations

import io
from collections.abc import Generator
from contextlib import contextmanager, suppress
from typing import TextIO

import click

from ecomcon.domain.errors import InputError, OutputError

STDIO = "-"
ENCODING_ERRORS = "surrogateescape"


@contextmanager
def open_input(path: str, encoding: str) -> Generator[TextIO]:
    """Yield a text stream over *path* (or stdin) that keeps raw terminators."""
    if path == STDIO:
        wrapper = io.TextIOWrapper(
            click.get_binary_stream("stdin"),
            encoding=encoding,
            errors=ENCODING_ERRORS,
            newline="",
        )
        try:
            yield wrapper
        finally:
            wrapper.detach()
        return

    try:
        stream = open(path, encoding=encoding, errors=ENCODING_ERRORS, newline="")  # noqa: SIM115
    except OSError as exc:
        raise InputError(f"Cannot open {path}: {exc.strerror or exc}") from exc
    with stream:
        yield stream


@contextmanager
def open_output(path: str, encoding: str) -> Generator[TextIO]:
    """Yield a text stream over *path* (or stdout) that writes ``\\n`` verbatim."""
    if path == STDIO:
        wrapper = io.TextIOWrapper(
            click.get_binary_stream("stdout"),
            encoding=encoding,
            errors=ENCODING_ERRORS,
            newline="",
        )
        try:
            yield wrapper
        finally:
            # A failed write has already been reported by the emitter.
            with suppress(OSError):
                wrapper.detach()
        return

    try:
        stream = open(path, "w", encoding=encoding, errors=ENCODING_ERRORS, newline="")  # noqa: SIM115
    except OSError as exc:
        raise OutputError(f"Cannot open {path}: {exc.strerror or exc}") from exc
    with stream:
        yield stream
