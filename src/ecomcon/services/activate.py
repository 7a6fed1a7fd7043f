"""ActivationService: drives Reader → Classifier → Emitter over one stream.

Banner comments are written first, then every logical line is read,
classified, and either emitted (whole or from its offset) or dropped.
Processing stops at the first fatal error; output already written stays
written.

Two entry points:

- :meth:`ActivationService.run` and :func:`activate_stream` return a
  :class:`ServiceResult` (the CLI path).
- :func:`activate_text` is a string-in/string-out helper that raises
  :class:`EcomconError` subclasses instead.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from typing import TextIO

from ecomcon.domain.classifier import classify_line
from ecomcon.domain.errors import EcomconError
from ecomcon.domain.tags import TagRegistry
from ecomcon.domain.types import Disposition
from ecomcon.infrastructure.emitter import Emitter
from ecomcon.infrastructure.reader import DEFAULT_MAX_LINE_LENGTH, LineReader
from ecomcon.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

OP = "activate"


@dataclass
class RunStats:
    """Per-run counters, reported in ``ServiceResult.data``."""

    lines_read: int = 0
    lines_unmarked: int = 0
    lines_enabled: int = 0
    lines_disabled: int = 0
    banners: int = 0

    @property
    def lines_emitted(self) -> int:
        return self.lines_unmarked + self.lines_enabled

    def to_dict(self) -> dict[str, int]:
        return {**asdict(self), "lines_emitted": self.lines_emitted}


class ActivationService:
    """Activates conditional comments for a fixed, frozen tag registry.

    Usage::

        registry = TagRegistry.from_tags(["debug"])
        result = ActivationService(registry).run(sys.stdin, sys.stdout)
    """

    def __init__(
        self,
        registry: TagRegistry,
        *,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    ) -> None:
        if not registry.frozen:
            registry.freeze()
        self._registry = registry
        self._max_line_length = max_line_length

    def run(
        self,
        source: TextIO,
        sink: TextIO,
        comments: Sequence[str] = (),
    ) -> ServiceResult:
        """Process *source* into *sink*; never raises for fatal conditions."""
        try:
            stats = self.process(source, sink, comments)
        except EcomconError as exc:
            logger.debug("Activation failed: %s (line %s)", exc.message, exc.line_nr)
            return failure(exc)
        return ServiceResult(ok=True, op=OP, data=stats.to_dict())

    def process(
        self,
        source: TextIO,
        sink: TextIO,
        comments: Sequence[str] = (),
    ) -> RunStats:
        """Process *source* into *sink*, raising on the first fatal error."""
        reader = LineReader(source, self._max_line_length)
        emitter = Emitter(sink)
        stats = RunStats()

        for comment in comments:
            emitter.emit_banner(comment)
            stats.banners += 1

        line_nr: int | None = None
        try:
            for line in reader:
                line_nr = line.number
                stats.lines_read += 1
                result = classify_line(line.text, self._registry)
                if result.disposition is Disposition.DISABLED:
                    stats.lines_disabled += 1
                    continue
                if result.disposition is Disposition.ENABLED:
                    stats.lines_enabled += 1
                else:
                    stats.lines_unmarked += 1
                emitter.emit_line(line.text, result.offset)
            emitter.flush()
        except EcomconError as exc:
            if exc.line_nr is None:
                exc.line_nr = line_nr
            raise

        logger.debug("Activation finished: %s", stats.to_dict())
        return stats


def failure(exc: EcomconError) -> ServiceResult:
    """Wrap a fatal error as a failed ServiceResult."""
    detail: dict[str, object] = {}
    if exc.line_nr is not None:
        detail["line_nr"] = exc.line_nr
    return ServiceResult(
        ok=False,
        op=OP,
        error=ServiceError(code=exc.code, message=exc.message, detail=detail),
    )


def activate_stream(
    source: TextIO,
    sink: TextIO,
    tags: Iterable[str],
    *,
    comments: Sequence[str] = (),
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> ServiceResult:
    """Validate *tags*, then process *source* into *sink*.

    An invalid tag fails the run before anything is written.
    """
    try:
        registry = TagRegistry.from_tags(tags)
    except EcomconError as exc:
        return failure(exc)
    logger.debug("Enabled tags: %s", ", ".join(registry) or "(none)")
    service = ActivationService(registry, max_line_length=max_line_length)
    return service.run(source, sink, comments)


def activate_text(
    source: str,
    tags: Iterable[str],
    comments: Sequence[str] = (),
    *,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> str:
    """Return *source* with conditional comments activated for *tags*.

    Examples:
        >>> activate_text("//debug log(x)\\n//test t()\\nx = 1\\n", ["debug"])
        'log(x)\\nx = 1\\n'
    """
    registry = TagRegistry.from_tags(tags)
    sink = io.StringIO()
    service = ActivationService(registry, max_line_length=max_line_length)
    service.process(io.StringIO(source, newline=""), sink, comments)
    return sink.getvalue()
