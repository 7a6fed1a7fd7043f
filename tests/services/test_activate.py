"""Tests for ActivationService and the activate_* helpers."""

from __future__ import annotations

import io

import pytest

from ecomcon.domain.errors import LineTooLongError, TagSyntaxError
from ecomcon.domain.tags import TagRegistry
from ecomcon.services.activate import (
    ActivationService,
    RunStats,
    activate_stream,
    activate_text,
)
from ecomcon.services.result import ServiceResult

SOURCE = (
    "//debug trace(1)\r\n"
    "//log trace(2)\r\n"
    "// plain comment\r\n"
    "hello world\r\n"
)


def _run(
    text: str,
    registry: TagRegistry,
    comments: tuple[str, ...] = (),
    **kwargs: int,
) -> tuple[io.StringIO, ServiceResult]:
    sink = io.StringIO()
    result = ActivationService(registry, **kwargs).run(
        io.StringIO(text, newline=""), sink, comments
    )
    return sink, result


class TestActivationService:
    def test_scenario(self, registry: TagRegistry) -> None:
        sink, result = _run(SOURCE, registry)
        assert sink.getvalue() == "trace(1)\n// plain comment\nhello world\n"
        assert result.ok

    def test_stats(self, registry: TagRegistry) -> None:
        _, result = _run(SOURCE, registry, ("Devel Edition",))
        assert result.data == {
            "lines_read": 4,
            "lines_unmarked": 2,
            "lines_enabled": 1,
            "lines_disabled": 1,
            "banners": 1,
            "lines_emitted": 3,
        }

    def test_banners_come_first_in_order(self, registry: TagRegistry) -> None:
        sink, _ = _run("x\n", registry, ("one", "two"))
        assert sink.getvalue() == "// one\n// two\nx\n"

    def test_empty_input(self, registry: TagRegistry) -> None:
        sink, result = _run("", registry)
        assert sink.getvalue() == ""
        assert result.ok
        assert result.data["lines_read"] == 0

    def test_final_line_gets_terminator(self, registry: TagRegistry) -> None:
        sink, _ = _run("a\n//debug b", registry)
        assert sink.getvalue() == "a\nb\n"

    def test_disabled_line_leaves_no_blank(self, registry: TagRegistry) -> None:
        sink, _ = _run("a\n//nope b\nc\n", registry)
        assert sink.getvalue() == "a\nc\n"

    def test_blank_lines_preserved(self, registry: TagRegistry) -> None:
        sink, _ = _run("\n\n", registry)
        assert sink.getvalue() == "\n\n"

    def test_freezes_registry(self) -> None:
        registry = TagRegistry()
        registry.register("debug")
        ActivationService(registry)
        assert registry.frozen

    def test_line_too_long_result(self, registry: TagRegistry) -> None:
        sink, result = _run("ok\n" + "x" * 10 + "\nnever\n", registry, max_line_length=10)
        assert not result.ok
        assert result.error.code == "LINE_TOO_LONG"
        assert result.error.message == "Line too long."
        assert result.line_nr == 2
        # Output written before the failure stays written.
        assert sink.getvalue() == "ok\n"

    def test_write_error_result(self, registry: TagRegistry) -> None:
        class Broken(io.StringIO):
            def write(self, s: str) -> int:
                raise BrokenPipeError(32, "Broken pipe")

        result = ActivationService(registry).run(io.StringIO("a\nb\n"), Broken())
        assert not result.ok
        assert result.error.code == "WRITE_ERROR"
        assert result.line_nr == 1

    def test_banner_write_error_has_no_line_nr(self, registry: TagRegistry) -> None:
        class Broken(io.StringIO):
            def write(self, s: str) -> int:
                raise OSError(28, "No space left on device")

        result = ActivationService(registry).run(io.StringIO("a\n"), Broken(), ("banner",))
        assert not result.ok
        assert result.line_nr is None

    def test_process_raises(self, registry: TagRegistry) -> None:
        service = ActivationService(registry, max_line_length=3)
        with pytest.raises(LineTooLongError):
            service.process(io.StringIO("abc"), io.StringIO())

    def test_process_returns_stats(self, registry: TagRegistry) -> None:
        stats = ActivationService(registry).process(io.StringIO("a\n"), io.StringIO())
        assert stats == RunStats(lines_read=1, lines_unmarked=1)

    def test_rerun_is_idempotent(self, registry: TagRegistry) -> None:
        once, _ = _run(SOURCE, registry)
        twice, _ = _run(once.getvalue(), registry)
        assert twice.getvalue() == once.getvalue()


class TestActivateStream:
    def test_success(self) -> None:
        sink = io.StringIO()
        result = activate_stream(io.StringIO("//debug x\n"), sink, ["debug"], comments=["c"])
        assert result.ok
        assert sink.getvalue() == "// c\nx\n"

    def test_invalid_tag_writes_nothing(self) -> None:
        sink = io.StringIO()
        result = activate_stream(io.StringIO("x\n"), sink, ["ok", "bad-tag"], comments=["c"])
        assert not result.ok
        assert result.error.code == "TAG_SYNTAX"
        assert "bad-tag" in result.error.message
        assert result.line_nr is None
        assert sink.getvalue() == ""


class TestActivateText:
    def test_basic(self) -> None:
        assert activate_text("//debug log(x)\n//test t()\nx = 1\n", ["debug"]) == "log(x)\nx = 1\n"

    def test_comments(self) -> None:
        assert activate_text("x", [], ["Devel Edition"]) == "// Devel Edition\nx\n"

    def test_normalizes_terminators(self) -> None:
        assert activate_text("a\r\nb\rc", []) == "a\nb\nc\n"

    def test_multiple_tags(self) -> None:
        source = "//debug a\n//log b\n//test c\n"
        assert activate_text(source, ["debug", "log"]) == "a\nb\n"

    def test_invalid_tag_raises(self) -> None:
        with pytest.raises(TagSyntaxError):
            activate_text("x", ["a b"])

    def test_line_too_long_raises(self) -> None:
        with pytest.raises(LineTooLongError) as excinfo:
            activate_text("1\n2\n" + "z" * 8, [], max_line_length=8)
        assert excinfo.value.line_nr == 3
