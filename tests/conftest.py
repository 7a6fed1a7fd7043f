"""Shared pytest fixtures for ecomcon tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
from click.testing import CliRunner

from ecomcon.domain.tags import TagRegistry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> TagRegistry:
    """Frozen registry enabling ``debug`` and ``log_2``."""
    return TagRegistry.from_tags(["debug", "log_2"])


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ``ECOMCON_*`` variables from the developer's shell out of tests."""
    for name in (
        "ECOMCON_MAX_LINE_LENGTH",
        "ECOMCON_ENCODING",
        "ECOMCON_JSON_OUTPUT",
        "ECOMCON_VERBOSE",
        "ECOMCON_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test.

    Every CLI invocation reconfigures logging against the runner's
    short-lived stderr.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ecomcon = logging.getLogger("ecomcon")
    ecomcon_level = ecomcon.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    ecomcon.setLevel(ecomcon_level)
