"""AppContext: settings holder and result emission for the CLI.

Created once per invocation. Configures logging and routes a failed
ServiceResult to the diagnostic stream with the right exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ecomcon.output.formatters import format_diagnostic

if TYPE_CHECKING:
    from ecomcon.config.settings import EcomconSettings
    from ecomcon.services.result import ServiceResult


class AppContext:
    """Per-invocation CLI context."""

    def __init__(self, settings: EcomconSettings) -> None:
        self.settings = settings

        from ecomcon.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit(self, result: ServiceResult) -> None:
        """Apply a ServiceResult's exit semantics.

        * Success (``result.ok``): stdout already holds the filtered
          stream; warnings go to stderr; returns normally.
        * Failure: one diagnostic on stderr, exit code 1.
        """
        if result.ok:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
            return
        click.echo(format_diagnostic(result, json_output=self.settings.json_output), err=True)
        raise SystemExit(1)
