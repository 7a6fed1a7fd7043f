"""Diagnostic formatting for failed ServiceResults.

Human mode produces the single diagnostic line::

    ecomcon: [12] Line too long.
    ecomcon: Invalid tag: 'no-dash'

The ``[line_nr]`` part is omitted when no line number is known
(configuration errors happen before any line is read). JSON mode dumps
the whole ServiceResult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ecomcon.services.result import ServiceResult

PROG_NAME = "ecomcon"


def format_diagnostic(
    result: ServiceResult,
    *,
    prog_name: str = PROG_NAME,
    json_output: bool = False,
) -> str:
    """Format a failed ServiceResult for the diagnostic stream."""
    if json_output:
        return result.model_dump_json(indent=2)
    message = result.error.message if result.error else "Unknown error"
    line_nr = result.line_nr
    if line_nr is None:
        return f"{prog_name}: {message}"
    return f"{prog_name}: [{line_nr}] {message}"
