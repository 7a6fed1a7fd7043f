"""ecomcon command line: activate tagged ``//`` comments in a text stream."""

from __future__ import annotations

import logging

import click
from pydantic import ValidationError

from ecomcon import __version__
from ecomcon.commands._base import EcomconCommand
from ecomcon.commands._context import AppContext
from ecomcon.config.settings import EcomconSettings
from ecomcon.domain.errors import EcomconError
from ecomcon.domain.tags import TagRegistry
from ecomcon.infrastructure.streams import STDIO, open_input, open_output
from ecomcon.services.activate import ActivationService, failure
from ecomcon.services.result import ServiceResult

logger = logging.getLogger(__name__)

_EXAMPLES = """\
  ecomcon debug < app.js > app.debug.js
  ecomcon debug log --comment "Devel Edition" < app.js
  ecomcon -i app.js -o app.test.js test
  ecomcon --max-line-length 1024 trace < big.js"""


@click.command("ecomcon", cls=EcomconCommand, examples=_EXAMPLES)
@click.version_option(version=__version__, prog_name="ecomcon")
@click.argument("tags", nargs=-1)
@click.option(
    "--comment",
    "-comment",
    "comments",
    multiple=True,
    metavar="TEXT",
    help="Prepend '// TEXT' to the output. Repeatable.",
)
@click.option("-i", "--input", "input_path", default=STDIO, help="Input file (default: stdin).")
@click.option("-o", "--output", "output_path", default=STDIO, help="Output file (default: stdout).")
@click.option(
    "--max-line-length",
    type=click.IntRange(min=1),
    default=None,
    help="Longest accepted input line.",
)
@click.option("--encoding", default=None, help="Text encoding of input and output.")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON diagnostics.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
def cli(
    tags: tuple[str, ...],
    comments: tuple[str, ...],
    input_path: str,
    output_path: str,
    max_line_length: int | None,
    encoding: str | None,
    json_output: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """Enable the conditional comments named by TAGS.

    A conditional comment starts at the left margin with '//' immediately
    followed by a tag. Lines tagged with one of TAGS lose the '//<tag>'
    prefix (and one following space); lines with any other tag are
    removed. All other lines pass through unchanged.
    """
    try:
        settings = EcomconSettings.from_cli(
            max_line_length=max_line_length,
            encoding=encoding,
            json_output=json_output or None,
            verbose=verbose or None,
            log_json=log_json or None,
        )
    except ValidationError as exc:
        msg = f"Invalid settings: {exc}"
        raise click.ClickException(msg) from exc

    app = AppContext(settings)
    app.emit(_activate(settings, tags, comments, input_path, output_path))


def _activate(
    settings: EcomconSettings,
    tags: tuple[str, ...],
    comments: tuple[str, ...],
    input_path: str,
    output_path: str,
) -> ServiceResult:
    # Tags are checked before any stream is opened or any banner is written.
    try:
        registry = TagRegistry.from_tags(tags)
    except EcomconError as exc:
        return failure(exc)
    logger.debug("Enabled tags: %s", ", ".join(registry) or "(none)")

    service = ActivationService(registry, max_line_length=settings.max_line_length)
    try:
        with (
            open_input(input_path, settings.encoding) as source,
            open_output(output_path, settings.encoding) as sink,
        ):
            return service.run(source, sink, comments)
    except EcomconError as exc:
        return failure(exc)
