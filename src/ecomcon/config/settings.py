"""Unified settings: CLI flags, env vars, and code defaults in one object.

Priority chain (highest to lowest):
  1. Init kwargs (CLI flags passed by Click)
  2. Env vars with the ``ECOMCON_*`` prefix
  3. Code defaults

No configuration file is read: the tag set is given on the
command line for each run.
"""

from __future__ import annotations

import codecs
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from ecomcon.infrastructure.reader import DEFAULT_MAX_LINE_LENGTH


class EcomconSettings(BaseSettings):
    """Settings for a single ecomcon run, frozen after construction.

    Attributes:
        max_line_length: Hard upper bound on input line length.
        encoding: Text encoding for input and output streams.
        json_output: Render diagnostics as JSON instead of one line.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ECOMCON_",
    }

    max_line_length: int = Field(default=DEFAULT_MAX_LINE_LENGTH, gt=0)
    encoding: str = "utf-8"

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            msg = f"Unknown encoding: {value}"
            raise ValueError(msg) from exc
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only init kwargs and environment variables; no files."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> EcomconSettings:
        """Construct settings from a CLI invocation.

        Flags left unset (``None``) are dropped so environment variables
        and defaults can apply.
        """
        return cls(**{key: value for key, value in cli_flags.items() if value is not None})
