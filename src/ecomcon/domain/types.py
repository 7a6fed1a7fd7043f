"""Line and classification value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

MARKER = "//"


class Disposition(StrEnum):
    """What happens to a line on its way to the output."""

    UNMARKED = "unmarked"
    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass(frozen=True, slots=True)
class LogicalLine:
    """One input line without its terminator.

    ``number`` is 1-based and only used for diagnostics.
    """

    text: str
    number: int


@dataclass(frozen=True, slots=True)
class Classification:
    """Disposition of a line plus the offset emission starts from."""

    disposition: Disposition
    offset: int = 0

    @property
    def emits(self) -> bool:
        return self.disposition is not Disposition.DISABLED
