"""Line classification: the per-line decision at the heart of ecomcon.

Rules, applied to one logical line:

+-----------------------------------------------+--------------------------+
| Condition                                     | Result                   |
+===============================================+==========================+
| Shorter than 3 chars or no leading ``//``     | UNMARKED, offset 0       |
+-----------------------------------------------+--------------------------+
| ``//`` followed by no tag character           | UNMARKED, offset 0       |
+-----------------------------------------------+--------------------------+
| ``//<tag>`` with ``<tag>`` registered         | ENABLED, offset past the |
|                                               | tag and one optional     |
|                                               | space                    |
+-----------------------------------------------+--------------------------+
| ``//<tag>`` with ``<tag>`` not registered     | DISABLED                 |
+-----------------------------------------------+--------------------------+

``<tag>`` is always the maximal run of tag characters after the marker;
shorter prefixes are never tried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ecomcon.domain.tags import scan_tag
from ecomcon.domain.types import MARKER, Classification, Disposition

if TYPE_CHECKING:
    from ecomcon.domain.tags import TagRegistry

_MIN_MARKED_LENGTH = len(MARKER) + 1

UNMARKED = Classification(Disposition.UNMARKED, 0)
DISABLED = Classification(Disposition.DISABLED, 0)


def classify_line(text: str, registry: TagRegistry) -> Classification:
    """Classify *text* (one line, no terminator) against *registry*."""
    if len(text) < _MIN_MARKED_LENGTH or not text.startswith(MARKER):
        return UNMARKED

    start = len(MARKER)
    length = scan_tag(text, start)
    if length == 0:
        # A bare marker is an ordinary comment, not a tag.
        return UNMARKED

    if not registry.contains(text[start : start + length]):
        return DISABLED

    offset = start + length
    if text[offset : offset + 1] == " ":
        offset += 1
    return Classification(Disposition.ENABLED, offset)
