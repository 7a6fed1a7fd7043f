"""Tag domain logic: character rules and the tag registry.

A tag is a non-empty run of ASCII letters, digits, and underscore.
Matching is case-sensitive and exact: no prefixes, no case folding.
"""

from __future__ import annotations

import string
from collections.abc import Iterable, Iterator

from ecomcon.domain.errors import TagSyntaxError

TAG_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def is_tag_char(ch: str) -> bool:
    """True for a single ASCII letter, digit, or underscore.

    Examples:
        >>> is_tag_char("a"), is_tag_char("_"), is_tag_char("é")
        (True, True, False)
    """
    return ch in TAG_CHARS


def validate_tag(tag: str) -> str:
    """Return *tag* unchanged, or raise :class:`TagSyntaxError`."""
    if not tag or not all(ch in TAG_CHARS for ch in tag):
        raise TagSyntaxError(tag)
    return tag


def scan_tag(text: str, start: int) -> int:
    """Length of the maximal run of tag characters in *text* from *start*."""
    end = start
    while end < len(text) and text[end] in TAG_CHARS:
        end += 1
    return end - start


class TagRegistry:
    """Set of enabled tags, built once and frozen before processing.

    Registering the same tag twice is harmless. There is no removal.
    """

    def __init__(self) -> None:
        self._tags: set[str] = set()
        self._frozen = False

    @classmethod
    def from_tags(cls, tags: Iterable[str]) -> TagRegistry:
        """Validate and register every tag, then freeze.

        The first invalid tag raises :class:`TagSyntaxError`.
        """
        registry = cls()
        for tag in tags:
            registry.register(tag)
        registry.freeze()
        return registry

    def register(self, tag: str) -> None:
        if self._frozen:
            msg = "Tag registry is frozen; tags are fixed for the whole run"
            raise RuntimeError(msg)
        self._tags.add(validate_tag(tag))

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def contains(self, candidate: str) -> bool:
        """Exact length-and-content membership test."""
        return candidate in self._tags

    __contains__ = contains

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"TagRegistry({sorted(self._tags)!r})"
