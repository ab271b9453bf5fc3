"""
Baseline Index

A lookup set of normalized content derived from a page's prior revision. It is
only ever used as an existence oracle: content whose normalized form is in the
index was already accepted and is not flagged again.

Normalization removes provenance wrappers (restoring their escaped payload)
and trims surrounding whitespace. Equality is exact string equality after
normalization; there is no fuzzy matching and no move detection.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable

from .markers import strip_wrappers
from .segmenter import BlockKind, segment


def normalize(text: str) -> str:
    return strip_wrappers(text).strip()


class BaselineIndex:
    """
    Immutable set of normalized lines and blocks from a prior revision.
    """

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: FrozenSet[str] = frozenset(e for e in entries if e)

    @classmethod
    def from_source(cls, source: str) -> "BaselineIndex":
        """
        Build an index from the raw wikitext of a prior revision.

        Every non-blank line is indexed. List item payloads and joined prose
        paragraphs are indexed as well, so they can be looked up the same way
        the segmenter presents them.
        """
        entries = set()

        for line in source.split("\n"):
            if line.strip():
                entries.add(normalize(line))

        for block in segment(source):
            if block.kind != BlockKind.STRUCTURAL:
                entries.add(normalize(block.text))

        return cls(entries)

    def __contains__(self, text: object) -> bool:
        if not isinstance(text, str):
            return False
        return normalize(text) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
