"""
Namespace Classification

Decides whether a page title belongs to a namespace that is excluded from
verification (discussion, administrative and meta content).
"""

from __future__ import annotations

from typing import FrozenSet, Final


EXEMPT_NAMESPACES: Final[FrozenSet[str]] = frozenset({
    "talk",
    "user",
    "project",
    "file",
    "mediawiki",
    "template",
    "help",
    "category",
    "property",
    "form",
    "module",
    "special",
})

TALK_SUFFIX: Final[str] = "_talk"


def is_exempt_title(title: str) -> bool:
    """
    Return True if ``title`` lives in an exempt namespace.

    Titles without a colon are in the main namespace and never exempt. The
    prefix is compared case-insensitively; spaces and underscores are
    equivalent, as in MediaWiki titles.
    """
    if ":" not in title:
        return False

    prefix = title.split(":", 1)[0].strip().lower().replace(" ", "_")
    if prefix in EXEMPT_NAMESPACES:
        return True
    return prefix.endswith(TALK_SUFFIX)
