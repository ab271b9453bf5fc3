"""
Template Status Injection

Pages that open with one of the recognised structured templates carry their
review state in a ``status`` field. For those pages the field is set to
``proposed`` instead of wrapping the template, and only the content after the
template's balanced close goes through block wrapping.
"""

from __future__ import annotations

import re
from typing import Final, Optional, Tuple

from . import markers
from .baseline import BaselineIndex
from .braces import find_template_end
from .wrapper import wrap_content


RECOGNIZED_TEMPLATES: Final[Tuple[str, ...]] = (
    "Show",
    "Venue",
    "Scene",
    "Artist",
    "Song",
    "Album",
)

PROPOSED_STATUS: Final[str] = "proposed"

_OPENING_RE = re.compile(
    r"^\s*\{\{\s*(?P<name>"
    + "|".join(re.escape(name) for name in RECOGNIZED_TEMPLATES)
    + r")[ \t]*(?P<sep>\r?\n|\|)",
    re.IGNORECASE,
)

_STATUS_FIELD_RE = re.compile(r"(\|\s*status\s*=[ \t]*)([^|}\n]*)", re.IGNORECASE)


def detect_status_template(source: str) -> Optional[str]:
    """
    Return the recognised template name the document opens with, or None.

    The name must be followed by a newline or a field separator; ``{{Show}}``
    on its own or ``{{Showcase|...`` do not count.
    """
    match = _OPENING_RE.match(source)
    if not match:
        return None
    for name in RECOGNIZED_TEMPLATES:
        if name.lower() == match.group("name").lower():
            return name
    return None


def _top_level_status(head: str) -> Optional[re.Match]:
    """
    Find a ``status`` field of the outer template in ``head``, ignoring fields
    of templates nested inside it.
    """
    depth = 0
    pos = 0

    while pos < len(head):
        pair = head[pos:pos + 2]
        if pair == "{{":
            depth += 1
            pos += 2
            continue
        if pair == "}}":
            depth -= 1
            pos += 2
            continue
        if depth == 1 and head[pos] == "|":
            match = _STATUS_FIELD_RE.match(head, pos)
            if match:
                return match
        pos += 1

    return None


def _set_status(head: str) -> str:
    """Set status=proposed on the outer template of ``head``."""
    existing = _top_level_status(head)
    if existing:
        if existing.group(2).strip().lower() == PROPOSED_STATUS:
            return head
        # Any other review state is overridden rather than duplicated.
        return head[:existing.start(2)] + PROPOSED_STATUS + head[existing.end(2):]

    match = _OPENING_RE.match(head)
    field = "|status=" + PROPOSED_STATUS

    if match.group("sep") == "|":
        at = match.start("sep")
        return head[:at] + field + head[at:]

    at = match.end("sep")
    return head[:at] + field + match.group("sep") + head[at:]


def inject_status(
    source: str,
    baseline: Optional[BaselineIndex] = None,
    attribution: str = markers.DEFAULT_ATTRIBUTION,
) -> str:
    """
    Inject ``|status=proposed`` into the opening template and wrap whatever
    follows it.

    An unterminated template extends to the end of the document, in which
    case nothing is wrapped.
    """
    if detect_status_template(source) is None:
        return source

    start = source.index("{{")
    end = find_template_end(source, start)

    head = _set_status(source[:end])
    tail = source[end:]
    if not tail:
        return head
    return head + wrap_content(tail, baseline, attribution)
