"""
Verification Markers

Pattern rules for recognising content that is already flagged or already
verified, and the provenance wrapper's own syntax.

Every piece of code that writes, detects or strips the provenance wrapper goes
through this module, so the escape convention used when wrapping is exactly
the one reversed when reading a baseline back.

Wrapper syntax
--------------
    {{Bot_proposes|<escaped payload>|by=<attribution>}}

Inside the payload, the template delimiters are replaced by the standard
MediaWiki magic words:

    |  ->  {{!}}
    =  ->  {{=}}

Braces that would not pair up inside the payload (a stray ``}}`` or an
unclosed ``{{``) would close the wrapper early or swallow its attribution,
so they are replaced by HTML entities:

    {{  ->  &#123;&#123;
    }}  ->  &#125;&#125;

Balanced inline templates are left as they are.
"""

from __future__ import annotations

import re
from typing import Final, List, Optional, Tuple


# ---------------------------------------------------------------------
# Wrapper Syntax (Single Source of Truth)
# ---------------------------------------------------------------------

WRAPPER_TEMPLATE: Final[str] = "Bot_proposes"
ATTRIBUTION_FIELD: Final[str] = "by"
DEFAULT_ATTRIBUTION: Final[str] = "bot"

# Order matters for unescaping: magic words are restored in reverse.
ESCAPES: Final[List[Tuple[str, str]]] = [
    ("|", "{{!}}"),
    ("=", "{{=}}"),
]

OPEN_BRACES_ESCAPE: Final[str] = "&#123;&#123;"
CLOSE_BRACES_ESCAPE: Final[str] = "&#125;&#125;"

_WRAPPER_OPEN_RE = re.compile(r"\{\{\s*" + re.escape(WRAPPER_TEMPLATE), re.IGNORECASE)

# Payload pipes and equals signs are escaped, so the first literal "|by=" is
# the attribution field.
_WRAPPED_BLOCK_RE = re.compile(
    r"\{\{\s*"
    + re.escape(WRAPPER_TEMPLATE)
    + r"\s*\|(?P<payload>.*?)\|\s*"
    + re.escape(ATTRIBUTION_FIELD)
    + r"\s*=[^|{}]*\}\}",
    re.IGNORECASE | re.DOTALL,
)


# ---------------------------------------------------------------------
# Detection Rules
# ---------------------------------------------------------------------

_STATUS_FLAGGED_RE = re.compile(r"\|\s*status\s*=\s*(proposed|unverified)\b", re.IGNORECASE)
_VERIFIED_RE = re.compile(r"\{\{\s*(verified|source)\s*[|}]", re.IGNORECASE)
_BARE_LINK_RE = re.compile(r"^(\[\[[^\[\]]*\]\]|\[[^\[\]]*\])$")


def has_verification_markers(source: str) -> bool:
    """
    Return True if the document already carries a provenance wrapper or a
    status field set to proposed/unverified anywhere.
    """
    if _WRAPPER_OPEN_RE.search(source):
        return True
    return bool(_STATUS_FLAGGED_RE.search(source))


def is_already_verified(fragment: str) -> bool:
    """Return True if the fragment cites a verified/source template."""
    return bool(_VERIFIED_RE.search(fragment))


def is_wrapped(fragment: str) -> bool:
    return bool(_WRAPPER_OPEN_RE.search(fragment))


def is_bare_link(fragment: str) -> bool:
    """A single bracketed link with no surrounding text is a reference, not a claim."""
    return bool(_BARE_LINK_RE.match(fragment.strip()))


# ---------------------------------------------------------------------
# Escape / Wrap
# ---------------------------------------------------------------------

def _escape_unbalanced_braces(text: str) -> str:
    pieces: List[str] = []
    unclosed: List[int] = []
    pos = 0

    while pos < len(text):
        pair = text[pos:pos + 2]
        if pair == "{{":
            unclosed.append(len(pieces))
            pieces.append(pair)
            pos += 2
        elif pair == "}}":
            pieces.append(pair if unclosed else CLOSE_BRACES_ESCAPE)
            if unclosed:
                unclosed.pop()
            pos += 2
        else:
            pieces.append(text[pos])
            pos += 1

    for index in unclosed:
        pieces[index] = OPEN_BRACES_ESCAPE
    return "".join(pieces)


def escape_payload(text: str) -> str:
    # Braces go first so the magic words added below are never touched.
    text = _escape_unbalanced_braces(text)
    for literal, escaped in ESCAPES:
        text = text.replace(literal, escaped)
    return text


def unescape_payload(text: str) -> str:
    for literal, escaped in reversed(ESCAPES):
        text = text.replace(escaped, literal)
    text = text.replace(OPEN_BRACES_ESCAPE, "{{")
    return text.replace(CLOSE_BRACES_ESCAPE, "}}")


def wrap(payload: str, attribution: str = DEFAULT_ATTRIBUTION) -> str:
    """Wrap a content block in the provenance marker."""
    return (
        "{{" + WRAPPER_TEMPLATE + "|" + escape_payload(payload)
        + "|" + ATTRIBUTION_FIELD + "=" + attribution + "}}"
    )


def unwrap(text: str) -> Optional[str]:
    """
    Return the original payload of a wrapped block, or None if ``text`` is not
    exactly one provenance wrapper.
    """
    match = _WRAPPED_BLOCK_RE.fullmatch(text.strip())
    if not match:
        return None
    return unescape_payload(match.group("payload"))


def strip_wrappers(text: str) -> str:
    """Replace every provenance wrapper in ``text`` by its unescaped payload."""
    return _WRAPPED_BLOCK_RE.sub(lambda m: unescape_payload(m.group("payload")), text)
