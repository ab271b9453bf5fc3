"""
Brace Matching

Locates the balanced end of a ``{{ ... }}`` template invocation in raw
wikitext. Unterminated templates are tolerated: the span runs to the end of
the text.
"""

from __future__ import annotations

from typing import Optional


def find_template_close(text: str, start: int) -> Optional[int]:
    """
    Return the offset just past the ``}}`` that closes the template opened at
    ``start``, or None if the template is never closed.
    """
    depth = 0
    pos = start
    length = len(text)

    while pos < length:
        pair = text[pos:pos + 2]
        if pair == "{{":
            depth += 1
            pos += 2
        elif pair == "}}":
            depth -= 1
            pos += 2
            if depth <= 0:
                return pos
        else:
            pos += 1

    return None


def find_template_end(text: str, start: int) -> int:
    """
    Return the offset just past the ``}}`` that closes the template opened at
    ``start``.

    Parameters
    ----------
    text : str
        Raw wikitext.

    start : int
        Offset of an opening ``{{``.

    Returns
    -------
    int
        Offset immediately after the balancing ``}}``, or ``len(text)`` if the
        template is never closed.
    """
    end = find_template_close(text, start)
    return len(text) if end is None else end
