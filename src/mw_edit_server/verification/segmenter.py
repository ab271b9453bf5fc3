"""
Content Segmentation

Walks wikitext line by line, classifies each line, and groups the result into
blocks:

- structural lines (blank, headings, category links, table syntax, template
  invocations) pass through untouched;
- list items are emitted one block per line, with the list prefix kept apart
  from the payload;
- consecutive prose lines are accumulated into one paragraph, joined with
  single spaces.

Template invocations are followed to their balanced close, so the body of a
multi-line template is never mistaken for prose. The same holds for an inline
template that opens in a prose line or list item and closes on a later line:
the continuation lines belong to that paragraph or item. Cell and header lines
(``|``, ``!``) only count as table syntax inside a ``{|`` ... ``|}`` table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List

from .braces import find_template_close, find_template_end


class LineKind(str, Enum):
    BLANK = "blank"
    HEADING = "heading"
    CATEGORY = "category"
    TABLE_SYNTAX = "table_syntax"
    TEMPLATE_OPEN = "template_open"
    LIST_ITEM = "list_item"
    PROSE = "prose"


class BlockKind(str, Enum):
    STRUCTURAL = "structural"
    LIST_ITEM = "list_item"
    PARAGRAPH = "paragraph"


LIST_MARKERS = "*#:;"

_CATEGORY_RE = re.compile(r"^\[\[\s*category\s*:", re.IGNORECASE)
_LIST_ITEM_RE = re.compile(r"^(?P<prefix>[" + re.escape(LIST_MARKERS) + r"]+\s*)(?P<payload>.*)$")
_TABLE_PREFIXES = ("{|", "|}", "|-", "|+", "|", "!")


@dataclass(frozen=True)
class Block:
    """
    One unit of segmented content.

    ``text`` is the raw text for structural blocks, the payload for list items
    (without prefix) and the space-joined paragraph for prose.
    """
    kind: BlockKind
    text: str
    prefix: str = ""


def classify_line(line: str) -> LineKind:
    """Classify a single raw line of wikitext."""
    stripped = line.strip()

    if not stripped:
        return LineKind.BLANK
    if stripped.startswith("="):
        return LineKind.HEADING
    if _CATEGORY_RE.match(stripped):
        return LineKind.CATEGORY
    if stripped.startswith("{{"):
        return LineKind.TEMPLATE_OPEN
    if stripped.startswith(_TABLE_PREFIXES):
        return LineKind.TABLE_SYNTAX
    if line[:1] in LIST_MARKERS:
        return LineKind.LIST_ITEM
    return LineKind.PROSE


def join_paragraph(lines: List[str]) -> str:
    """Collapse a run of prose lines into one logical paragraph."""
    return " ".join(line.strip() for line in lines).strip()


def _continuation_end(text: str, lines: List[str], offsets: List[int], i: int) -> int:
    """
    Return the index past the last line belonging to line ``i``: further lines
    are pulled in while an inline template opened on the run is still open.
    Unterminated templates are not followed.
    """
    j = i + 1
    pos = offsets[i]
    line_end = offsets[i] + len(lines[i])

    while True:
        start = text.find("{{", pos, line_end)
        if start < 0:
            return j
        end = find_template_close(text, start)
        if end is None:
            return j
        while j < len(lines) and offsets[j] < end:
            j += 1
        line_end = offsets[j - 1] + len(lines[j - 1])
        pos = end


def segment(text: str) -> Iterator[Block]:
    """
    Split ``text`` into blocks, in document order.

    Joining the structural block texts, the list items (prefix + payload) and
    the paragraphs back with newlines reproduces the document, except that
    multi-line paragraphs and items become single lines.
    """
    lines = text.split("\n")

    offsets: List[int] = []
    pos = 0
    for line in lines:
        offsets.append(pos)
        pos += len(line) + 1

    paragraph: List[str] = []
    table_depth = 0
    i = 0

    while i < len(lines):
        line = lines[i]
        kind = classify_line(line)

        if kind == LineKind.TABLE_SYNTAX:
            stripped = line.strip()
            if stripped.startswith("{|"):
                table_depth += 1
            elif stripped.startswith("|}") and table_depth:
                table_depth -= 1
            elif not table_depth:
                kind = LineKind.PROSE

        if kind == LineKind.PROSE:
            j = _continuation_end(text, lines, offsets, i)
            paragraph.extend(lines[i:j])
            i = j
            continue

        if paragraph:
            yield Block(BlockKind.PARAGRAPH, join_paragraph(paragraph))
            paragraph = []

        if kind == LineKind.LIST_ITEM:
            j = _continuation_end(text, lines, offsets, i)
            match = _LIST_ITEM_RE.match(line)
            payload = match.group("payload")
            if j > i + 1:
                payload = join_paragraph([payload] + lines[i + 1:j])
            yield Block(BlockKind.LIST_ITEM, payload, prefix=match.group("prefix"))
            i = j
            continue

        if kind == LineKind.TEMPLATE_OPEN:
            start = offsets[i] + line.index("{{")
            end = find_template_end(text, start)
            j = i + 1
            while j < len(lines) and offsets[j] < end:
                j += 1
            yield Block(BlockKind.STRUCTURAL, "\n".join(lines[i:j]))
            i = j
            continue

        yield Block(BlockKind.STRUCTURAL, line)
        i += 1

    if paragraph:
        yield Block(BlockKind.PARAGRAPH, join_paragraph(paragraph))
