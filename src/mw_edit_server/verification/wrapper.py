"""
Provenance Wrapping

Decides, block by block, whether content is new and unverified, and wraps it
in the provenance marker if so. Operates on the blocks produced by
``segmenter.segment``.
"""

from __future__ import annotations

from typing import List, Optional

from . import markers
from .baseline import BaselineIndex
from .segmenter import Block, BlockKind, segment


def should_wrap(payload: str, baseline: Optional[BaselineIndex] = None) -> bool:
    """
    Return True if ``payload`` is a new claim that needs the provenance marker.

    Skipped: empty payloads, payloads already wrapped, payloads citing a
    verified/source template, bare links, and content present in the baseline.
    """
    text = payload.strip()

    if not text:
        return False
    if markers.is_wrapped(text) or markers.is_already_verified(text):
        return False
    if markers.is_bare_link(text):
        return False
    if baseline is not None and text in baseline:
        return False
    return True


def render_block(
    block: Block,
    baseline: Optional[BaselineIndex] = None,
    attribution: str = markers.DEFAULT_ATTRIBUTION,
) -> str:
    """Render one block back to wikitext, wrapping it if it is new."""
    if block.kind == BlockKind.STRUCTURAL:
        return block.text

    if block.kind == BlockKind.LIST_ITEM:
        if should_wrap(block.text, baseline):
            return block.prefix + markers.wrap(block.text.strip(), attribution)
        return block.prefix + block.text

    if should_wrap(block.text, baseline):
        return markers.wrap(block.text, attribution)
    return block.text


def wrap_content(
    text: str,
    baseline: Optional[BaselineIndex] = None,
    attribution: str = markers.DEFAULT_ATTRIBUTION,
) -> str:
    """
    Segment ``text`` and wrap every new list item and paragraph.

    Structural lines come back byte-identical; multi-line paragraphs come back
    as single lines.
    """
    rendered: List[str] = [
        render_block(block, baseline, attribution) for block in segment(text)
    ]
    return "\n".join(rendered)
