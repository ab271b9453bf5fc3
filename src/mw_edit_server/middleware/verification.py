"""
Verification Middleware

Applies the verification transform to every page edit before it reaches the
wiki, and tells the caller afterwards that the content was flagged.

For updates, the base revision the caller edited from is fetched and used as
the baseline, so only content that is new or changed gets flagged. A failed
fetch does not block the edit; everything is then treated as new.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .models import ContentBlock, EditContext, ToolResult
from .pipeline import Middleware
from ..verification import (
    BaselineIndex,
    VerificationOutcome,
    is_exempt_title,
    precheck,
    verify_source,
)

logger = logging.getLogger("mcp.verification")


ADVISORY_NOTE = (
    "⚠️ This edit was automatically marked as \"proposed\" and requires "
    "human verification."
)


class RevisionSource(Protocol):
    async def get_revision_wikitext(self, revision_id: int) -> Optional[str]:
        ...


class VerificationMiddleware(Middleware):
    name = "verification"

    def __init__(self, revisions: RevisionSource, attribution: str = "bot") -> None:
        self._revisions = revisions
        self._attribution = attribution

    async def _load_baseline(self, context: EditContext) -> Optional[BaselineIndex]:
        """Index the base revision of an update, or None if it cannot be had."""
        try:
            text = await self._revisions.get_revision_wikitext(context.latest_id)
        except Exception as exc:
            logger.warning(
                "%s: could not fetch base revision %s (%s); treating all content as new",
                context.title,
                context.latest_id,
                type(exc).__name__,
            )
            return None

        if text is None:
            logger.warning(
                "%s: base revision %s not found; treating all content as new",
                context.title,
                context.latest_id,
            )
            return None

        return BaselineIndex.from_source(text)

    async def on_input(self, context: EditContext) -> EditContext:
        outcome = precheck(context.title, context.source)
        if outcome == VerificationOutcome.EXEMPT:
            logger.info("%s: exempt namespace, not verified", context.title)
            return context
        if outcome == VerificationOutcome.ALREADY_MARKED:
            logger.info("%s: already has verification markers", context.title)
            return context

        baseline = None
        if context.tool == "update-page" and context.latest_id:
            baseline = await self._load_baseline(context)

        result = verify_source(
            context.title,
            context.source,
            baseline=baseline,
            attribution=self._attribution,
        )

        if result.template:
            logger.info("%s: injected status=proposed into {{%s}}", context.title, result.template)
        else:
            logger.info("%s: wrapped new content for verification", context.title)

        return context.model_copy(update={"source": result.source})

    async def on_output(self, context: EditContext, result: ToolResult) -> ToolResult:
        if result.is_error or is_exempt_title(context.title):
            return result

        note = ContentBlock(type="note", text=ADVISORY_NOTE)
        return result.model_copy(update={"content": [*result.content, note]})
