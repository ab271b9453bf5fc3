"""
Edit Tools

Create/update page handlers. Each request is turned into an ``EditContext``,
passed through the middleware pipeline (which is where verification happens),
and only then written to the wiki.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..config import settings
from ..middleware import (
    ContentBlock,
    EditContext,
    MiddlewarePipeline,
    ToolResult,
    build_default_pipeline,
)
from ..wiki.api_client import MediaWikiClient, MediaWikiClientError
from ..wiki.models import PageObject
from .definitions import TOOL_CREATE_PAGE, TOOL_UPDATE_PAGE

logger = logging.getLogger("mcp.tools")


# ---------------------------------------------------------------------
# Dependency Injection
# ---------------------------------------------------------------------

mw_client = MediaWikiClient()
pipeline = build_default_pipeline(mw_client)


# ---------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------

def format_edit_comment(tool: str, comment: Optional[str]) -> str:
    """Edit summary with the server tag appended."""
    tag = f"[{settings.edit_comment_tag}: {tool}]"
    if comment:
        return f"{comment} {tag}"
    return tag


def _page_result(verb: str, page: PageObject, client: MediaWikiClient) -> List[ContentBlock]:
    return [
        ContentBlock(text=f"Page {verb} successfully: {client.page_url(page.title)}"),
        ContentBlock(
            text="\n".join([
                "Page object:",
                f"Page ID: {page.id}",
                f"Title: {page.title}",
                f"Latest revision ID: {page.latest.id}",
                f"Latest revision timestamp: {page.latest.timestamp}",
                f"Content model: {page.content_model}",
                f"License: {page.license.url} {page.license.title}",
                f"HTML URL: {page.html_url}",
            ])
        ),
    ]


# ---------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------

def _create_handler(client: MediaWikiClient):
    async def handle(context: EditContext) -> ToolResult:
        try:
            page = await client.create_page(
                title=context.title,
                source=context.source,
                comment=format_edit_comment(TOOL_CREATE_PAGE, context.comment),
                content_model=context.content_model,
            )
        except MediaWikiClientError as exc:
            logger.warning("create-page failed for %s: %s", context.title, exc)
            return ToolResult.error(f"Failed to create page: {exc}")
        return ToolResult(content=_page_result("created", page, client))

    return handle


def _update_handler(client: MediaWikiClient):
    async def handle(context: EditContext) -> ToolResult:
        try:
            page = await client.update_page(
                title=context.title,
                source=context.source,
                comment=format_edit_comment(TOOL_UPDATE_PAGE, context.comment),
                latest_id=context.latest_id,
            )
        except MediaWikiClientError as exc:
            logger.warning("update-page failed for %s: %s", context.title, exc)
            return ToolResult.error(f"Failed to update page: {exc}")
        return ToolResult(content=_page_result("updated", page, client))

    return handle


async def tool_create_page(
    title: str,
    source: str,
    comment: Optional[str] = None,
    content_model: str = "wikitext",
    client: Optional[MediaWikiClient] = None,
    edit_pipeline: Optional[MiddlewarePipeline] = None,
) -> ToolResult:
    """
    Create a wiki page through the edit pipeline.

    ``client`` and ``edit_pipeline`` are testing overrides.
    """
    context = EditContext(
        tool=TOOL_CREATE_PAGE,
        title=title,
        source=source,
        comment=comment,
        content_model=content_model,
    )
    edit_pipeline = edit_pipeline or pipeline
    return await edit_pipeline.wrap_handler(context, _create_handler(client or mw_client))


async def tool_update_page(
    title: str,
    source: str,
    latest_id: int,
    comment: Optional[str] = None,
    client: Optional[MediaWikiClient] = None,
    edit_pipeline: Optional[MiddlewarePipeline] = None,
) -> ToolResult:
    """
    Update a wiki page through the edit pipeline.

    ``latest_id`` is the revision the new source was based on; it doubles as
    the baseline for verification and as the edit-conflict guard on the wiki.
    """
    context = EditContext(
        tool=TOOL_UPDATE_PAGE,
        title=title,
        source=source,
        comment=comment,
        latest_id=latest_id,
    )
    edit_pipeline = edit_pipeline or pipeline
    return await edit_pipeline.wrap_handler(context, _update_handler(client or mw_client))
