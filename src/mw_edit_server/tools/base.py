"""
Tool Dispatch Layer

Central, authoritative dispatch for tool calls. Only tools registered here can
be invoked; arguments are validated before any handler runs.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional

from ..middleware import MiddlewarePipeline, ToolResult
from ..wiki.api_client import MediaWikiClient
from .definitions import TOOL_CREATE_PAGE, TOOL_UPDATE_PAGE
from .edit_tools import tool_create_page, tool_update_page


ToolHandler = Callable[
    [Dict[str, Any], Optional[MediaWikiClient], Optional[MiddlewarePipeline]],
    Awaitable[ToolResult],
]


# ---------------------------------------------------------------------
# Argument Helpers
# ---------------------------------------------------------------------

def _require_str(args: Dict[str, Any], key: str, tool: str, allow_empty: bool = False) -> str:
    value = args.get(key)
    if not isinstance(value, str) or (not allow_empty and not value):
        raise ValueError(f"{tool} requires '{key}' argument.")
    return value


def _optional_str(args: Dict[str, Any], key: str, tool: str) -> Optional[str]:
    value = args.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{tool} argument '{key}' must be a string.")
    return value


# ---------------------------------------------------------------------
# Tool Registry (AUTHORITATIVE)
# ---------------------------------------------------------------------

async def _handle_create_page(
    args: Dict[str, Any],
    client: Optional[MediaWikiClient],
    edit_pipeline: Optional[MiddlewarePipeline],
) -> ToolResult:
    return await tool_create_page(
        title=_require_str(args, "title", TOOL_CREATE_PAGE),
        source=_require_str(args, "source", TOOL_CREATE_PAGE, allow_empty=True),
        comment=_optional_str(args, "comment", TOOL_CREATE_PAGE),
        content_model=_optional_str(args, "contentModel", TOOL_CREATE_PAGE) or "wikitext",
        client=client,
        edit_pipeline=edit_pipeline,
    )


async def _handle_update_page(
    args: Dict[str, Any],
    client: Optional[MediaWikiClient],
    edit_pipeline: Optional[MiddlewarePipeline],
) -> ToolResult:
    latest_id = args.get("latestId")
    if isinstance(latest_id, bool) or not isinstance(latest_id, int) or latest_id <= 0:
        raise ValueError(f"{TOOL_UPDATE_PAGE} requires a positive integer 'latestId' argument.")

    return await tool_update_page(
        title=_require_str(args, "title", TOOL_UPDATE_PAGE),
        source=_require_str(args, "source", TOOL_UPDATE_PAGE, allow_empty=True),
        latest_id=latest_id,
        comment=_optional_str(args, "comment", TOOL_UPDATE_PAGE),
        client=client,
        edit_pipeline=edit_pipeline,
    )


TOOL_REGISTRY: Dict[str, ToolHandler] = {
    TOOL_CREATE_PAGE: _handle_create_page,
    TOOL_UPDATE_PAGE: _handle_update_page,
}


# ---------------------------------------------------------------------
# Public Dispatch API
# ---------------------------------------------------------------------

async def dispatch_tool_call(
    tool_name: str,
    args: Dict[str, Any],
    client: Optional[MediaWikiClient] = None,
    edit_pipeline: Optional[MiddlewarePipeline] = None,
) -> ToolResult:
    """
    Dispatch a tool call.

    Parameters
    ----------
    tool_name : str
        Registered tool name.

    args : Dict[str, Any]
        Parsed JSON arguments for the tool.

    client, edit_pipeline
        Optional testing overrides.

    Returns
    -------
    ToolResult
        Tool output; upstream wiki failures come back with ``is_error`` set.

    Raises
    ------
    ValueError
        If the tool name is unknown or required arguments are missing.
    """
    handler = TOOL_REGISTRY.get(tool_name)
    if not handler:
        raise ValueError(f"Unknown tool requested: {tool_name}")

    return await handler(args, client, edit_pipeline)
