"""
Tool Routes

HTTP entry point for the edit tools.

Security Model:
- Scope-based access control via `require_scopes("edit_page")`
- Wiki writes are made with the server's own outbound credentials
"""

from typing import Annotated, Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from .dependencies import get_edit_pipeline, get_mw_client
from .models import ToolCallRequest
from ..auth.models import UserContext
from ..auth.security import require_scopes
from ..middleware import MiddlewarePipeline, ToolResult
from ..tools.base import dispatch_tool_call
from ..tools.definitions import TOOL_DEFINITIONS
from ..wiki.api_client import MediaWikiClient

router = APIRouter(
    prefix="/tools",
    tags=["tools"],
)


@router.get(
    "",
    summary="List the available edit tools",
)
async def list_tools() -> List[Dict[str, Any]]:
    return TOOL_DEFINITIONS


@router.post(
    "/call",
    response_model=ToolResult,
    status_code=status.HTTP_200_OK,
    summary="Invoke an edit tool",
    description=(
        "Runs create-page or update-page. New content is flagged as proposed "
        "before it is written. Requires the `edit_page` scope."
    ),
)
async def call_tool(
    req: ToolCallRequest,
    user: Annotated[UserContext, Depends(require_scopes("edit_page"))],
    client: Annotated[MediaWikiClient, Depends(get_mw_client)],
    edit_pipeline: Annotated[MiddlewarePipeline, Depends(get_edit_pipeline)],
) -> ToolResult:
    """
    A rejected write comes back as a 200 with ``is_error`` set; only malformed
    calls are HTTP errors.
    """
    try:
        return await dispatch_tool_call(
            req.name,
            req.arguments,
            client=client,
            edit_pipeline=edit_pipeline,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
