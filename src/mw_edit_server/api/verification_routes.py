"""
Verification Routes

Preview what the verification transform would do to an edit, without writing
anything to the wiki.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from .models import PreviewRequest, PreviewResponse
from ..auth.models import UserContext
from ..auth.security import require_scopes
from ..config import settings
from ..verification import BaselineIndex, verify_source

router = APIRouter(
    prefix="/verification",
    tags=["verification"],
)


@router.post(
    "/preview",
    response_model=PreviewResponse,
    summary="Preview the verification transform",
)
async def preview(
    req: PreviewRequest,
    user: Annotated[UserContext, Depends(require_scopes("edit_page"))],
) -> PreviewResponse:
    baseline = None
    if req.base_source is not None:
        baseline = BaselineIndex.from_source(req.base_source)

    result = verify_source(
        req.title,
        req.source,
        baseline=baseline,
        attribution=settings.verification_attribution,
    )

    return PreviewResponse(
        source=result.source,
        outcome=result.outcome,
        template=result.template,
        changed=result.source != req.source,
    )
