"""
Edit Middleware Package

Pipeline of pre/post hooks wrapped around every page create/update.
"""

from .models import ContentBlock, EditContext, ToolResult
from .pipeline import Middleware, MiddlewarePipeline
from .verification import ADVISORY_NOTE, RevisionSource, VerificationMiddleware
from ..config import settings


def build_default_pipeline(revisions: RevisionSource) -> MiddlewarePipeline:
    """Pipeline with the middlewares enabled in configuration, in order."""
    pipeline = MiddlewarePipeline()
    if settings.verification_enabled:
        pipeline.register(
            VerificationMiddleware(revisions, attribution=settings.verification_attribution)
        )
    return pipeline


__all__ = [
    "ContentBlock",
    "EditContext",
    "ToolResult",
    "Middleware",
    "MiddlewarePipeline",
    "ADVISORY_NOTE",
    "RevisionSource",
    "VerificationMiddleware",
    "build_default_pipeline",
]
