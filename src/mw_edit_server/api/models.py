"""
API Models

Pydantic request/response models for the HTTP surface of the edit server.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ConfigDict

from ..verification import VerificationOutcome


class ToolCallRequest(BaseModel):
    """
    A single tool invocation.
    """
    name: str = Field(..., min_length=1)
    arguments: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class PreviewRequest(BaseModel):
    """
    Dry-run of the verification transform. ``base_source`` is the wikitext of
    the revision the edit is based on, if any.
    """
    title: str = Field(..., min_length=1)
    source: str
    base_source: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class PreviewResponse(BaseModel):
    source: str
    outcome: VerificationOutcome
    template: Optional[str] = None
    changed: bool

    model_config = ConfigDict(extra="forbid")
