"""
Edit Pipeline Models

The edit context that flows through the middleware pipeline on the way to the
wiki, and the tool result that flows back out.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


EditTool = Literal["create-page", "update-page"]


class EditContext(BaseModel):
    """
    One create/update request. Middlewares return modified copies; the
    context is never mutated in place.
    """
    tool: EditTool
    title: str = Field(..., min_length=1)
    source: str
    comment: Optional[str] = None
    content_model: str = "wikitext"
    latest_id: Optional[int] = Field(default=None, gt=0)

    model_config = ConfigDict(frozen=True, extra="forbid")


class ContentBlock(BaseModel):
    type: Literal["text", "note"] = "text"
    text: str

    model_config = ConfigDict(frozen=True, extra="forbid")


class ToolResult(BaseModel):
    content: List[ContentBlock] = Field(default_factory=list)
    is_error: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[ContentBlock(text=message)], is_error=True)
