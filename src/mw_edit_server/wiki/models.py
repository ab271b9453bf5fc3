"""
MediaWiki REST Models

Typed view of the page object returned by the MediaWiki REST API on page
creation and update.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RevisionRef(BaseModel):
    id: int
    timestamp: str

    model_config = ConfigDict(extra="ignore")


class LicenseInfo(BaseModel):
    url: str = ""
    title: str = ""

    model_config = ConfigDict(extra="ignore")


class PageObject(BaseModel):
    """
    Page object as returned by ``POST /v1/page`` and ``PUT /v1/page/{title}``.
    """
    id: int
    title: str
    latest: RevisionRef
    content_model: str
    license: LicenseInfo = Field(default_factory=LicenseInfo)
    html_url: str = ""

    model_config = ConfigDict(extra="ignore")
