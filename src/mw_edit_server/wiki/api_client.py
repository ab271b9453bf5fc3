"""
MediaWiki API Client

Thin async client for the two wiki surfaces the edit tools need:

- the Action API (api.php) for reading a specific revision's wikitext;
- the REST API (rest.php) for creating and updating pages.

Every request carries a short-lived MCP -> MediaWiki JWT scoped to the
operation (``page_read`` or ``page_write``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..config import settings
from ..auth.jwt_utils import create_mcp_to_mw_jwt
from .models import PageObject

logger = logging.getLogger("mcp.wiki")


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class MediaWikiClientError(RuntimeError):
    """Base exception for MediaWiki client failures."""


class MediaWikiRequestError(MediaWikiClientError):
    """Raised when the request cannot be completed or returns an HTTP error."""


class MediaWikiResponseError(MediaWikiClientError):
    """Raised when the wiki answers with an error payload or an unexpected shape."""


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _rest_error_message(resp: httpx.Response) -> str:
    """Best-effort human-readable message from a REST error response."""
    try:
        data = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"

    if isinstance(data, dict):
        translations = data.get("messageTranslations") or {}
        message = translations.get("en") or data.get("message") or data.get("httpReason")
        if message:
            return str(message)
    return f"HTTP {resp.status_code}"


def _title_path(title: str) -> str:
    return quote(title.replace(" ", "_"), safe="")


def _page_object(data: Dict[str, Any]) -> PageObject:
    try:
        return PageObject.model_validate(data)
    except ValidationError as exc:
        raise MediaWikiResponseError(
            f"Unexpected page object in REST response: {exc.error_count()} error(s)"
        ) from exc


# ---------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------

class MediaWikiClient:
    def __init__(
        self,
        api_base_url: Optional[str] = None,
        rest_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = api_base_url or str(settings.mw_api_base_url)
        self.rest_url = (rest_base_url or str(settings.mw_rest_base_url)).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds

    def _headers(self, scopes: list[str]) -> Dict[str, str]:
        token = create_mcp_to_mw_jwt(scopes)
        return {"Authorization": f"Bearer {token}"}

    async def _request(self, params: Dict[str, Any], scopes: list[str] = None) -> Dict[str, Any]:
        """
        Make authenticated GET request to the MediaWiki Action API.

        Args:
            params: MediaWiki API parameters
            scopes: JWT scopes for this request (defaults to ["page_read"])
        """
        if scopes is None:
            scopes = ["page_read"]

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.base_url, params=params, headers=self._headers(scopes))
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise MediaWikiRequestError(
                f"Action API request failed: {type(exc).__name__}: {exc}"
            ) from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise MediaWikiResponseError("Action API returned non-JSON response") from exc

        if isinstance(data, dict) and "error" in data:
            error = data["error"]
            raise MediaWikiResponseError(
                f"{error.get('code', 'unknown')}: {error.get('info', '')}".strip()
            )
        return data

    async def _rest(
        self,
        method: str,
        path: str,
        payload: Dict[str, Any],
        scopes: list[str],
    ) -> Dict[str, Any]:
        """Make authenticated JSON request to the MediaWiki REST API."""
        url = f"{self.rest_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.request(method, url, json=payload, headers=self._headers(scopes))
        except httpx.HTTPError as exc:
            raise MediaWikiRequestError(
                f"REST request failed: {type(exc).__name__}: {exc}"
            ) from exc

        if resp.status_code >= 400:
            raise MediaWikiRequestError(_rest_error_message(resp))

        try:
            return resp.json()
        except ValueError as exc:
            raise MediaWikiResponseError("REST API returned non-JSON response") from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_revision_wikitext(self, revision_id: int) -> str | None:
        """Return the main-slot wikitext of a revision, or None if it does not exist."""
        params = {
            "action": "query",
            "prop": "revisions",
            "revids": revision_id,
            "rvprop": "content",
            "rvslots": "main",
            "format": "json",
            "formatversion": 2,
        }
        data = await self._request(params, scopes=["page_read"])
        query = data.get("query")
        if not query or query.get("badrevids"):
            return None
        pages = query.get("pages", [])
        if not pages or "missing" in pages[0]:
            return None
        revisions = pages[0].get("revisions") or []
        if not revisions:
            return None
        try:
            return revisions[0]["slots"]["main"]["content"]
        except (KeyError, TypeError) as exc:
            raise MediaWikiResponseError(
                f"Unexpected revision payload for revision {revision_id}"
            ) from exc

    async def create_page(
        self,
        title: str,
        source: str,
        comment: str,
        content_model: str = "wikitext",
    ) -> PageObject:
        data = await self._rest(
            "POST",
            "/v1/page",
            {
                "source": source,
                "title": title,
                "comment": comment,
                "content_model": content_model,
            },
            scopes=["page_write"],
        )
        page = _page_object(data)
        logger.info("Created page %s (revision %s)", page.title, page.latest.id)
        return page

    async def update_page(
        self,
        title: str,
        source: str,
        comment: str,
        latest_id: int,
    ) -> PageObject:
        """
        Replace the content of ``title``. ``latest_id`` is the base revision;
        the wiki rejects the edit if the page has moved on since.
        """
        data = await self._rest(
            "PUT",
            f"/v1/page/{_title_path(title)}",
            {
                "source": source,
                "comment": comment,
                "latest": {"id": latest_id},
            },
            scopes=["page_write"],
        )
        page = _page_object(data)
        logger.info("Updated page %s (revision %s)", page.title, page.latest.id)
        return page

    def page_url(self, title: str) -> str:
        if settings.mw_article_url:
            return f"{settings.mw_article_url}{_title_path(title)}"
        # Fall back to index.php next to rest.php
        base = self.rest_url.rsplit("/", 1)[0]
        return f"{base}/index.php?title={_title_path(title)}"
