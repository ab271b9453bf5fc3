"""
Outbound JWT Helpers

Short-lived, scoped server-to-server tokens attached to every request this
service makes to the wiki (revision reads and page writes). These are not user
tokens.
"""

from __future__ import annotations

import jwt
import time
from typing import List, Dict, Any

from ..config import settings
from .models import SERVICE_NAME, WIKI_NAME


class JWTConfigurationError(RuntimeError):
    """Raised when JWT generation cannot proceed due to configuration issues."""


def _validate_jwt_config() -> None:
    if not settings.jwt_mcp_to_mw_secret.get_secret_value():
        raise JWTConfigurationError(
            "jwt_mcp_to_mw_secret is not configured. Cannot generate JWT."
        )

    if settings.jwt_ttl_seconds <= 0:
        raise JWTConfigurationError(
            f"jwt_ttl_seconds must be a positive integer; got {settings.jwt_ttl_seconds}"
        )


def create_mcp_to_mw_jwt(scopes: List[str]) -> str:
    """
    Generate a short-lived JWT for a request to MediaWiki.

    Parameters
    ----------
    scopes : List[str]
        Granted scopes, e.g. ["page_read"] or ["page_write"].

    Returns
    -------
    str
        Encoded JWT for an ``Authorization: Bearer`` header.

    Raises
    ------
    JWTConfigurationError
        If configuration is missing or invalid.
    """
    _validate_jwt_config()

    now = int(time.time())
    payload: Dict[str, Any] = {
        "iss": SERVICE_NAME,
        "aud": WIKI_NAME,
        "iat": now,
        "exp": now + settings.jwt_ttl_seconds,
        "scope": scopes,
    }

    try:
        return jwt.encode(
            payload,
            settings.jwt_mcp_to_mw_secret.get_secret_value(),
            algorithm=settings.JWT_ALGO,
        )
    except Exception as exc:
        raise JWTConfigurationError(
            f"Failed to generate JWT: {type(exc).__name__}: {str(exc)}"
        ) from exc
