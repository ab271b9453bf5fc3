"""
JWT Verification & Scope Enforcement

Verifies bearer tokens issued by the wiki for callers of the edit tools and
turns them into a ``UserContext``. Inbound tokens use a different secret from
the outbound tokens in ``jwt_utils``.
"""

from __future__ import annotations

import jwt
from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..config import settings
from .models import SERVICE_NAME, WIKI_NAME, UserContext


security = HTTPBearer(auto_error=True)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _decode_wiki_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.jwt_mw_to_mcp_secret.get_secret_value(),
        algorithms=[settings.JWT_ALGO],
        audience=SERVICE_NAME,
        issuer=WIKI_NAME,
        options={
            "require": ["iss", "aud", "iat", "exp", "user", "scope"],
        },
    )


def verify_mw_to_mcp_jwt(
    creds: HTTPAuthorizationCredentials = Depends(security),
) -> UserContext:
    """
    Verify a JWT issued by the wiki and construct a UserContext.

    Raises
    ------
    HTTPException(401) for invalid or expired tokens.
    """
    try:
        payload = _decode_wiki_token(creds.credentials)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired.")
    except jwt.InvalidAudienceError:
        raise _unauthorized("Invalid token audience.")
    except jwt.InvalidIssuerError:
        raise _unauthorized("Invalid token issuer.")
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid token.")

    username = payload.get("user")
    roles = payload.get("roles", [])
    scopes = payload.get("scope")

    if not username:
        raise _unauthorized("Token missing 'user' claim.")
    if not isinstance(roles, list):
        raise _unauthorized("'roles' claim must be a list.")
    if not isinstance(scopes, list):
        raise _unauthorized("'scope' claim must be a list.")

    return UserContext(
        username=username,
        roles=roles,
        scopes=scopes,
        client_id=payload.get("client_id", WIKI_NAME),
    )


def require_scopes(*required_scopes: str) -> Callable:
    """
    Create a FastAPI dependency that enforces scope-based access control.

    Example:
        @router.post("/tools/call")
        async def call(user = Depends(require_scopes("edit_page"))):
            ...
    """

    def check_scopes(
        user: UserContext = Depends(verify_mw_to_mcp_jwt),
    ) -> UserContext:
        missing = [s for s in required_scopes if s not in user.scopes]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing required scope(s): {', '.join(missing)}",
            )
        return user

    return check_scopes
