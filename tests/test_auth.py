import pytest
import jwt
import time
from fastapi import HTTPException

from mw_edit_server.auth.security import verify_mw_to_mcp_jwt, require_scopes
from mw_edit_server.auth.jwt_utils import create_mcp_to_mw_jwt
from mw_edit_server.auth.models import SERVICE_NAME, WIKI_NAME
from mw_edit_server.config import settings


def create_valid_token(
    issuer="MediaWiki",
    audience="mw-edit-server",
    user="EditBot",
    scopes=None,
    expired=False,
    secret=None,
):
    if scopes is None:
        scopes = ["edit_page"]
    if secret is None:
        secret = settings.jwt_mw_to_mcp_secret.get_secret_value()

    now = int(time.time())
    iat = now - 3600 if expired else now
    exp = iat - 10 if expired else now + 30

    payload = {
        "iss": issuer,
        "aud": audience,
        "iat": iat,
        "exp": exp,
        "user": user,
        "roles": ["bot"],
        "scope": scopes,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


class MockCredentials:
    def __init__(self, token):
        self.credentials = token


def test_valid_jwt_accepted():
    user = verify_mw_to_mcp_jwt(MockCredentials(create_valid_token()))

    assert user.username == "EditBot"
    assert "bot" in user.roles
    assert "edit_page" in user.scopes
    assert user.client_id == "MediaWiki"


def test_expired_jwt_rejected():
    with pytest.raises(HTTPException) as excinfo:
        verify_mw_to_mcp_jwt(MockCredentials(create_valid_token(expired=True)))
    assert excinfo.value.status_code == 401
    assert "expired" in excinfo.value.detail


def test_wrong_issuer_rejected():
    with pytest.raises(HTTPException) as excinfo:
        verify_mw_to_mcp_jwt(MockCredentials(create_valid_token(issuer="Elsewhere")))
    assert excinfo.value.status_code == 401
    assert "issuer" in excinfo.value.detail


def test_wrong_audience_rejected():
    with pytest.raises(HTTPException) as excinfo:
        verify_mw_to_mcp_jwt(MockCredentials(create_valid_token(audience="wrong-audience")))
    assert excinfo.value.status_code == 401
    assert "audience" in excinfo.value.detail


def test_wrong_signature_rejected():
    token = create_valid_token(secret="wrong-secret-key-that-is-long-enough-32")
    with pytest.raises(HTTPException) as excinfo:
        verify_mw_to_mcp_jwt(MockCredentials(token))
    assert excinfo.value.status_code == 401
    assert "Invalid token" in excinfo.value.detail


def test_missing_scope_rejected():
    user = verify_mw_to_mcp_jwt(MockCredentials(create_valid_token(scopes=["chat_completion"])))

    with pytest.raises(HTTPException) as excinfo:
        require_scopes("edit_page")(user)
    assert excinfo.value.status_code == 403
    assert "Missing required scope" in excinfo.value.detail


def test_outbound_jwt_generation():
    token = create_mcp_to_mw_jwt(scopes=["page_write"])

    payload = jwt.decode(
        token,
        settings.jwt_mcp_to_mw_secret.get_secret_value(),
        algorithms=["HS256"],
        audience="MediaWiki",
    )

    assert payload["iss"] == SERVICE_NAME == "mw-edit-server"
    assert payload["aud"] == WIKI_NAME == "MediaWiki"
    assert payload["scope"] == ["page_write"]
    assert payload["exp"] > payload["iat"]
