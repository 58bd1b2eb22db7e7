"""Tests for the session cookie dependency guarding protected endpoints."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from jose import jwt
from starlette.requests import Request

from src.api.dependencies import require_session
from src.config import get_settings

settings = get_settings()


def _token(secret=None, expires_delta=timedelta(hours=1), sub="user-123"):
    return jwt.encode(
        {"sub": sub, "exp": datetime.now(UTC) + expires_delta},
        secret or settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def test_no_cookie(client):
    response = client.get("/api/v1/users/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Authentication failed. No token provided."


def test_bearer_header_is_not_accepted(client):
    """Only the session cookie authenticates."""
    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {_token()}"})
    assert response.status_code == 401
    assert response.json()["error"] == "unauthenticated"


def test_invalid_signature(client):
    client.cookies.set("token", _token(secret="attacker-secret"))
    response = client.get("/api/v1/users/me")
    assert response.status_code == 401
    assert response.json()["error"] == "invalid_token"


def test_expired_token(client):
    client.cookies.set("token", _token(expires_delta=timedelta(seconds=-10)))
    response = client.get("/api/v1/users/me")
    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "token_expired",
        "message": "Token expired",
    }


def test_valid_token_for_unknown_user(client):
    client.cookies.set("token", _token(sub="no-such-user"))
    response = client.get("/api/v1/users/me")
    assert response.status_code == 404


def test_unexpected_failure_is_internal_error(client):
    """Unexpected verification errors never let the request through."""
    client.cookies.set("token", _token())
    with patch(
        "src.api.dependencies.decode_session_token", side_effect=RuntimeError("boom")
    ):
        response = client.get("/api/v1/users/me")
    assert response.status_code == 500
    assert response.json()["error"] == "internal_error"
    assert "boom" not in response.text


def _request(cookie=None):
    headers = [(b"cookie", f"token={cookie}".encode())] if cookie else []
    return Request({"type": "http", "headers": headers})


def test_require_session_attaches_user_id():
    request = _request(_token())
    assert require_session(request, settings) == "user-123"
    assert request.state.user_id == "user-123"
