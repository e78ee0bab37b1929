# tests/test_security.py
"""Tests for bearer token helpers and the auth endpoint."""

from datetime import UTC, datetime, timedelta

from fastapi import status
from jose import jwt

from comment_stage.core.security import create_access_token, decode_access_token
from comment_stage.core.settings import settings


def _encode(claims: dict) -> str:
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def test_token_round_trip() -> None:
    token = create_access_token(42)

    assert decode_access_token(token) == 42


def test_wrong_signature_is_rejected() -> None:
    token = jwt.encode({"sub": "42"}, "some-other-secret", algorithm=settings.jwt_algorithm)

    assert decode_access_token(token) is None


def test_expired_token_is_rejected() -> None:
    token = _encode({"sub": "42", "exp": datetime.now(UTC) - timedelta(minutes=1)})

    assert decode_access_token(token) is None


def test_token_without_numeric_subject_is_rejected() -> None:
    assert decode_access_token(_encode({"sub": "alice"})) is None
    assert decode_access_token(_encode({"scope": "comments"})) is None
    assert decode_access_token("not-a-jwt") is None


def test_me_returns_current_user(client, alice, alice_auth) -> None:
    response = client.get("/auth/me", headers=alice_auth)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["id"] == alice.id
    assert body["displayName"] == "Alice"
    assert body["externalIdentityId"] == alice.external_identity_id


def test_me_with_invalid_token(client) -> None:
    response = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Could not validate credentials"}


def test_me_for_deleted_user(client) -> None:
    headers = {"Authorization": f"Bearer {create_access_token(99999)}"}

    response = client.get("/auth/me", headers=headers)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "User not found"}


def test_me_without_token(client) -> None:
    response = client.get("/auth/me")

    assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
    assert "error" in response.json()
