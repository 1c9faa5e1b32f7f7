# tests/v1/test_auth.py
"""Tests for the auth surface of the data API."""

from datetime import UTC, datetime, timedelta

from fastapi import status
from jose import jwt

from quotes_decode.core.settings import settings


def test_get_user_returns_token_identity(client, auth_headers) -> None:
    response = client.get("/auth/v1/user", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["id"] == "user-b"
    assert body["email"] == "bea@example.com"
    assert body["user_metadata"] == {"full_name": "Bea Quill"}


def test_get_user_without_token_is_unauthorized(client) -> None:
    response = client.get("/auth/v1/user")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Auth session missing!"


def test_get_user_with_garbage_token(client) -> None:
    response = client.get("/auth/v1/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Could not validate credentials"


def test_get_user_with_expired_token(client) -> None:
    token = jwt.encode(
        {"sub": "user-b", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    response = client.get("/auth/v1/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_without_subject_is_rejected(client) -> None:
    token = jwt.encode({"email": "x@example.com"}, settings.jwt_secret, algorithm="HS256")
    response = client.get("/auth/v1/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_logout(client, auth_headers) -> None:
    response = client.post("/auth/v1/logout", headers=auth_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT


def test_logout_requires_session(client) -> None:
    response = client.post("/auth/v1/logout")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
