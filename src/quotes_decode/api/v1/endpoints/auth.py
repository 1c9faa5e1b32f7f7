"""Authentication endpoints for the local data API.

Only the session surface the client needs is provided: resolving the
current user from an access token and signing out. OAuth provider
redirects are handled by the hosted identity service.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi import APIRouter, Response, status
from jose import jwt

from quotes_decode.core.settings import settings
from quotes_decode.schemas.session import AuthUser

from ..dependencies import CurrentUserDep

router = APIRouter(prefix="/auth/v1", tags=["authentication"])


def create_access_token(
    subject: str,
    *,
    email: str | None = None,
    user_metadata: dict[str, Any] | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Create a JWT access token for the given user id."""
    to_encode: dict[str, object] = {"sub": subject}
    if email:
        to_encode["email"] = email
    if user_metadata:
        to_encode["user_metadata"] = user_metadata
    minutes = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


@router.get("/user", response_model=AuthUser)
async def get_user(current_user: CurrentUserDep) -> AuthUser:
    """Return the user the bearer token was issued for."""
    return current_user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(current_user: CurrentUserDep) -> Response:
    """Acknowledge a sign-out.

    Tokens are stateless; the client discards its copy.
    """
    return Response(status_code=status.HTTP_204_NO_CONTENT)
