"""Shared API dependencies for authentication and row filtering."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from quotes_decode.core.settings import settings
from quotes_decode.db.session import get_db
from quotes_decode.schemas.session import AuthUser

# auto_error is off so anonymous reads (and anonymous posting, when enabled) get through.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def decode_access_token(token: str) -> AuthUser:
    """Decode a bearer token into the user it was issued for.

    Args:
        token: Encoded JWT access token

    Returns:
        The user identity carried in the token claims

    Raises:
        HTTPException: If the token is invalid, expired or has no subject
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return AuthUser(
        id=subject,
        email=payload.get("email"),
        user_metadata=payload.get("user_metadata") or {},
    )


def get_optional_user(credentials: CredentialsDep) -> AuthUser | None:
    """Return the caller's identity, or None for anonymous requests.

    The anon key is sent as a bearer token by unauthenticated clients; it is
    not a JWT and is treated as anonymous.
    """
    if credentials is None or credentials.credentials == settings.anon_key:
        return None
    return decode_access_token(credentials.credentials)


def get_current_user(user: Annotated[AuthUser | None, Depends(get_optional_user)]) -> AuthUser:
    """Require an authenticated caller."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Auth session missing!",
        )
    return user


OptionalUserDep = Annotated[AuthUser | None, Depends(get_optional_user)]
CurrentUserDep = Annotated[AuthUser, Depends(get_current_user)]


def eq_value(raw: str | None, column: str) -> str | None:
    """Extract the value of a ``column=eq.<value>`` filter.

    Only equality filters are supported.
    """
    if raw is None:
        return None
    operator, sep, value = raw.partition(".")
    if not sep or operator != "eq":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported filter for {column}: only eq is allowed",
        )
    return value


def require_eq_value(raw: str | None, column: str) -> str:
    value = eq_value(raw, column)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Filter on {column} is required",
        )
    return value


def parse_order(raw: str | None, allowed: set[str]) -> tuple[str, bool] | None:
    """Parse ``column.desc`` / ``column.asc`` into ``(column, descending)``."""
    if raw is None:
        return None
    column, _, direction = raw.partition(".")
    direction = direction or "asc"
    if column not in allowed or direction not in {"asc", "desc"}:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported order: {raw}",
        )
    return column, direction == "desc"
