"""Authentication identity schemas and display-name derivation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """User object returned by the authentication service."""

    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)


class SessionIdentity(BaseModel):
    """Identity derived from the current authentication session."""

    user_id: str
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_user(cls, user: AuthUser) -> SessionIdentity:
        return cls(
            user_id=user.id,
            email=user.email,
            display_name=derive_display_name(user.user_metadata, user.email),
            avatar_url=derive_avatar_url(user.user_metadata),
        )


def derive_display_name(metadata: Mapping[str, Any] | None, email: str | None) -> str | None:
    """Prefer the full-name claim, then the name claim, then the email local part."""
    metadata = metadata or {}
    for claim in ("full_name", "name"):
        value = metadata.get(claim)
        if isinstance(value, str) and value:
            return value
    if email:
        local_part = email.split("@")[0]
        return local_part or None
    return None


def derive_avatar_url(metadata: Mapping[str, Any] | None) -> str | None:
    value = (metadata or {}).get("picture")
    return value if isinstance(value, str) and value else None
