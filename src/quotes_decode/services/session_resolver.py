"""Resolve the current identity and the interpretations it has upvoted."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from quotes_decode.clients.auth import AuthClient, AuthError, AuthSessionMissingError
from quotes_decode.clients.store import UPVOTES_TABLE, StoreClient, StoreError
from quotes_decode.schemas.session import SessionIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSession:
    """Identity plus the liked set that seeds view state on mount."""

    identity: SessionIdentity | None
    liked_ids: frozenset[str] = field(default_factory=frozenset)


class SessionResolver:
    """Turns the auth service's session into a display identity.

    "No session" is the normal anonymous state. Any other auth failure is
    logged and also treated as anonymous so the page keeps working.
    """

    def __init__(self, auth: AuthClient, store: StoreClient) -> None:
        self.auth = auth
        self.store = store

    async def resolve_session(self) -> SessionIdentity | None:
        try:
            user = await self.auth.get_user()
        except AuthSessionMissingError:
            return None
        except AuthError as exc:
            logger.error("Error checking user: %s", exc)
            return None
        return SessionIdentity.from_user(user)

    async def fetch_liked_ids(self, user_id: str) -> frozenset[str]:
        """Return the ids of interpretations ``user_id`` has upvoted."""
        try:
            rows = await self.store.select(
                UPVOTES_TABLE,
                columns="interpretation_id",
                filters={"user_id": user_id},
            )
        except StoreError as exc:
            logger.warning("Could not load upvotes for %s: %s", user_id, exc)
            return frozenset()
        return frozenset(str(row["interpretation_id"]) for row in rows)

    async def resolve(self) -> ResolvedSession:
        identity = await self.resolve_session()
        if identity is None:
            return ResolvedSession(identity=None)
        liked_ids = await self.fetch_liked_ids(identity.user_id)
        return ResolvedSession(identity=identity, liked_ids=liked_ids)
