"""Clients for the remote store and authentication service.

Both clients are constructed once by :func:`create_clients` and passed by
reference to whatever needs them.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from quotes_decode.core.settings import Settings

from .auth import (
    AuthApiError,
    AuthChangeEvent,
    AuthClient,
    AuthConfig,
    AuthError,
    AuthSession,
    AuthSessionMissingError,
    AuthSubscription,
)
from .store import StoreClient, StoreConfig, StoreError


@dataclass(frozen=True)
class RemoteClients:
    """The store and auth clients shared by one running application."""

    store: StoreClient
    auth: AuthClient

    async def close(self) -> None:
        await self.store.close()
        await self.auth.close()


def create_clients(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RemoteClients:
    """Build the client pair from settings.

    The store client authenticates with the auth client's current access
    token, falling back to the anon key.
    """
    auth = AuthClient(
        AuthConfig(base_url=settings.effective_auth_url, anon_key=settings.anon_key),
        transport=transport,
    )
    store = StoreClient(
        StoreConfig(base_url=settings.store_url, anon_key=settings.anon_key),
        access_token=auth.access_token,
        transport=transport,
    )
    return RemoteClients(store=store, auth=auth)


__all__ = [
    "AuthApiError",
    "AuthChangeEvent",
    "AuthClient",
    "AuthConfig",
    "AuthError",
    "AuthSession",
    "AuthSessionMissingError",
    "AuthSubscription",
    "RemoteClients",
    "StoreClient",
    "StoreConfig",
    "StoreError",
    "create_clients",
]
