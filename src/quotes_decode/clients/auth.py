"""Authentication service client.

Holds the current access token, resolves it to a user through the auth
service, and pushes session-change events (sign-in, sign-out) to
subscribers.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from quotes_decode.schemas.session import AuthUser

logger = logging.getLogger(__name__)

HTTP_OK = 200

SESSION_MISSING_MESSAGE = "Auth session missing!"


class AuthError(RuntimeError):
    """Base exception raised for authentication failures."""


class AuthSessionMissingError(AuthError):
    """Raised when there is no session to resolve.

    This is the normal anonymous state, not a service failure.
    """

    def __init__(self) -> None:
        super().__init__(SESSION_MISSING_MESSAGE)


class AuthApiError(AuthError):
    """Raised when the auth service rejects a token or cannot be reached."""


class AuthChangeEvent(str, Enum):
    """Session-change events pushed to subscribers."""
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class AuthSession:
    """Access token together with the user it resolves to."""

    access_token: str
    user: AuthUser


AuthStateCallback = Callable[[AuthChangeEvent, AuthSession | None], Awaitable[None] | None]


class AuthSubscription:
    """Handle returned by :meth:`AuthClient.on_auth_state_change`."""

    def __init__(self, client: AuthClient, callback: AuthStateCallback) -> None:
        self._client = client
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._client._remove_subscription(self)


@dataclass(frozen=True)
class AuthConfig:
    """Immutable configuration for the authentication service."""

    base_url: str
    anon_key: str = ""


class AuthClient:
    """HTTP client wrapper for the authentication service."""

    def __init__(
        self,
        config: AuthConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()
        self._session: AuthSession | None = None
        self._subscriptions: list[AuthSubscription] = []

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    transport=self._transport,
                )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def session(self) -> AuthSession | None:
        return self._session

    def access_token(self) -> str | None:
        """Return the current access token, if signed in."""
        return self._session.access_token if self._session else None

    def _headers(self, token: str) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {token}"}
        if self.config.anon_key:
            headers["apikey"] = self.config.anon_key
        return headers

    async def _fetch_user(self, token: str) -> AuthUser:
        client = await self._ensure_client()
        try:
            response = await client.get("/user", headers=self._headers(token))
        except httpx.HTTPError as exc:
            raise AuthApiError(f"Auth request failed: {exc}") from exc

        if response.status_code != HTTP_OK:
            raise AuthApiError(f"Auth service responded with {response.status_code}")
        try:
            return AuthUser.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise AuthApiError(f"Malformed user payload: {exc}") from exc

    async def get_user(self) -> AuthUser:
        """Return the user for the current session.

        Raises:
            AuthSessionMissingError: No session is held; no request is made.
            AuthApiError: The service rejected the token or could not be reached.
        """
        token = self.access_token()
        if token is None:
            raise AuthSessionMissingError()
        return await self._fetch_user(token)

    async def set_session(self, access_token: str) -> AuthSession:
        """Adopt an access token (e.g. from an OAuth redirect) and sign in."""
        user = await self._fetch_user(access_token)
        self._session = AuthSession(access_token=access_token, user=user)
        logger.info("Signed in as %s", user.id)
        await self._emit(AuthChangeEvent.SIGNED_IN, self._session)
        return self._session

    async def sign_out(self) -> None:
        """Discard the session and notify subscribers.

        The service is told about the sign-out on a best-effort basis; the local
        session is cleared even when that call fails.
        """
        token = self.access_token()
        if token is None:
            return
        try:
            client = await self._ensure_client()
            await client.post("/logout", headers=self._headers(token))
        except httpx.HTTPError as exc:
            logger.warning("Sign-out request failed: %s", exc)
        self._session = None
        logger.info("Signed out")
        await self._emit(AuthChangeEvent.SIGNED_OUT, None)

    def sign_in_with_oauth(self, provider: str, redirect_to: str) -> str:
        """Return the provider authorize URL the browser should be sent to."""
        query = urlencode({"provider": provider, "redirect_to": redirect_to})
        return f"{self.config.base_url.rstrip('/')}/authorize?{query}"

    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthSubscription:
        """Subscribe to session changes until ``unsubscribe()`` is called."""
        subscription = AuthSubscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def _remove_subscription(self, subscription: AuthSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    async def _emit(self, event: AuthChangeEvent, session: AuthSession | None) -> None:
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            result = subscription.callback(event, session)
            if inspect.isawaitable(result):
                await result
