"""Controller for the sign-in / sign-out menu."""

from __future__ import annotations

import logging

from quotes_decode.clients.auth import (
    AuthChangeEvent,
    AuthClient,
    AuthError,
    AuthSession,
    AuthSessionMissingError,
    AuthSubscription,
)
from quotes_decode.core.settings import settings

logger = logging.getLogger(__name__)


class UserMenu:
    """Tracks whether someone is signed in and offers sign-in or sign-out."""

    def __init__(
        self,
        auth: AuthClient,
        *,
        provider: str | None = None,
        redirect_to: str | None = None,
    ) -> None:
        self.auth = auth
        self.provider = provider or settings.oauth_provider
        self.redirect_to = redirect_to or settings.site_url
        self.loading = True
        self.email: str | None = None
        self.signed_in = False
        self._subscription: AuthSubscription | None = None
        self._generation = 0

    async def mount(self) -> None:
        self._subscription = self.auth.on_auth_state_change(self._on_auth_change)
        generation = self._generation
        try:
            user = await self.auth.get_user()
        except AuthSessionMissingError:
            user = None
        except AuthError as exc:
            logger.error("Error checking user: %s", exc)
            user = None
        # An auth event during the lookup is newer than its result.
        if generation == self._generation:
            self._set_user(user.email if user else None, signed_in=user is not None)
        self.loading = False

    async def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_change(self, event: AuthChangeEvent, session: AuthSession | None) -> None:
        self._generation += 1
        if session is None:
            self._set_user(None, signed_in=False)
        else:
            self._set_user(session.user.email, signed_in=True)

    def _set_user(self, email: str | None, *, signed_in: bool) -> None:
        self.email = email
        self.signed_in = signed_in

    @property
    def label(self) -> str:
        if self.loading:
            return "..."
        if not self.signed_in:
            return "Sign in"
        return self.email or "Signed in"

    def sign_in(self) -> str:
        """Return the URL that starts the OAuth sign-in flow."""
        return self.auth.sign_in_with_oauth(self.provider, self.redirect_to)

    async def sign_out(self) -> None:
        await self.auth.sign_out()
