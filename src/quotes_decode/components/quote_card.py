"""Controller for one quote and its interpretations.

Owns the card's :class:`ViewState`, the submission form fields and the
current session, and follows sign-in/sign-out for as long as it is mounted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from quotes_decode.clients import RemoteClients
from quotes_decode.clients.auth import AuthChangeEvent, AuthSession, AuthSubscription
from quotes_decode.clients.store import StoreError
from quotes_decode.core.settings import settings
from quotes_decode.schemas.interpretation import Interpretation
from quotes_decode.schemas.quote import Quote
from quotes_decode.schemas.session import SessionIdentity
from quotes_decode.services.errors import ActionRejected
from quotes_decode.services.interpretations import (
    ConfirmCallback,
    InterpretationStore,
    can_delete,
)
from quotes_decode.services.session_resolver import SessionResolver
from quotes_decode.services.upvotes import UpvoteOutcome, UpvoteToggle
from quotes_decode.state.view_state import ViewState, upvote_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Avatar:
    """Either an image URL or a one-letter fallback."""

    url: str | None
    initial: str


class QuoteCard:
    """Interactive state for a single quote card."""

    def __init__(
        self,
        quote: Quote,
        clients: RemoteClients,
        *,
        confirm: ConfirmCallback,
        interpretations: InterpretationStore | None = None,
        upvotes: UpvoteToggle | None = None,
    ) -> None:
        self.quote = quote
        self.clients = clients
        self.confirm = confirm
        self.view = ViewState(quote.interpretations)
        self.resolver = SessionResolver(clients.auth, clients.store)
        self.interpretations = interpretations or InterpretationStore(clients.store, self.view)
        self.upvotes = upvotes or UpvoteToggle(clients.store, self.view)
        self.identity: SessionIdentity | None = None
        self.name = ""
        self.content = ""
        self._subscription: AuthSubscription | None = None
        self._mounted = False
        self._refresh_generation = 0

    # -- lifecycle -----------------------------------------------------

    async def mount(self) -> None:
        """Resolve the session, seed the liked set and follow auth changes."""
        self._mounted = True
        self._subscription = self.clients.auth.on_auth_state_change(self._on_auth_change)
        await self._refresh_session()

    async def unmount(self) -> None:
        self._mounted = False
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self.view.close()

    async def _on_auth_change(self, event: AuthChangeEvent, session: AuthSession | None) -> None:
        if not self._mounted:
            return
        logger.info("Quote %s saw auth event %s", self.quote.id, event.value)
        await self._refresh_session()

    async def _refresh_session(self) -> None:
        self._refresh_generation += 1
        generation = self._refresh_generation
        resolved = await self.resolver.resolve()
        # Drop the result if the card was torn down or a newer refresh started.
        if not self._mounted or generation != self._refresh_generation:
            return
        self.identity = resolved.identity
        self.view.replace_liked(resolved.liked_ids)
        display_name = resolved.identity.display_name if resolved.identity else None
        if display_name and not self.name.strip():
            self.name = display_name

    # -- actions -------------------------------------------------------

    async def submit(self) -> Interpretation | None:
        """Submit the form. Content is cleared on success; the name is kept."""
        self.view.clear_messages()
        try:
            created = await self.interpretations.create(
                self.quote.id,
                self.identity,
                self.name,
                self.content,
            )
        except ActionRejected as exc:
            self.view.report_notice(str(exc))
            return None
        except StoreError as exc:
            self.view.report_error(f"Could not save your interpretation: {exc.message}")
            return None
        self.content = ""
        return created

    async def toggle_upvote(self, interpretation_id: str) -> UpvoteOutcome | None:
        self.view.clear_messages()
        try:
            return await self.upvotes.toggle(interpretation_id, self.identity)
        except StoreError as exc:
            self.view.report_error(f"Could not update your upvote: {exc.message}")
            return None

    async def delete(self, interpretation_id: str) -> bool:
        self.view.clear_messages()
        try:
            return await self.interpretations.delete(interpretation_id, self.identity, self.confirm)
        except ActionRejected as exc:
            self.view.report_notice(str(exc))
        except StoreError as exc:
            self.view.report_error(f"Could not delete the interpretation: {exc.message}")
        return False

    # -- presentation --------------------------------------------------

    @property
    def can_submit(self) -> bool:
        return not self.view.submitting and bool(self.content.strip())

    @property
    def posting_hint(self) -> str:
        if self.identity and self.identity.display_name:
            return f"Posting as {self.identity.display_name}. Be kind and thoughtful."
        return "Share your own meaning. Be kind and thoughtful."

    def is_upvote_disabled(self, interpretation_id: str) -> bool:
        return self.view.is_in_flight(upvote_key(interpretation_id))

    def can_delete(self, interpretation: Interpretation) -> bool:
        return can_delete(
            interpretation,
            self.identity,
            name_fallback=self.interpretations.name_fallback,
        )

    @staticmethod
    def avatar_for(interpretation: Interpretation) -> Avatar:
        name = (interpretation.author_name or "").strip()
        initial = name[0].upper() if name else "?"
        return Avatar(url=interpretation.author_avatar_url or None, initial=initial)

    @property
    def empty_message(self) -> str | None:
        if self.view.interpretations:
            return None
        return "No interpretations yet. Be the first to add one."

    def display_author(self, interpretation: Interpretation) -> str:
        return interpretation.author_name or settings.anonymous_author_name
