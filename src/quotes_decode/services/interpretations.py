"""Create and delete interpretations against the remote store."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from quotes_decode.clients.store import INTERPRETATIONS_TABLE, StoreClient, StoreError
from quotes_decode.core.settings import settings
from quotes_decode.schemas.interpretation import Interpretation
from quotes_decode.schemas.session import SessionIdentity
from quotes_decode.services.errors import EmptyContentError, NotOwnerError, SignInRequiredError
from quotes_decode.services.optimistic import OptimisticUpdate
from quotes_decode.state.view_state import ViewState, delete_key

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Delete this interpretation? This cannot be undone."

ConfirmCallback = Callable[[str], bool | Awaitable[bool]]


def can_delete(
    interpretation: Interpretation,
    requester: SessionIdentity | None,
    *,
    name_fallback: bool = True,
) -> bool:
    """Return True if ``requester`` may delete ``interpretation``.

    Ownership is the recorded user id. Rows without one fall back to an exact
    display-name match when ``name_fallback`` is enabled.
    """
    if requester is None:
        return False
    if interpretation.author_user_id:
        return interpretation.author_user_id == requester.user_id
    if not name_fallback:
        return False
    return bool(
        interpretation.author_name
        and requester.display_name
        and interpretation.author_name == requester.display_name
    )


class InterpretationStore:
    """Store adapter for interpretation records of one quote card.

    Every change lands in the given :class:`ViewState`.
    """

    def __init__(
        self,
        store: StoreClient,
        view: ViewState,
        *,
        require_sign_in: bool | None = None,
        name_fallback: bool | None = None,
        anonymous_name: str | None = None,
    ) -> None:
        self.store = store
        self.view = view
        self.require_sign_in = (
            settings.require_sign_in_to_post if require_sign_in is None else require_sign_in
        )
        self.name_fallback = (
            settings.display_name_ownership_fallback if name_fallback is None else name_fallback
        )
        self.anonymous_name = anonymous_name or settings.anonymous_author_name

    async def create(
        self,
        quote_id: str,
        requester: SessionIdentity | None,
        author_name: str | None,
        content: str,
    ) -> Interpretation:
        """Insert a new interpretation and prepend it to the view.

        Raises:
            EmptyContentError: ``content`` is blank.
            SignInRequiredError: Posting requires a session and there is none.
            StoreError: The store rejected the insert; the view is unchanged.
        """
        trimmed_content = content.strip()
        if not trimmed_content:
            raise EmptyContentError()
        if requester is None and self.require_sign_in:
            raise SignInRequiredError()

        trimmed_name = (author_name or "").strip()
        effective_name = trimmed_name or (requester.display_name if requester else None) or None
        row = {
            "quote_id": quote_id,
            "user_id": requester.user_id if requester else None,
            "author_name": effective_name,
            "author_avatar_url": requester.avatar_url if requester else None,
            "content": trimmed_content,
            "upvotes": 0,
        }

        self.view.set_submitting(True)
        try:
            stored = await self.store.insert(INTERPRETATIONS_TABLE, row)
        except StoreError as exc:
            logger.error("Error adding interpretation: %s", exc)
            raise
        finally:
            self.view.set_submitting(False)

        interpretation = Interpretation.from_row(stored, anonymous_name=self.anonymous_name)
        self.view.prepend(interpretation)
        return interpretation

    async def delete(
        self,
        interpretation_id: str,
        requester: SessionIdentity | None,
        confirm: ConfirmCallback,
    ) -> bool:
        """Delete an interpretation owned by ``requester``.

        Returns False when the item is unknown, a delete for it is already
        pending, the user declines the confirmation, or the item disappeared
        while the confirmation was open; True once the store has deleted it.

        Raises:
            NotOwnerError: ``requester`` does not own the interpretation.
            StoreError: The delete failed; the item has been restored.
        """
        target = self.view.find(interpretation_id)
        if target is None:
            return False
        if not can_delete(target, requester, name_fallback=self.name_fallback):
            raise NotOwnerError()

        key = delete_key(interpretation_id)
        if not self.view.begin(key):
            return False
        try:
            confirmed = confirm(DELETE_CONFIRMATION)
            if inspect.isawaitable(confirmed):
                confirmed = await confirmed
            if not confirmed or self.view.find(interpretation_id) is None:
                return False

            removed: tuple[int, Interpretation] | None = None

            def apply() -> None:
                nonlocal removed
                removed = self.view.remove(interpretation_id)

            def revert() -> None:
                if removed is not None:
                    self.view.restore(*removed)

            try:
                await OptimisticUpdate(apply=apply, revert=revert).run(
                    lambda: self.store.delete(INTERPRETATIONS_TABLE, filters={"id": interpretation_id})
                )
            except StoreError as exc:
                logger.error("Error deleting interpretation %s: %s", interpretation_id, exc)
                raise

            self.view.discard_liked(interpretation_id)
            return True
        finally:
            self.view.end(key)
