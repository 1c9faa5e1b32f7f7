"""Optimistic upvote toggling.

A toggle touches two things in the store, one after the other and without a
transaction:

1. the membership row in ``interpretation_upvotes`` (authoritative), then
2. the denormalized ``upvotes`` counter on the interpretation.

The view is updated before either call. A failed membership write reverts
the view. A failed counter write is only logged: the view keeps the
predicted count and the stored counter catches up on the next full reload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from quotes_decode.clients.store import (
    INTERPRETATIONS_TABLE,
    UPVOTES_TABLE,
    StoreClient,
    StoreError,
)
from quotes_decode.schemas.session import SessionIdentity
from quotes_decode.services.errors import UpvoteError
from quotes_decode.services.optimistic import OptimisticUpdate
from quotes_decode.state.view_state import ViewState, upvote_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpvoteOutcome:
    """Result of a completed toggle."""

    interpretation_id: str
    liked: bool
    upvotes: int
    counter_persisted: bool


def predict_upvotes(current: int, already_liked: bool) -> int:
    """Return the count after toggling, never below zero."""
    return max(current - 1, 0) if already_liked else current + 1


class UpvoteToggle:
    """Toggles the current user's upvote on interpretations in one view."""

    def __init__(self, store: StoreClient, view: ViewState) -> None:
        self.store = store
        self.view = view

    async def toggle(
        self,
        interpretation_id: str,
        requester: SessionIdentity | None,
    ) -> UpvoteOutcome | None:
        """Like or unlike ``interpretation_id`` for ``requester``.

        Returns None without touching the store when there is no session, the
        interpretation is unknown, or a toggle for it is already in flight.

        Raises:
            UpvoteError: The membership write failed; the view was reverted.
        """
        if requester is None:
            return None
        target = self.view.find(interpretation_id)
        if target is None:
            return None

        key = upvote_key(interpretation_id)
        if not self.view.begin(key):
            return None

        try:
            already_liked = self.view.is_liked(interpretation_id)
            current = target.upvotes
            predicted = predict_upvotes(current, already_liked)

            def apply() -> None:
                self.view.set_upvotes(interpretation_id, predicted)
                self.view.set_liked(interpretation_id, not already_liked)

            def revert() -> None:
                self.view.set_upvotes(interpretation_id, current)
                self.view.set_liked(interpretation_id, already_liked)

            try:
                await OptimisticUpdate(apply=apply, revert=revert).run(
                    lambda: self._write_membership(interpretation_id, requester.user_id, already_liked)
                )
            except StoreError as exc:
                action = "removing" if already_liked else "adding"
                logger.error("Error %s upvote on %s: %s", action, interpretation_id, exc)
                raise UpvoteError(exc.message, status_code=exc.status_code) from exc

            counter_persisted = await self._write_counter(interpretation_id, predicted)
            return UpvoteOutcome(
                interpretation_id=interpretation_id,
                liked=not already_liked,
                upvotes=predicted,
                counter_persisted=counter_persisted,
            )
        finally:
            self.view.end(key)

    async def _write_membership(self, interpretation_id: str, user_id: str, already_liked: bool) -> None:
        if already_liked:
            await self.store.delete(
                UPVOTES_TABLE,
                filters={"user_id": user_id, "interpretation_id": interpretation_id},
            )
        else:
            await self.store.insert(
                UPVOTES_TABLE,
                {"user_id": user_id, "interpretation_id": interpretation_id},
            )

    async def _write_counter(self, interpretation_id: str, upvotes: int) -> bool:
        try:
            await self.store.update(
                INTERPRETATIONS_TABLE,
                {"upvotes": upvotes},
                filters={"id": interpretation_id},
            )
        except StoreError as exc:
            logger.warning(
                "Upvote counter for %s not persisted (view shows %d): %s",
                interpretation_id,
                upvotes,
                exc,
            )
            return False
        return True
