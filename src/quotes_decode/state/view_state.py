"""In-memory view state for one quote's interpretations.

The single owner of the interpretation list and the current user's liked set.
Consumers subscribe and re-render from the latest values.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from quotes_decode.schemas.interpretation import Interpretation

ViewListener = Callable[["ViewState"], None]


class ViewState:
    """Interpretations, liked ids and in-flight flags for one quote card.

    Once closed (the owning component was torn down) all mutations are
    ignored and listeners are no longer notified.
    """

    def __init__(self, interpretations: Iterable[Interpretation] = ()) -> None:
        self._interpretations: list[Interpretation] = list(interpretations)
        self._liked_ids: set[str] = set()
        self._in_flight: set[str] = set()
        self._listeners: list[ViewListener] = []
        self.submitting = False
        self.error: str | None = None
        self.notice: str | None = None
        self.closed = False

    # -- reads ---------------------------------------------------------

    @property
    def interpretations(self) -> list[Interpretation]:
        return list(self._interpretations)

    @property
    def liked_ids(self) -> frozenset[str]:
        return frozenset(self._liked_ids)

    def find(self, interpretation_id: str) -> Interpretation | None:
        for interpretation in self._interpretations:
            if interpretation.id == interpretation_id:
                return interpretation
        return None

    def is_liked(self, interpretation_id: str) -> bool:
        return interpretation_id in self._liked_ids

    def is_in_flight(self, key: str) -> bool:
        return key in self._in_flight

    # -- subscriptions -------------------------------------------------

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def close(self) -> None:
        self.closed = True
        self._listeners.clear()

    # -- mutations -----------------------------------------------------

    def prepend(self, interpretation: Interpretation) -> None:
        if self.closed:
            return
        self._interpretations.insert(0, interpretation)
        self._notify()

    def remove(self, interpretation_id: str) -> tuple[int, Interpretation] | None:
        """Remove an interpretation, returning its former position for restore()."""
        if self.closed:
            return None
        for index, interpretation in enumerate(self._interpretations):
            if interpretation.id == interpretation_id:
                del self._interpretations[index]
                self._notify()
                return index, interpretation
        return None

    def restore(self, index: int, interpretation: Interpretation) -> None:
        if self.closed or self.find(interpretation.id) is not None:
            return
        self._interpretations.insert(min(index, len(self._interpretations)), interpretation)
        self._notify()

    def set_upvotes(self, interpretation_id: str, upvotes: int) -> None:
        if upvotes < 0:
            raise ValueError(f"upvotes must be non-negative, got {upvotes}")
        if self.closed:
            return
        self._interpretations = [
            item.model_copy(update={"upvotes": upvotes}) if item.id == interpretation_id else item
            for item in self._interpretations
        ]
        self._notify()

    def set_liked(self, interpretation_id: str, liked: bool) -> None:
        if self.closed:
            return
        if liked:
            self._liked_ids.add(interpretation_id)
        else:
            self._liked_ids.discard(interpretation_id)
        self._notify()

    def discard_liked(self, interpretation_id: str) -> None:
        self.set_liked(interpretation_id, False)

    def replace_liked(self, interpretation_ids: Iterable[str]) -> None:
        if self.closed:
            return
        self._liked_ids = set(interpretation_ids)
        self._notify()

    def begin(self, key: str) -> bool:
        """Mark ``key`` in flight. Returns False if it already was."""
        if self.closed or key in self._in_flight:
            return False
        self._in_flight.add(key)
        self._notify()
        return True

    def end(self, key: str) -> None:
        if key not in self._in_flight:
            return
        self._in_flight.discard(key)
        if not self.closed:
            self._notify()

    def set_submitting(self, submitting: bool) -> None:
        if self.closed:
            return
        self.submitting = submitting
        self._notify()

    def report_error(self, message: str) -> None:
        if self.closed:
            return
        self.error = message
        self._notify()

    def report_notice(self, message: str) -> None:
        if self.closed:
            return
        self.notice = message
        self._notify()

    def clear_messages(self) -> None:
        if self.closed:
            return
        self.error = None
        self.notice = None
        self._notify()


def upvote_key(interpretation_id: str) -> str:
    """In-flight key for the upvote control of one interpretation."""
    return f"upvote:{interpretation_id}"


def delete_key(interpretation_id: str) -> str:
    """In-flight key for the delete control of one interpretation."""
    return f"delete:{interpretation_id}"
