"""Load the quote feed for the home page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from quotes_decode.clients.store import QUOTES_TABLE, StoreClient, StoreError
from quotes_decode.core.settings import settings
from quotes_decode.schemas.quote import Quote

logger = logging.getLogger(__name__)

FEED_COLUMNS = (
    "id,text,author,era,tags,"
    "interpretations(id,quote_id,user_id,author_name,author_avatar_url,content,upvotes)"
)


@dataclass(frozen=True)
class FeedResult:
    """Quotes for the feed, or an empty list with ``has_error`` set."""

    quotes: list[Quote] = field(default_factory=list)
    has_error: bool = False


async def load_quotes(store: StoreClient, *, anonymous_name: str | None = None) -> FeedResult:
    """Fetch quotes newest first with their interpretations embedded.

    A store failure is logged and reported through ``has_error`` rather than
    raised, so the page can still render.
    """
    name = anonymous_name or settings.anonymous_author_name
    try:
        rows = await store.select(QUOTES_TABLE, columns=FEED_COLUMNS, order="created_at.desc")
    except StoreError as exc:
        logger.error("Error loading quotes: %s", exc)
        return FeedResult(quotes=[], has_error=True)
    return FeedResult(quotes=[Quote.from_row(row, anonymous_name=name) for row in rows])
