"""Quote endpoints for the local data API."""

from __future__ import annotations

from fastapi import APIRouter, Query
from sqlalchemy.orm import selectinload

from quotes_decode.models import Quote
from quotes_decode.schemas.quote import QuoteResponse

from ..dependencies import SessionDep, eq_value, parse_order

router = APIRouter(prefix="/rest/v1/quotes", tags=["quotes"])


@router.get("", response_model=list[QuoteResponse])
def list_quotes(
    db: SessionDep,
    quote_id: str | None = Query(None, alias="id"),
    order: str | None = Query(None),
) -> list[Quote]:
    """List quotes with their interpretations embedded, newest interpretation first."""
    query = db.query(Quote).options(selectinload(Quote.interpretations))

    quote_id_value = eq_value(quote_id, "id")
    if quote_id_value is not None:
        query = query.filter(Quote.id == quote_id_value)

    ordering = parse_order(order, {"created_at"})
    if ordering is not None:
        _, descending = ordering
        query = query.order_by(Quote.created_at.desc() if descending else Quote.created_at.asc())

    return query.all()
