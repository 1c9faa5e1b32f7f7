"""Interpretation endpoints for the local data API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Response, status

from quotes_decode.core.settings import settings
from quotes_decode.models import Interpretation, InterpretationUpvote, Quote
from quotes_decode.schemas.interpretation import (
    InterpretationCreate,
    InterpretationResponse,
    InterpretationUpdate,
)
from quotes_decode.schemas.session import AuthUser, derive_display_name

from ..dependencies import (
    CurrentUserDep,
    OptionalUserDep,
    SessionDep,
    eq_value,
    parse_order,
    require_eq_value,
)

router = APIRouter(prefix="/rest/v1/interpretations", tags=["interpretations"])


def _get_interpretation_or_404(db: SessionDep, interpretation_id: str) -> Interpretation:
    interpretation = db.get(Interpretation, interpretation_id)
    if interpretation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Interpretation not found",
        )
    return interpretation


def _is_owner(interpretation: Interpretation, user: AuthUser) -> bool:
    if interpretation.user_id is not None:
        return interpretation.user_id == user.id
    if not settings.display_name_ownership_fallback:
        return False
    display_name = derive_display_name(user.user_metadata, user.email)
    return bool(display_name) and interpretation.author_name == display_name


@router.get("", response_model=list[InterpretationResponse])
def list_interpretations(
    db: SessionDep,
    interpretation_id: str | None = Query(None, alias="id"),
    quote_id: str | None = Query(None),
    order: str | None = Query(None),
) -> list[Interpretation]:
    """List interpretations filtered by id or owning quote."""
    query = db.query(Interpretation)

    id_value = eq_value(interpretation_id, "id")
    if id_value is not None:
        query = query.filter(Interpretation.id == id_value)
    quote_value = eq_value(quote_id, "quote_id")
    if quote_value is not None:
        query = query.filter(Interpretation.quote_id == quote_value)

    ordering = parse_order(order, {"created_at", "upvotes"})
    if ordering is not None:
        column, descending = ordering
        attr = getattr(Interpretation, column)
        query = query.order_by(attr.desc() if descending else attr.asc())

    return query.all()


@router.post("", response_model=InterpretationResponse, status_code=status.HTTP_201_CREATED)
def create_interpretation(
    payload: InterpretationCreate,
    db: SessionDep,
    current_user: OptionalUserDep,
) -> Interpretation:
    """Insert an interpretation and return the stored row."""
    if current_user is None:
        if settings.require_sign_in_to_post or payload.user_id is not None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Auth session missing!",
            )
    elif payload.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="user_id must match the authenticated user",
        )

    if db.get(Quote, payload.quote_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quote not found")

    interpretation = Interpretation(
        quote_id=payload.quote_id,
        user_id=payload.user_id,
        author_name=payload.author_name,
        author_avatar_url=payload.author_avatar_url,
        content=payload.content,
        upvotes=payload.upvotes,
    )
    db.add(interpretation)
    db.commit()
    db.refresh(interpretation)
    return interpretation


@router.patch("", status_code=status.HTTP_204_NO_CONTENT)
def update_interpretation(
    payload: InterpretationUpdate,
    db: SessionDep,
    current_user: CurrentUserDep,
    interpretation_id: str | None = Query(None, alias="id"),
) -> Response:
    """Overwrite the denormalized upvote counter.

    Any signed-in user may write the counter; it is a cached projection of
    the membership rows, not an authoritative value.
    """
    interpretation = _get_interpretation_or_404(db, require_eq_value(interpretation_id, "id"))
    interpretation.upvotes = payload.upvotes
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_interpretation(
    db: SessionDep,
    current_user: CurrentUserDep,
    interpretation_id: str | None = Query(None, alias="id"),
) -> Response:
    """Delete an interpretation owned by the caller, along with its upvotes."""
    interpretation = _get_interpretation_or_404(db, require_eq_value(interpretation_id, "id"))

    if not _is_owner(interpretation, current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own interpretations",
        )

    db.query(InterpretationUpvote).filter(
        InterpretationUpvote.interpretation_id == interpretation.id,
    ).delete(synchronize_session=False)
    db.delete(interpretation)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
