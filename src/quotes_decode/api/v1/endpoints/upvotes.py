"""Upvote membership endpoints for the local data API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError

from quotes_decode.models import Interpretation, InterpretationUpvote
from quotes_decode.schemas.upvote import UpvoteCreate, UpvoteResponse

from ..dependencies import CurrentUserDep, SessionDep, eq_value, require_eq_value

router = APIRouter(prefix="/rest/v1/interpretation_upvotes", tags=["upvotes"])


@router.get("", response_model=list[UpvoteResponse])
def list_upvotes(
    db: SessionDep,
    user_id: str | None = Query(None),
    interpretation_id: str | None = Query(None),
) -> list[InterpretationUpvote]:
    """List membership rows, typically for one user."""
    query = db.query(InterpretationUpvote)

    user_value = eq_value(user_id, "user_id")
    if user_value is not None:
        query = query.filter(InterpretationUpvote.user_id == user_value)
    interpretation_value = eq_value(interpretation_id, "interpretation_id")
    if interpretation_value is not None:
        query = query.filter(InterpretationUpvote.interpretation_id == interpretation_value)

    return query.all()


@router.post("", response_model=UpvoteResponse, status_code=status.HTTP_201_CREATED)
def create_upvote(
    payload: UpvoteCreate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> InterpretationUpvote:
    """Record that the caller likes an interpretation."""
    if payload.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="user_id must match the authenticated user",
        )
    if db.get(Interpretation, payload.interpretation_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Interpretation not found",
        )

    upvote = InterpretationUpvote(
        user_id=payload.user_id,
        interpretation_id=payload.interpretation_id,
    )
    db.add(upvote)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Upvote already recorded",
        ) from err
    return upvote


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_upvote(
    db: SessionDep,
    current_user: CurrentUserDep,
    user_id: str | None = Query(None),
    interpretation_id: str | None = Query(None),
) -> Response:
    """Remove the caller's membership row.

    Deleting a row that does not exist is not an error.
    """
    user_value = require_eq_value(user_id, "user_id")
    interpretation_value = require_eq_value(interpretation_id, "interpretation_id")
    if user_value != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only remove your own upvotes",
        )

    db.query(InterpretationUpvote).filter(
        InterpretationUpvote.user_id == user_value,
        InterpretationUpvote.interpretation_id == interpretation_value,
    ).delete(synchronize_session=False)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
