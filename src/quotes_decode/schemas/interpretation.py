"""Interpretation-related Pydantic schemas."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ANONYMOUS_AUTHOR = "Anonymous"


class InterpretationCreate(BaseModel):
    """Schema for inserting a new interpretation row."""

    quote_id: str
    user_id: str | None = None
    author_name: str | None = None
    author_avatar_url: str | None = None
    content: str = Field(..., min_length=1, max_length=5000)
    upvotes: int = Field(0, ge=0)


class InterpretationUpdate(BaseModel):
    """Schema for updating the denormalized upvote counter."""

    upvotes: int = Field(..., ge=0)


class InterpretationResponse(BaseModel):
    """Interpretation row as stored by the data API."""

    id: str
    quote_id: str
    user_id: str | None
    author_name: str | None
    author_avatar_url: str | None
    content: str
    upvotes: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class Interpretation(BaseModel):
    """Interpretation as held in client view state."""

    id: str
    author_name: str = ANONYMOUS_AUTHOR
    content: str
    upvotes: int = Field(0, ge=0)
    author_avatar_url: str | None = None
    author_user_id: str | None = None
    quote_id: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_row(cls, row: Mapping[str, Any], *, anonymous_name: str = ANONYMOUS_AUTHOR) -> Interpretation:
        """Build a view-state interpretation from a store row.

        Null author names display as ``anonymous_name`` and null counters as 0.
        """
        return cls(
            id=str(row["id"]),
            author_name=row.get("author_name") or anonymous_name,
            content=row["content"],
            upvotes=row.get("upvotes") or 0,
            author_avatar_url=row.get("author_avatar_url"),
            author_user_id=row.get("user_id"),
            quote_id=row.get("quote_id"),
        )
