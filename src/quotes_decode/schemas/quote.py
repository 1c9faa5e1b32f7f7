"""Quote-related Pydantic schemas."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .interpretation import ANONYMOUS_AUTHOR, Interpretation, InterpretationResponse


class QuoteResponse(BaseModel):
    """Quote row with its embedded interpretations."""

    id: str
    text: str
    author: str
    era: str | None
    tags: list[str] | None
    created_at: datetime | None = None
    interpretations: list[InterpretationResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class Quote(BaseModel):
    """Quote as displayed by the client. Never mutated."""

    id: str
    text: str
    author: str
    era: str | None = None
    tags: list[str] = Field(default_factory=list)
    interpretations: list[Interpretation] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_row(cls, row: Mapping[str, Any], *, anonymous_name: str = ANONYMOUS_AUTHOR) -> Quote:
        """Build a display quote from a store row with embedded interpretations."""
        return cls(
            id=str(row["id"]),
            text=row["text"],
            author=row["author"],
            era=row.get("era") or None,
            tags=list(row.get("tags") or []),
            interpretations=[
                Interpretation.from_row(item, anonymous_name=anonymous_name)
                for item in row.get("interpretations") or []
            ],
        )
