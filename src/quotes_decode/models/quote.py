"""SQLAlchemy model for quotes."""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quotes_decode.db.session import Base
from quotes_decode.db.time import utcnow


class Quote(Base):
    """Immutable display record for a quote.

    Quotes are curated server-side; clients only read them.
    """

    __tablename__ = "quotes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    era: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Rendered in stored order.
    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    interpretations: Mapped[list["Interpretation"]] = relationship(  # noqa: F821
        "Interpretation",
        back_populates="quote",
        cascade="all, delete-orphan",
        order_by="Interpretation.created_at.desc()",
    )
