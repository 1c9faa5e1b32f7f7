"""SQLAlchemy model for user interpretations of quotes."""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quotes_decode.db.session import Base
from quotes_decode.db.time import utcnow


class Interpretation(Base):
    """A user-submitted reading of a quote.

    ``upvotes`` is a denormalized projection of the matching
    ``interpretation_upvotes`` rows and may transiently diverge from them.
    """

    __tablename__ = "interpretations"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_interpretations_upvotes_non_negative"),
        Index("ix_interpretations_quote_id", "quote_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    quote_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Null for legacy rows written before identities were recorded.
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    author_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    upvotes: Mapped[int] = mapped_column(default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    quote: Mapped["Quote"] = relationship("Quote", back_populates="interpretations")  # noqa: F821
