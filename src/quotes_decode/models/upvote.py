"""Models capturing upvote membership on interpretations."""

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from quotes_decode.db.session import Base


class InterpretationUpvote(Base):
    """Per-user upvote on an interpretation.

    Row presence is the sole source of truth for "this user likes this
    interpretation".
    """

    __tablename__ = "interpretation_upvotes"
    __table_args__ = (
        Index("ix_interpretation_upvotes_user_id", "user_id"),
    )

    # Composite primary key prevents duplicate upvotes from the same user.
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    interpretation_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("interpretations.id", ondelete="CASCADE"),
        primary_key=True,
    )
