"""Engine and sessions for the local data API.

Defaults to a SQLite file (see ``DATABASE_URL``); SQLite connections are
shared across the threadpool FastAPI runs sync endpoints on. Tests swap
``get_db`` for a session bound to an in-memory engine.
"""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from quotes_decode.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import quotes_decode.models  # noqa: E402,F401

_connect_args = (
    {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
)

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=settings.sql_debug,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request; endpoints commit explicitly."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create the quotes, interpretations and upvote tables without Alembic."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop every table, upvote memberships included."""
    Base.metadata.drop_all(bind=engine)
