# src/quotes_decode/scripts/seed.py
"""Create the local data API tables and insert a handful of sample quotes."""

from __future__ import annotations

import argparse
from datetime import timedelta

from sqlalchemy.orm import Session

from quotes_decode.db.session import SessionLocal, create_tables, drop_tables
from quotes_decode.db.time import utcnow
from quotes_decode.models import Quote

SAMPLE_QUOTES: list[dict[str, object]] = [
    {
        "text": "The unexamined life is not worth living.",
        "author": "Socrates",
        "era": "Ancient Greece",
        "tags": ["philosophy", "self-knowledge"],
    },
    {
        "text": "Man is condemned to be free.",
        "author": "Jean-Paul Sartre",
        "era": "20th century",
        "tags": ["existentialism", "freedom"],
    },
    {
        "text": "The wound is the place where the Light enters you.",
        "author": "Rumi",
        "era": "13th century",
        "tags": ["poetry", "healing"],
    },
]


def seed_quotes(db: Session) -> int:
    """Insert the sample quotes that are not already present.

    Returns:
        Number of quotes inserted
    """
    existing = {text for (text,) in db.query(Quote.text).all()}
    now = utcnow()
    inserted = 0
    for offset, sample in enumerate(SAMPLE_QUOTES):
        if sample["text"] in existing:
            continue
        db.add(Quote(created_at=now - timedelta(minutes=offset), **sample))
        inserted += 1
    db.commit()
    return inserted


def main() -> None:
    parser = argparse.ArgumentParser(description="Create tables and seed sample quotes")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop all tables before recreating them.",
    )
    args = parser.parse_args()

    if args.drop_tables:
        drop_tables()
    create_tables()

    db = SessionLocal()
    try:
        inserted = seed_quotes(db)
    finally:
        db.close()
    print(f"[seed] inserted {inserted} quotes")


if __name__ == "__main__":
    main()
