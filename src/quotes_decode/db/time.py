"""Row timestamps for the local data API.

``created_at`` on quotes and interpretations is stamped here and is the
column both feeds order by (newest first).
"""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)
