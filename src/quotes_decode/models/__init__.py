"""SQLAlchemy models for the QuotesDecode data API."""

from .interpretation import Interpretation
from .quote import Quote
from .upvote import InterpretationUpvote

__all__ = [
    "Quote",
    "Interpretation",
    "InterpretationUpvote",
]
