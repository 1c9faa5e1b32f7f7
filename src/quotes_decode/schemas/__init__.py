"""Pydantic schemas for API requests, responses and client view state."""

from .interpretation import (
    Interpretation,
    InterpretationCreate,
    InterpretationResponse,
    InterpretationUpdate,
)
from .quote import Quote, QuoteResponse
from .session import AuthUser, SessionIdentity
from .upvote import UpvoteCreate, UpvoteResponse

__all__ = [
    "AuthUser",
    "Interpretation",
    "InterpretationCreate",
    "InterpretationResponse",
    "InterpretationUpdate",
    "Quote",
    "QuoteResponse",
    "SessionIdentity",
    "UpvoteCreate",
    "UpvoteResponse",
]
