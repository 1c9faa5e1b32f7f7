"""Client-side services that synchronize view state with the remote store."""

from .errors import (
    ActionRejected,
    EmptyContentError,
    NotOwnerError,
    SignInRequiredError,
    UpvoteError,
)
from .feed import FeedResult, load_quotes
from .interpretations import InterpretationStore, can_delete
from .optimistic import OptimisticUpdate
from .session_resolver import ResolvedSession, SessionResolver
from .upvotes import UpvoteOutcome, UpvoteToggle, predict_upvotes

__all__ = [
    "ActionRejected",
    "EmptyContentError",
    "FeedResult",
    "InterpretationStore",
    "NotOwnerError",
    "OptimisticUpdate",
    "ResolvedSession",
    "SessionResolver",
    "SignInRequiredError",
    "UpvoteError",
    "UpvoteOutcome",
    "UpvoteToggle",
    "can_delete",
    "load_quotes",
    "predict_upvotes",
]
