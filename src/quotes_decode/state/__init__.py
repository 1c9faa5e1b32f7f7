"""Client view state."""

from .view_state import ViewState, delete_key, upvote_key

__all__ = ["ViewState", "delete_key", "upvote_key"]
