"""Exceptions raised by client-side actions."""

from quotes_decode.clients.store import StoreError


class ActionRejected(ValueError):
    """An action was refused locally, before any network call.

    These are user-facing validation messages, not system errors.
    """


class EmptyContentError(ActionRejected):
    """Raised when an interpretation has no content after trimming."""

    def __init__(self) -> None:
        super().__init__("Interpretation cannot be empty.")


class SignInRequiredError(ActionRejected):
    """Raised when an action needs a signed-in user."""

    def __init__(self, message: str = "Please sign in with Google to add an interpretation.") -> None:
        super().__init__(message)


class NotOwnerError(ActionRejected):
    """Raised when deleting an interpretation the requester does not own."""

    def __init__(self) -> None:
        super().__init__("You can only delete your own interpretations.")


class UpvoteError(StoreError):
    """Raised when the membership write of an upvote toggle fails.

    Local state has already been reverted when this is raised.
    """
