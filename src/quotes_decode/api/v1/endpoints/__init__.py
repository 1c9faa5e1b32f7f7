"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .interpretations import router as interpretations_router
from .quotes import router as quotes_router
from .upvotes import router as upvotes_router

__all__ = [
    "auth_router",
    "quotes_router",
    "interpretations_router",
    "upvotes_router",
]
