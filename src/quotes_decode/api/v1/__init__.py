"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    interpretations_router,
    quotes_router,
    upvotes_router,
)

__all__ = [
    "auth_router",
    "quotes_router",
    "interpretations_router",
    "upvotes_router",
]
