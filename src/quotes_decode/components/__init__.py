"""Page controllers that drive the client services."""

from .quote_card import Avatar, QuoteCard
from .user_menu import UserMenu

__all__ = ["Avatar", "QuoteCard", "UserMenu"]
