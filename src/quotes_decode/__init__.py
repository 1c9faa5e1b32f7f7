"""QuotesDecode: community quote interpretations with optimistic upvotes."""

__version__ = "0.1.0"
