"""Core configuration for QuotesDecode."""
