"""HTTP API for the local data service."""
