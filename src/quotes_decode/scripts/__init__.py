"""Developer scripts for the local data API."""
