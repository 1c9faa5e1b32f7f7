# src/quotes_decode/main.py
"""Local data API for QuotesDecode.

Serves the quotes, interpretations and upvote-membership collections plus a
minimal auth surface, standing in for the hosted store during development.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from quotes_decode.api.v1 import (
    auth_router,
    interpretations_router,
    quotes_router,
    upvotes_router,
)
from quotes_decode.core.settings import settings

app = FastAPI(
    title="QuotesDecode Data API",
    description="Quotes, interpretations and upvotes for QuotesDecode",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

app.include_router(auth_router)
app.include_router(quotes_router)
app.include_router(interpretations_router)
app.include_router(upvotes_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("quotes_decode.main:app", host="127.0.0.1", port=8000, reload=settings.debug)
