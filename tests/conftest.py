# tests/conftest.py
from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Generator, Iterator
from datetime import timedelta
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("JWT_SECRET", "test-secret-key")

from quotes_decode.api.v1.endpoints.auth import create_access_token
from quotes_decode.clients import RemoteClients, create_clients
from quotes_decode.clients.store import StoreClient
from quotes_decode.core.settings import settings
from quotes_decode.db.session import Base
from quotes_decode.db.session import get_db as app_get_session
from quotes_decode.db.time import utcnow
from quotes_decode.main import app as fastapi_app
from quotes_decode.models import Interpretation, InterpretationUpvote, Quote
from quotes_decode.schemas.interpretation import Interpretation as ViewInterpretation
from quotes_decode.schemas.session import SessionIdentity

TEST_DB_URL = "sqlite://"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(
    app: FastAPI, session_factory: sessionmaker[Session]
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


class HeldUserTransport(httpx.AsyncBaseTransport):
    """ASGI transport that can park requests for the current user until released."""

    def __init__(self, app: FastAPI) -> None:
        self._inner = httpx.ASGITransport(app=app)
        self.hold = False
        self.waiting = asyncio.Event()
        self.release = asyncio.Event()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if self.hold and request.url.path.endswith("/auth/v1/user"):
            self.waiting.set()
            await self.release.wait()
        return await self._inner.handle_async_request(request)


@pytest.fixture()
def remote_clients(app: FastAPI) -> RemoteClients:
    """Store and auth clients wired to the data API in-process."""
    return create_clients(settings, transport=httpx.ASGITransport(app=app))


@pytest.fixture()
def held_transport(app: FastAPI) -> HeldUserTransport:
    return HeldUserTransport(app)


@pytest.fixture()
def held_clients(held_transport: HeldUserTransport) -> RemoteClients:
    """Like remote_clients, but user lookups can be held in flight."""
    return create_clients(settings, transport=held_transport)


@pytest.fixture()
def make_token() -> Callable[..., str]:
    def _make_token(
        user_id: str,
        *,
        email: str | None = None,
        full_name: str | None = None,
        picture: str | None = None,
    ) -> str:
        metadata: dict[str, Any] = {}
        if full_name:
            metadata["full_name"] = full_name
        if picture:
            metadata["picture"] = picture
        return create_access_token(user_id, email=email, user_metadata=metadata)

    return _make_token


@pytest.fixture()
def user_token(make_token: Callable[..., str]) -> str:
    return make_token("user-b", email="bea@example.com", full_name="Bea Quill")


@pytest.fixture()
def auth_headers(user_token: str) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture()
def other_auth_headers(make_token: Callable[..., str]) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = make_token("user-c", email="cal@example.com", full_name="Cal Marsh")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def quote(db_session: Session) -> Quote:
    """Create a persisted quote."""
    quote = Quote(
        text="Man is condemned to be free.",
        author="Jean-Paul Sartre",
        era="20th century",
        tags=["existentialism", "freedom"],
    )
    db_session.add(quote)
    db_session.commit()
    return quote


@pytest.fixture()
def interpretation(db_session: Session, quote: Quote) -> Interpretation:
    """Create an interpretation by user-b with three upvotes from other users."""
    interpretation = Interpretation(
        quote_id=quote.id,
        user_id="user-b",
        author_name="Bea Quill",
        content="Freedom is a burden as much as a gift.",
        upvotes=3,
        created_at=utcnow() - timedelta(minutes=5),
    )
    db_session.add(interpretation)
    db_session.flush()
    for voter in ("voter-1", "voter-2", "voter-3"):
        db_session.add(InterpretationUpvote(user_id=voter, interpretation_id=interpretation.id))
    db_session.commit()
    return interpretation


@pytest.fixture()
def mock_store() -> AsyncMock:
    return AsyncMock(spec=StoreClient)


@pytest.fixture()
def identity() -> SessionIdentity:
    return SessionIdentity(user_id="user-b", email="bea@example.com", display_name="Bea Quill")


@pytest.fixture()
def view_interpretation() -> ViewInterpretation:
    return ViewInterpretation(
        id="interp-x",
        author_name="Someone Else",
        content="Freedom is relative",
        upvotes=3,
        author_user_id="user-z",
    )
