# tests/services/test_session_resolver.py
import logging
from unittest.mock import AsyncMock

import pytest

from quotes_decode.clients.auth import AuthApiError, AuthClient, AuthSessionMissingError
from quotes_decode.clients.store import UPVOTES_TABLE, StoreError
from quotes_decode.schemas.session import AuthUser
from quotes_decode.services.session_resolver import SessionResolver


@pytest.fixture
def mock_auth() -> AsyncMock:
    return AsyncMock(spec=AuthClient)


@pytest.fixture
def resolver(mock_auth, mock_store) -> SessionResolver:
    return SessionResolver(mock_auth, mock_store)


@pytest.mark.asyncio
async def test_missing_session_is_anonymous_without_logging(resolver, mock_auth, mock_store, caplog) -> None:
    mock_auth.get_user.side_effect = AuthSessionMissingError()

    with caplog.at_level(logging.ERROR):
        resolved = await resolver.resolve()

    assert resolved.identity is None
    assert resolved.liked_ids == frozenset()
    assert caplog.records == []
    mock_store.select.assert_not_awaited()


@pytest.mark.asyncio
async def test_auth_failure_is_logged_and_anonymous(resolver, mock_auth, caplog) -> None:
    mock_auth.get_user.side_effect = AuthApiError("Auth service responded with 500")

    with caplog.at_level(logging.ERROR):
        identity = await resolver.resolve_session()

    assert identity is None
    assert "Error checking user" in caplog.text


@pytest.mark.asyncio
async def test_identity_and_liked_ids(resolver, mock_auth, mock_store) -> None:
    mock_auth.get_user.return_value = AuthUser(
        id="user-b",
        email="bea@example.com",
        user_metadata={"name": "Bea", "picture": "https://img.example/bea.png"},
    )
    mock_store.select.return_value = [{"interpretation_id": "i-1"}, {"interpretation_id": "i-2"}]

    resolved = await resolver.resolve()

    assert resolved.identity.user_id == "user-b"
    assert resolved.identity.display_name == "Bea"
    assert resolved.identity.avatar_url == "https://img.example/bea.png"
    assert resolved.liked_ids == frozenset({"i-1", "i-2"})
    mock_store.select.assert_awaited_once_with(
        UPVOTES_TABLE,
        columns="interpretation_id",
        filters={"user_id": "user-b"},
    )


@pytest.mark.asyncio
async def test_liked_ids_failure_yields_empty_set(resolver, mock_store) -> None:
    mock_store.select.side_effect = StoreError("unavailable", status_code=503)

    assert await resolver.fetch_liked_ids("user-b") == frozenset()
