# tests/clients/test_store_client.py
"""Tests for StoreClient against the in-process data API and stub transports."""

import httpx
import pytest

from quotes_decode.clients.store import (
    INTERPRETATIONS_TABLE,
    QUOTES_TABLE,
    UPVOTES_TABLE,
    StoreClient,
    StoreConfig,
    StoreError,
)


def _client_for(handler, *, token=None, anon_key="anon-key") -> StoreClient:
    return StoreClient(
        StoreConfig(base_url="http://store.test", anon_key=anon_key),
        access_token=lambda: token,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_select_builds_equality_filters() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["auth"] = request.headers.get("Authorization")
        seen["apikey"] = request.headers.get("apikey")
        return httpx.Response(200, json=[{"interpretation_id": "i-1"}])

    store = _client_for(handler, token="user-token")
    rows = await store.select(
        UPVOTES_TABLE, columns="interpretation_id", filters={"user_id": "u-1"}, order="created_at.desc"
    )
    await store.close()

    assert rows == [{"interpretation_id": "i-1"}]
    assert seen["path"] == "/rest/v1/interpretation_upvotes"
    assert seen["params"] == {
        "select": "interpretation_id",
        "user_id": "eq.u-1",
        "order": "created_at.desc",
    }
    assert seen["auth"] == "Bearer user-token"
    assert seen["apikey"] == "anon-key"


@pytest.mark.asyncio
async def test_anon_key_used_without_session() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    store = _client_for(handler)
    await store.select(QUOTES_TABLE)
    await store.close()

    assert seen["auth"] == "Bearer anon-key"


@pytest.mark.asyncio
async def test_error_response_raises_with_detail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"detail": "Upvote already recorded"})

    store = _client_for(handler)
    with pytest.raises(StoreError) as excinfo:
        await store.insert(UPVOTES_TABLE, {"user_id": "u", "interpretation_id": "i"})
    await store.close()

    assert excinfo.value.status_code == 409
    assert excinfo.value.message == "Upvote already recorded"


@pytest.mark.asyncio
async def test_non_json_error_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    store = _client_for(handler)
    with pytest.raises(StoreError, match="Store responded with 502"):
        await store.delete(INTERPRETATIONS_TABLE, filters={"id": "i"})
    await store.close()


@pytest.mark.asyncio
async def test_transport_failure_raises_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store = _client_for(handler)
    with pytest.raises(StoreError) as excinfo:
        await store.update(INTERPRETATIONS_TABLE, {"upvotes": 1}, filters={"id": "i"})
    await store.close()

    assert excinfo.value.status_code is None
    assert "connection refused" in excinfo.value.message


@pytest.mark.asyncio
async def test_round_trip_through_data_api(remote_clients, quote, user_token) -> None:
    await remote_clients.auth.set_session(user_token)
    store = remote_clients.store

    stored = await store.insert(
        INTERPRETATIONS_TABLE,
        {"quote_id": quote.id, "user_id": "user-b", "author_name": "Bea Quill", "content": "Be brave"},
    )
    await store.insert(UPVOTES_TABLE, {"user_id": "user-b", "interpretation_id": stored["id"]})
    await store.update(INTERPRETATIONS_TABLE, {"upvotes": 1}, filters={"id": stored["id"]})

    rows = await store.select(INTERPRETATIONS_TABLE, filters={"id": stored["id"]})
    liked = await store.select(UPVOTES_TABLE, columns="interpretation_id", filters={"user_id": "user-b"})
    await remote_clients.close()

    assert rows[0]["upvotes"] == 1
    assert rows[0]["content"] == "Be brave"
    assert [row["interpretation_id"] for row in liked] == [stored["id"]]


@pytest.mark.asyncio
async def test_anonymous_write_rejected_by_data_api(remote_clients, quote) -> None:
    with pytest.raises(StoreError) as excinfo:
        await remote_clients.store.insert(
            INTERPRETATIONS_TABLE, {"quote_id": quote.id, "content": "Hello"}
        )
    await remote_clients.close()

    assert excinfo.value.status_code == 401


@pytest.mark.asyncio
async def test_insert_empty_body_raises_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201)

    store = _client_for(handler)
    with pytest.raises(StoreError, match="Malformed store response") as excinfo:
        await store.insert(UPVOTES_TABLE, {"user_id": "u", "interpretation_id": "i"})
    await store.close()

    assert excinfo.value.status_code == 201


@pytest.mark.asyncio
async def test_select_non_json_body_raises_store_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    store = _client_for(handler)
    with pytest.raises(StoreError):
        await store.select(QUOTES_TABLE)
    await store.close()


@pytest.mark.asyncio
async def test_insert_asks_for_representation_and_unwraps_array() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["prefer"] = request.headers.get("Prefer")
        return httpx.Response(201, json=[{"id": "i-9", "content": "x"}])

    store = _client_for(handler)
    stored = await store.insert(INTERPRETATIONS_TABLE, {"content": "x"})
    await store.close()

    assert seen["prefer"] == "return=representation"
    assert stored == {"id": "i-9", "content": "x"}
