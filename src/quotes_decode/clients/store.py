"""Remote store client.

Talks to the table-style persistence API (quotes, interpretations and the
interpretation_upvotes membership relation). Filters are equality only and
ordering is by a single column. Timeouts are left to httpx defaults; the
client never retries.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

HTTP_BAD_REQUEST = 400

QUOTES_TABLE = "quotes"
INTERPRETATIONS_TABLE = "interpretations"
UPVOTES_TABLE = "interpretation_upvotes"


class StoreError(RuntimeError):
    """Raised when a call to the remote store fails.

    Covers both transport failures and error responses from the store.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class StoreConfig:
    """Immutable configuration for store access."""

    base_url: str
    anon_key: str = ""
    rest_prefix: str = "/rest/v1"


class StoreClient:
    """HTTP client wrapper for the remote persistence API."""

    def __init__(
        self,
        config: StoreConfig,
        *,
        access_token: Callable[[], str | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._access_token = access_token or (lambda: None)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    transport=self._transport,
                )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.anon_key:
            headers["apikey"] = self.config.anon_key
        token = self._access_token() or self.config.anon_key
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _filter_params(filters: Mapping[str, Any] | None) -> dict[str, str]:
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    @dataclass
    class RequestParams:
        """Parameters for HTTP requests."""
        method: str
        table: str
        json_data: Any | None = None
        params: Mapping[str, Any] | None = None
        headers: Mapping[str, str] | None = None

    async def _request(self, params: RequestParams) -> httpx.Response:
        client = await self._ensure_client()
        path = f"{self.config.rest_prefix}/{params.table}"

        try:
            response = await client.request(
                params.method,
                path,
                json=params.json_data,
                params=params.params,
                headers={**self._build_headers(), **(params.headers or {})},
            )
        except httpx.HTTPError as exc:
            raise StoreError(f"Store request failed: {exc}") from exc

        if response.status_code >= HTTP_BAD_REQUEST:
            raise StoreError(_error_message(response), status_code=response.status_code)
        return response

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Mapping[str, Any] | None = None,
        order: str | None = None,
    ) -> list[dict[str, Any]]:
        """Return rows of ``table`` matching the equality ``filters``.

        ``order`` takes the form ``column.desc`` or ``column.asc``.
        """
        query = {"select": columns, **self._filter_params(filters)}
        if order:
            query["order"] = order
        response = await self._request(self.RequestParams(method="GET", table=table, params=query))
        rows = _decode(response)
        if not isinstance(rows, list):
            raise StoreError("Store returned a non-list result", status_code=response.status_code)
        return rows

    async def insert(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored, including server-assigned fields."""
        response = await self._request(
            self.RequestParams(
                method="POST",
                table=table,
                json_data=dict(row),
                headers={"Prefer": "return=representation"},
            )
        )
        stored = _decode(response)
        # Representations may come back as a one-row array.
        if isinstance(stored, list):
            stored = stored[0] if stored else None
        if not isinstance(stored, dict):
            raise StoreError("Store did not return the inserted row", status_code=response.status_code)
        return stored

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        *,
        filters: Mapping[str, Any],
    ) -> None:
        """Update columns on rows matching ``filters``."""
        await self._request(
            self.RequestParams(
                method="PATCH",
                table=table,
                json_data=dict(values),
                params=self._filter_params(filters),
            )
        )

    async def delete(self, table: str, *, filters: Mapping[str, Any]) -> None:
        """Delete rows matching ``filters``."""
        await self._request(
            self.RequestParams(method="DELETE", table=table, params=self._filter_params(filters))
        )


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise StoreError(
            f"Malformed store response: {exc}", status_code=response.status_code
        ) from exc


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"Store responded with {response.status_code}"
    if isinstance(body, dict):
        for key in ("detail", "message", "msg"):
            detail = body.get(key)
            if isinstance(detail, str) and detail:
                return detail
    return f"Store responded with {response.status_code}"
