"""PostgREST client for a hosted Supabase project.

Tables live under `/rest/v1/{table}` and procedures under
`/rest/v1/rpc/{name}`. Filters are sent as `column=eq.value` query params.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx
from pydantic_core import to_jsonable_python

from mentorhub.backend.base import BackendService, Filters, Order, Record
from mentorhub.config import Settings
from mentorhub.errors import BackendError

logger = logging.getLogger(__name__)


def _filter_value(value: Any) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{to_jsonable_python(value)}"


def _filter_params(filters: Filters | None) -> dict[str, str]:
    return {column: _filter_value(value) for column, value in (filters or {}).items()}


def _parse_total(content_range: str | None) -> int:
    """Parse the total out of a Content-Range header like '0-9/42' or '*/0'."""
    if not content_range or "/" not in content_range:
        raise BackendError(f"Missing count in Content-Range: {content_range!r}")
    total = content_range.rsplit("/", 1)[1]
    if not total.isdigit():
        raise BackendError(f"Unexpected Content-Range: {content_range!r}")
    return int(total)


def _json(response: httpx.Response) -> Any:
    """Decode a successful response body; a malformed body is a backend failure."""
    try:
        return response.json()
    except ValueError as e:
        logger.error("Undecodable response from %s: %s", response.request.url.path, e)
        raise BackendError(f"Malformed response from data service: {e}") from e


class RestBackend(BackendService):
    """Data service over the Supabase REST API."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "RestBackend":
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError(
                "MENTORHUB_SUPABASE_URL and MENTORHUB_SUPABASE_KEY are required for the rest backend"
            )
        client = httpx.AsyncClient(
            base_url=settings.supabase_url.rstrip("/") + "/rest/v1",
            headers={
                "apikey": settings.supabase_key,
                "Authorization": f"Bearer {settings.supabase_key}",
                "Accept-Profile": settings.supabase_schema,
                "Content-Profile": settings.supabase_schema,
            },
            timeout=settings.http_timeout_seconds,
        )
        return cls(client)

    @property
    def name(self) -> str:
        return "rest"

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=to_jsonable_python(json) if json is not None else None,
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error("%s %s rejected (%d): %s", method, path, e.response.status_code, message)
            raise BackendError(message) from e
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise BackendError(f"Request to data service failed: {e}") from e
        return response

    async def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        response = await self._request(
            "POST", f"/{collection}", json=dict(record), prefer="return=representation"
        )
        rows = _json(response)
        if not rows:
            raise BackendError(f"Insert into {collection} returned no row")
        logger.info("Inserted %s id=%s", collection, rows[0].get("id"))
        return rows[0]  # type: ignore[no-any-return]

    async def query(
        self,
        collection: str,
        filters: Filters | None = None,
        order: Sequence[Order] = (),
        limit: int | None = None,
    ) -> list[Record]:
        params = {"select": "*", **_filter_params(filters)}
        if order:
            params["order"] = ",".join(
                f"{key.column}.{'asc' if key.ascending else 'desc'}" for key in order
            )
        if limit is not None:
            params["limit"] = str(limit)
        response = await self._request("GET", f"/{collection}", params=params)
        return _json(response)

    async def count(self, collection: str, filters: Filters | None = None) -> int:
        params = {"select": "*", **_filter_params(filters)}
        response = await self._request(
            "HEAD", f"/{collection}", params=params, prefer="count=exact"
        )
        return _parse_total(response.headers.get("content-range"))

    async def update(
        self, collection: str, filters: Filters, values: Mapping[str, Any]
    ) -> list[Record]:
        response = await self._request(
            "PATCH",
            f"/{collection}",
            params=_filter_params(filters),
            json=dict(values),
            prefer="return=representation",
        )
        return _json(response)

    async def delete(self, collection: str, filters: Filters) -> int:
        response = await self._request(
            "DELETE",
            f"/{collection}",
            params=_filter_params(filters),
            prefer="return=representation",
        )
        removed = len(_json(response))
        logger.info("Deleted %d row(s) from %s", removed, collection)
        return removed

    async def rpc(self, procedure: str, args: Mapping[str, Any]) -> Any:
        response = await self._request("POST", f"/rpc/{procedure}", json=dict(args))
        if not response.content:
            return None
        return _json(response)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text
