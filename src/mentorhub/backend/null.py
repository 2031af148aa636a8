"""Stub backend used when no data service is configured."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, NoReturn

from mentorhub.backend.base import BackendService, Filters, Order, Record
from mentorhub.errors import BackendError

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "Backend not configured"


class NullBackend(BackendService):
    """Rejects every call with a `BackendError`."""

    def __init__(self) -> None:
        logger.warning("No data backend configured; all reads and writes will fail")

    @property
    def name(self) -> str:
        return "null"

    def _fail(self, operation: str, collection: str) -> NoReturn:
        raise BackendError(f"{NOT_CONFIGURED} ({operation} {collection})")

    async def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        self._fail("insert", collection)

    async def query(
        self,
        collection: str,
        filters: Filters | None = None,
        order: Sequence[Order] = (),
        limit: int | None = None,
    ) -> list[Record]:
        self._fail("query", collection)

    async def count(self, collection: str, filters: Filters | None = None) -> int:
        self._fail("count", collection)

    async def update(
        self, collection: str, filters: Filters, values: Mapping[str, Any]
    ) -> list[Record]:
        self._fail("update", collection)

    async def delete(self, collection: str, filters: Filters) -> int:
        self._fail("delete", collection)

    async def rpc(self, procedure: str, args: Mapping[str, Any]) -> Any:
        self._fail("rpc", procedure)
