from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

Record = dict[str, Any]
Filters = Mapping[str, Any]


@dataclass(frozen=True)
class Order:
    """Sort key for `BackendService.query`."""

    column: str
    ascending: bool = True


class BackendService(ABC):
    """Narrow data-access interface over the hosted backend.

    Collections are table names (e.g. 'availability_slots'). Filters are
    equality matches combined with AND. Every implementation raises
    `mentorhub.errors.BackendError` when the service rejects a call; nothing
    is swallowed at this layer.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier for this backend (e.g. 'sql', 'rest')."""
        ...

    @abstractmethod
    async def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        """Insert one record and return it as stored (including generated id)."""
        ...

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Filters | None = None,
        order: Sequence[Order] = (),
        limit: int | None = None,
    ) -> list[Record]:
        """Return records matching `filters`, sorted by `order`, at most `limit`."""
        ...

    @abstractmethod
    async def count(self, collection: str, filters: Filters | None = None) -> int:
        """Return the number of records matching `filters`."""
        ...

    @abstractmethod
    async def update(
        self, collection: str, filters: Filters, values: Mapping[str, Any]
    ) -> list[Record]:
        """Apply `values` to matching records and return the updated rows."""
        ...

    @abstractmethod
    async def delete(self, collection: str, filters: Filters) -> int:
        """Delete matching records. Returns the number of rows removed."""
        ...

    @abstractmethod
    async def rpc(self, procedure: str, args: Mapping[str, Any]) -> Any:
        """Call a server-side procedure and return its result."""
        ...

    async def close(self) -> None:
        """Release connections held by the backend."""
        return None
