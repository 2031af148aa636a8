"""SQLAlchemy-backed implementation of the data service.

Collections map one-to-one onto the tables declared in `mentorhub.models`.
Server-side procedures are plain coroutines that run inside a single
transaction.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import ColumnElement, Table, and_, delete, func, insert, or_, select, true, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import mentorhub.models  # noqa: F401  register all models with Base.metadata
from mentorhub.backend.base import BackendService, Filters, Order, Record
from mentorhub.config import Settings
from mentorhub.database import Base, create_engine, create_sessionmaker
from mentorhub.errors import BackendError

logger = logging.getLogger(__name__)

Procedure = Callable[[AsyncSession, Mapping[str, Any]], Awaitable[Any]]


async def link_mentor_by_phone(session: AsyncSession, args: Mapping[str, Any]) -> bool:
    """Attach an unclaimed mentor profile with a matching phone to a user."""
    mentors = Base.metadata.tables["mentors"]
    stmt = (
        update(mentors)
        .where(
            mentors.c.phone == args["p_phone"],
            or_(mentors.c.user_id.is_(None), mentors.c.user_id == args["p_user_id"]),
        )
        .values(user_id=args["p_user_id"])
    )
    result = await session.execute(stmt)
    return bool(result.rowcount)


PROCEDURES: dict[str, Procedure] = {
    "link_mentor_by_phone": link_mentor_by_phone,
}


class SQLBackend(BackendService):
    """Data service over an async SQLAlchemy engine."""

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
        procedures: Mapping[str, Procedure] | None = None,
    ) -> None:
        self._sessionmaker = sessionmaker
        self._engine = engine
        self._procedures = dict(procedures or PROCEDURES)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLBackend":
        engine = create_engine(settings)
        return cls(create_sessionmaker(engine), engine=engine)

    @property
    def name(self) -> str:
        return "sql"

    async def create_all(self) -> None:
        """Create tables (dev convenience; migrations for production)."""
        if self._engine is None:
            return
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()

    @asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._sessionmaker() as session:
                yield session
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("SQL %s failed: %s", action, e)
            raise BackendError(f"{action} failed: {e}") from e

    def _table(self, collection: str) -> Table:
        table = Base.metadata.tables.get(collection)
        if table is None:
            raise BackendError(f"Unknown collection: {collection}")
        return table

    def _where(self, table: Table, filters: Filters | None) -> ColumnElement[bool]:
        clauses = []
        for column, value in (filters or {}).items():
            if column not in table.c:
                raise BackendError(f"Unknown column {table.name}.{column}")
            col = table.c[column]
            clauses.append(col.is_(None) if value is None else col == value)
        return and_(true(), *clauses)

    async def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        table = self._table(collection)
        async with self._session(f"insert into {collection}") as session:
            result = await session.execute(insert(table).values(**record).returning(*table.c))
            row = dict(result.mappings().one())
        logger.info("Inserted %s id=%s", collection, row.get("id"))
        return row

    async def query(
        self,
        collection: str,
        filters: Filters | None = None,
        order: Sequence[Order] = (),
        limit: int | None = None,
    ) -> list[Record]:
        table = self._table(collection)
        stmt = select(table).where(self._where(table, filters))
        for key in order:
            if key.column not in table.c:
                raise BackendError(f"Unknown column {collection}.{key.column}")
            col = table.c[key.column]
            stmt = stmt.order_by(col.asc() if key.ascending else col.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._session(f"query {collection}") as session:
            result = await session.execute(stmt)
            return [dict(row) for row in result.mappings().all()]

    async def count(self, collection: str, filters: Filters | None = None) -> int:
        table = self._table(collection)
        stmt = select(func.count()).select_from(table).where(self._where(table, filters))
        async with self._session(f"count {collection}") as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())

    async def update(
        self, collection: str, filters: Filters, values: Mapping[str, Any]
    ) -> list[Record]:
        table = self._table(collection)
        stmt = (
            update(table)
            .where(self._where(table, filters))
            .values(**values)
            .returning(*table.c)
        )
        async with self._session(f"update {collection}") as session:
            result = await session.execute(stmt)
            return [dict(row) for row in result.mappings().all()]

    async def delete(self, collection: str, filters: Filters) -> int:
        table = self._table(collection)
        async with self._session(f"delete from {collection}") as session:
            result = await session.execute(delete(table).where(self._where(table, filters)))
            removed = result.rowcount or 0
        logger.info("Deleted %d row(s) from %s", removed, collection)
        return removed

    async def rpc(self, procedure: str, args: Mapping[str, Any]) -> Any:
        handler = self._procedures.get(procedure)
        if handler is None:
            raise BackendError(f"Unknown procedure: {procedure}")
        async with self._session(f"rpc {procedure}") as session:
            return await handler(session, args)
