from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from mentorhub.backend.sql import SQLBackend
from mentorhub.config import Settings
from mentorhub.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, backend="sql", display_timezone="Asia/Kolkata")


@pytest.fixture
async def backend(tmp_path: Path) -> AsyncGenerator[SQLBackend, None]:
    # File-backed so concurrent counts get their own connections
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    sql_backend = SQLBackend(async_sessionmaker(engine, expire_on_commit=False), engine=engine)
    await sql_backend.create_all()
    yield sql_backend
    await sql_backend.close()


@pytest.fixture
async def client(settings: Settings, backend: SQLBackend) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(settings, backend=backend)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def mentor_id(backend: SQLBackend) -> str:
    row = await backend.insert(
        "mentors",
        {"full_name": "Asha Rao", "phone": "+919800000001", "user_id": "user-1"},
    )
    return str(row["id"])
