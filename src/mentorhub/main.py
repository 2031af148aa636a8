import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mentorhub.api.routes.availability import router as availability_router
from mentorhub.api.routes.mentors import router as mentors_router
from mentorhub.api.routes.sessions import router as sessions_router
from mentorhub.backend import create_backend
from mentorhub.backend.base import BackendService
from mentorhub.backend.sql import SQLBackend
from mentorhub.config import Settings, get_settings


def create_app(
    settings: Settings | None = None,
    backend: BackendService | None = None,
) -> FastAPI:
    """Build the app. `backend` overrides the one selected by settings (used in tests)."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.backend = backend or create_backend(settings)
        # Create tables on startup (dev convenience; migrations for production)
        if isinstance(app.state.backend, SQLBackend):
            await app.state.backend.create_all()
        yield
        await app.state.backend.close()

    app = FastAPI(
        title="MentorHub",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    if backend is not None:
        app.state.backend = backend

    app.include_router(availability_router)
    app.include_router(sessions_router)
    app.include_router(mentors_router)

    @app.get("/api/system/status")
    async def system_status() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
