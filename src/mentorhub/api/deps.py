"""FastAPI dependencies that hand the app's backend to each service."""

from fastapi import Depends, Request

from mentorhub.backend.base import BackendService
from mentorhub.config import Settings
from mentorhub.mentors.directory import MentorDirectory
from mentorhub.scheduling.sessions import SessionFeed
from mentorhub.scheduling.slots import AvailabilityScheduler


def get_backend(request: Request) -> BackendService:
    return request.app.state.backend  # type: ignore[no-any-return]


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[no-any-return]


def get_scheduler(
    backend: BackendService = Depends(get_backend),
    settings: Settings = Depends(get_app_settings),
) -> AvailabilityScheduler:
    return AvailabilityScheduler(
        backend, reject_zero_length=settings.reject_zero_length_slots
    )


def get_session_feed(
    backend: BackendService = Depends(get_backend),
    settings: Settings = Depends(get_app_settings),
) -> SessionFeed:
    return SessionFeed(backend, display_timezone=settings.display_timezone)


def get_directory(backend: BackendService = Depends(get_backend)) -> MentorDirectory:
    return MentorDirectory(backend)
