import logging

from mentorhub.backend.base import BackendService, Order
from mentorhub.backend.null import NullBackend
from mentorhub.backend.rest import RestBackend
from mentorhub.backend.sql import SQLBackend
from mentorhub.config import Settings

logger = logging.getLogger(__name__)


def create_backend(settings: Settings) -> BackendService:
    """Build the data service selected by `settings.backend`."""
    backend: BackendService
    if settings.backend == "sql":
        backend = SQLBackend.from_settings(settings)
    elif settings.backend == "rest":
        backend = RestBackend.from_settings(settings)
    else:
        backend = NullBackend()
    logger.info("Using %s data backend", backend.name)
    return backend


__all__ = [
    "BackendService",
    "NullBackend",
    "Order",
    "RestBackend",
    "SQLBackend",
    "create_backend",
]
