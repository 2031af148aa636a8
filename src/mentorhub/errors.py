"""Error types shared by the backends, services and API routes."""


class MentorHubError(Exception):
    """Base class for all application errors."""


class ValidationError(MentorHubError):
    """Input rejected before any write was attempted."""


class BackendError(MentorHubError):
    """The data service rejected a read or write."""


class PartialFailureError(BackendError):
    """A multi-step write failed and its compensation could not undo every step.

    `orphaned_ids` lists the records left behind.
    """

    def __init__(self, message: str, orphaned_ids: list[str]) -> None:
        super().__init__(message)
        self.orphaned_ids = orphaned_ids


class NotFoundError(MentorHubError):
    """The requested record does not exist."""
