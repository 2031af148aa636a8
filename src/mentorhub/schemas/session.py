from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class SessionRecord(BaseModel):
    """A row of the sessions collection as returned by the backend."""

    id: str
    mentor_id: str | None = None
    title: str | None = None
    scheduled_at: datetime | None = None
    duration_minutes: int | None = None
    status: str
    meeting_url: str | None = None
    start_url: str | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}


class SessionView(BaseModel):
    id: str
    title: str
    scheduled_at: datetime | None = None
    time_display: str
    duration_minutes: int | None = None
    meeting_link: str | None = None
    start_url: str | None = None
    notes: str | None = None
    status: str


class SessionStats(BaseModel):
    completed: int = 0
    pending: int = 0
    upcoming: int = 0


class JoinLink(BaseModel):
    url: str
    role: Literal["host", "attendee"]
