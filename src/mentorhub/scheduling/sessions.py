"""Upcoming-session feed and dashboard counters."""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from mentorhub.backend.base import BackendService, Order
from mentorhub.errors import NotFoundError, ValidationError
from mentorhub.schemas.session import JoinLink, SessionRecord, SessionStats, SessionView

logger = logging.getLogger(__name__)

COLLECTION = "sessions"
UPCOMING = "upcoming"
STAT_STATUSES = ("completed", "pending", "upcoming")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: datetime) -> datetime:
    # Naive timestamps from the database are UTC
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def format_session_time(scheduled_at: datetime | None, now: datetime, tz: ZoneInfo) -> str:
    """Human label for a session start, relative to `now` in the viewer's timezone.

    'Today, 03:30 PM', 'Tomorrow, 09:00 AM', or 'Wed, 5 Mar, 06:15 PM'.
    """
    if scheduled_at is None:
        return "TBD"

    local = _aware(scheduled_at).astimezone(tz)
    today = _aware(now).astimezone(tz).date()
    time_str = local.strftime("%I:%M %p")

    if local.date() == today:
        return f"Today, {time_str}"
    if local.date() == today + timedelta(days=1):
        return f"Tomorrow, {time_str}"
    return f"{local:%a}, {local.day} {local:%b}, {time_str}"


def join_session(session: SessionRecord) -> JoinLink | None:
    """Pick the link to open: host start URL first, then the attendee link."""
    if session.start_url:
        return JoinLink(url=session.start_url, role="host")
    if session.meeting_url:
        return JoinLink(url=session.meeting_url, role="attendee")
    return None


class SessionFeed:
    """Read model over the sessions collection for a mentor dashboard."""

    def __init__(
        self,
        backend: BackendService,
        *,
        display_timezone: str = "Asia/Kolkata",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._backend = backend
        self._tz = ZoneInfo(display_timezone)
        self._clock = clock

    def to_view(self, session: SessionRecord, now: datetime | None = None) -> SessionView:
        return SessionView(
            id=session.id,
            title=session.title or "Session",
            scheduled_at=_aware(session.scheduled_at) if session.scheduled_at else None,
            time_display=format_session_time(session.scheduled_at, now or self._clock(), self._tz),
            duration_minutes=session.duration_minutes,
            meeting_link=session.meeting_url,
            start_url=session.start_url,
            notes=session.notes,
            status=session.status,
        )

    async def list_upcoming(self, mentor_id: str, limit: int = 10) -> list[SessionView]:
        """Upcoming sessions for a mentor, soonest first, at most `limit`."""
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        rows = await self._backend.query(
            COLLECTION,
            {"mentor_id": mentor_id, "status": UPCOMING},
            order=[Order("scheduled_at")],
            limit=limit,
        )
        now = self._clock()
        return [self.to_view(SessionRecord.model_validate(row), now) for row in rows]

    async def get_session(self, session_id: str) -> SessionRecord:
        rows = await self._backend.query(COLLECTION, {"id": session_id}, limit=1)
        if not rows:
            raise NotFoundError("Session not found")
        return SessionRecord.model_validate(rows[0])

    async def get_stats(self, mentor_id: str) -> SessionStats:
        """Count completed, pending and upcoming sessions concurrently.

        A failing count is logged and reported as 0 so the dashboard still renders.
        """
        results = await asyncio.gather(
            *(
                self._backend.count(COLLECTION, {"mentor_id": mentor_id, "status": status})
                for status in STAT_STATUSES
            ),
            return_exceptions=True,
        )

        counts: dict[str, int] = {}
        for status, result in zip(STAT_STATUSES, results):
            if isinstance(result, Exception):
                logger.error("Error fetching %s stats: %s", status, result)
                counts[status] = 0
            elif isinstance(result, BaseException):
                raise result
            else:
                counts[status] = result
        return SessionStats(**counts)
