"""Session endpoints: upcoming feed, dashboard stats and the join redirect."""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from mentorhub.api.deps import get_app_settings, get_session_feed
from mentorhub.config import Settings
from mentorhub.errors import BackendError, NotFoundError
from mentorhub.schemas.session import SessionStats, SessionView
from mentorhub.scheduling.sessions import SessionFeed, join_session

router = APIRouter(prefix="/api", tags=["sessions"])


@router.get("/mentors/{mentor_id}/sessions/upcoming", response_model=list[SessionView])
async def list_upcoming_sessions(
    mentor_id: str,
    limit: int | None = Query(default=None, ge=1, le=100),
    feed: SessionFeed = Depends(get_session_feed),
    settings: Settings = Depends(get_app_settings),
) -> list[SessionView]:
    """Upcoming sessions, soonest first. `limit` defaults to the configured feed size."""
    try:
        return await feed.list_upcoming(mentor_id, limit=limit or settings.upcoming_sessions_limit)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None


@router.get("/mentors/{mentor_id}/sessions/stats", response_model=SessionStats)
async def get_session_stats(
    mentor_id: str,
    feed: SessionFeed = Depends(get_session_feed),
) -> SessionStats:
    """Completed / pending / upcoming counts. Failed counts come back as 0."""
    return await feed.get_stats(mentor_id)


@router.get("/sessions/{session_id}/join", response_class=RedirectResponse, status_code=307)
async def join(
    session_id: str,
    feed: SessionFeed = Depends(get_session_feed),
) -> RedirectResponse:
    """Redirect to the host start link, falling back to the attendee link."""
    try:
        session = await feed.get_session(session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None

    link = join_session(session)
    if link is None:
        raise HTTPException(status_code=404, detail="No meeting link available")
    return RedirectResponse(link.url, status_code=307)
