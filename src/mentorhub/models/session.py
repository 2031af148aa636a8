from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mentorhub.database import Base
from mentorhub.models._ids import new_id


class Session(Base):
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    mentor_id: Mapped[str] = mapped_column(ForeignKey("mentors.id"), index=True)
    title: Mapped[str | None] = mapped_column(String(200), default=None)
    scheduled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )
    duration_minutes: Mapped[int | None] = mapped_column(default=None)
    status: Mapped[str] = mapped_column(
        String(20), default="pending"
    )  # pending, upcoming, completed, cancelled
    meeting_url: Mapped[str | None] = mapped_column(String(500), default=None)  # attendee link
    start_url: Mapped[str | None] = mapped_column(String(1000), default=None)  # host link
    notes: Mapped[str | None] = mapped_column(Text, default=None)
