from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from mentorhub.database import Base
from mentorhub.models._ids import new_id


class AvailabilitySlot(Base):
    __tablename__ = "availability_slots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    mentor_id: Mapped[str] = mapped_column(ForeignKey("mentors.id"), index=True)
    day_of_week: Mapped[int]  # 0=Sunday, 6=Saturday
    start_time: Mapped[str] = mapped_column(String(8))  # HH:MM:SS
    end_time: Mapped[str] = mapped_column(String(8))
    is_recurring: Mapped[bool] = mapped_column(default=True)
    is_available: Mapped[bool] = mapped_column(default=True)
