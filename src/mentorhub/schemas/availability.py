from pydantic import BaseModel, Field

# HH:MM as sent by time inputs, or HH:MM:SS as stored
TIME_PATTERN = r"^\d{2}:\d{2}(:\d{2})?$"


class SlotCreate(BaseModel):
    day_of_week: int = Field(ge=0, le=6)  # 0=Sunday
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    is_recurring: bool = True


class AvailabilitySlotRead(BaseModel):
    id: str
    mentor_id: str
    day_of_week: int
    start_time: str
    end_time: str
    is_recurring: bool
    is_available: bool

    model_config = {"from_attributes": True}
