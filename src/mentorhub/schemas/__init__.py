from mentorhub.schemas.availability import AvailabilitySlotRead, SlotCreate
from mentorhub.schemas.mentor import (
    ApplicationResult,
    CategoryRead,
    ClaimRequest,
    ClaimResponse,
    ExperienceCreate,
    MentorApplication,
    MentorCreate,
    MentorRead,
    MentorUpdate,
    PersonalInfo,
    ProfessionalInfo,
    SkillRead,
)
from mentorhub.schemas.session import JoinLink, SessionRecord, SessionStats, SessionView

__all__ = [
    "ApplicationResult",
    "AvailabilitySlotRead",
    "CategoryRead",
    "ClaimRequest",
    "ClaimResponse",
    "ExperienceCreate",
    "JoinLink",
    "MentorApplication",
    "MentorCreate",
    "MentorRead",
    "MentorUpdate",
    "PersonalInfo",
    "ProfessionalInfo",
    "SessionRecord",
    "SessionStats",
    "SessionView",
    "SkillRead",
    "SlotCreate",
]
