from mentorhub.models.availability import AvailabilitySlot
from mentorhub.models.mentor import (
    Category,
    Experience,
    Mentor,
    MentorCategory,
    MentorSkill,
    Skill,
)
from mentorhub.models.session import Session

__all__ = [
    "AvailabilitySlot",
    "Category",
    "Experience",
    "Mentor",
    "MentorCategory",
    "MentorSkill",
    "Session",
    "Skill",
]
