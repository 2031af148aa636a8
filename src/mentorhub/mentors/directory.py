"""Mentor profiles and the onboarding application write."""

import logging
import re
from functools import partial
from typing import Any

from mentorhub.backend.base import BackendService, Order, Record
from mentorhub.backend.saga import Saga
from mentorhub.errors import BackendError, NotFoundError
from mentorhub.schemas.mentor import (
    CategoryRead,
    MentorApplication,
    MentorRead,
    MentorUpdate,
    SkillRead,
)

logger = logging.getLogger(__name__)

PENDING_APPROVAL = "pending_approval"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(value: str | int | None) -> int:
    """Leading integer of a form value, or 0 when there is none ('12 yrs' -> 12)."""
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(value or "")
    return int(match.group(1)) if match else 0


class MentorDirectory:
    def __init__(self, backend: BackendService) -> None:
        self._backend = backend

    async def fetch_categories(self) -> list[CategoryRead]:
        rows = await self._backend.query("categories", order=[Order("name")])
        return [CategoryRead.model_validate(row) for row in rows]

    async def fetch_skills(self) -> list[SkillRead]:
        rows = await self._backend.query("skills", order=[Order("name")])
        return [SkillRead.model_validate(row) for row in rows]

    async def _find_by_user(self, user_id: str) -> Record | None:
        rows = await self._backend.query("mentors", {"user_id": user_id}, limit=1)
        return rows[0] if rows else None

    async def get_profile(self, user_id: str) -> MentorRead | None:
        row = await self._find_by_user(user_id)
        return MentorRead.model_validate(row) if row else None

    async def mentor_exists(self, user_id: str) -> bool:
        return await self._find_by_user(user_id) is not None

    async def get_mentor_id(self, user_id: str) -> str:
        row = await self._find_by_user(user_id)
        if row is None:
            raise NotFoundError("Mentor not found")
        return str(row["id"])

    async def create_profile(
        self, user_id: str, phone: str, email: str | None = None
    ) -> MentorRead:
        """Create a placeholder profile for a user who signed in by phone."""
        row = await self._backend.insert(
            "mentors",
            {
                "user_id": user_id,
                "phone": phone,
                "email": email,
                "full_name": "Mentor",
                "title": "New Mentor",
                "hourly_rate": 0,
                "status": PENDING_APPROVAL,
            },
        )
        logger.info("Created mentor profile %s for user %s", row["id"], user_id)
        return MentorRead.model_validate(row)

    async def update_profile(self, mentor_id: str, updates: MentorUpdate) -> MentorRead:
        values = updates.model_dump(exclude_unset=True)
        if not values:
            rows = await self._backend.query("mentors", {"id": mentor_id}, limit=1)
        else:
            rows = await self._backend.update("mentors", {"id": mentor_id}, values)
        if not rows:
            raise NotFoundError("Mentor not found")
        return MentorRead.model_validate(rows[0])

    async def claim_by_phone(self, phone: str, user_id: str) -> bool:
        """Link a pre-registered mentor profile to a user through the privileged procedure."""
        linked = await self._backend.rpc(
            "link_mentor_by_phone", {"p_phone": phone, "p_user_id": user_id}
        )
        logger.info("Claim by phone for user %s: linked=%s", user_id, bool(linked))
        return bool(linked)

    async def _insert_step(self, saga: Saga, collection: str, record: dict[str, Any]) -> Record:
        try:
            row = await self._backend.insert(collection, record)
        except BackendError as e:
            await saga.abort(BackendError(f"{collection}: {e}"))
        saga.record(
            f"{collection}/{row['id']}",
            partial(self._backend.delete, collection, {"id": row["id"]}),
        )
        return row

    async def submit_application(self, application: MentorApplication) -> str:
        """Write the mentor row and its category, skill and experience rows.

        Each row is one write; on failure everything written so far is
        deleted again, newest first. Returns the new mentor id.
        """
        personal = application.personal
        professional = application.professional
        saga = Saga("Mentor application")

        mentor = await self._insert_step(
            saga,
            "mentors",
            {
                "user_id": application.user_id,
                "full_name": personal.full_name,
                "email": personal.email,
                "phone": personal.phone,
                "bio": personal.bio,
                "location": personal.location,
                "profile_image_url": personal.profile_image_url,
                "title": professional.title,
                "company": professional.company,
                "years_of_experience": parse_int(professional.years_of_experience),
                "hourly_rate": parse_int(professional.hourly_rate),
                "expertise_level": professional.expertise_level,
                "linkedin_url": personal.linkedin,
                "github_url": personal.github,
                "portfolio_url": personal.portfolio,
                "video_intro_url": personal.video_intro,
                "status": PENDING_APPROVAL,
            },
        )
        mentor_id = str(mentor["id"])

        for category_id in application.categories:
            await self._insert_step(
                saga, "mentor_categories", {"mentor_id": mentor_id, "category_id": category_id}
            )
        for skill_id in application.skills:
            await self._insert_step(
                saga, "mentor_skills", {"mentor_id": mentor_id, "skill_id": skill_id}
            )
        for exp in application.experiences:
            await self._insert_step(
                saga,
                "experiences",
                {
                    "mentor_id": mentor_id,
                    "company": exp.company,
                    "position": exp.role,
                    "description": exp.description,
                    "start_date": exp.start_date,
                    "end_date": None if exp.is_current else exp.end_date,
                    "is_current": exp.is_current,
                },
            )

        logger.info(
            "Mentor application %s stored (%d categories, %d skills, %d experiences)",
            mentor_id,
            len(application.categories),
            len(application.skills),
            len(application.experiences),
        )
        return mentor_id
