"""Mentor endpoints: catalogues, profiles and onboarding applications."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from mentorhub.api.deps import get_directory
from mentorhub.errors import BackendError, NotFoundError, PartialFailureError
from mentorhub.mentors.directory import MentorDirectory
from mentorhub.schemas.mentor import (
    ApplicationResult,
    CategoryRead,
    ClaimRequest,
    ClaimResponse,
    MentorApplication,
    MentorCreate,
    MentorRead,
    MentorUpdate,
    SkillRead,
)

router = APIRouter(prefix="/api", tags=["mentors"])
logger = logging.getLogger(__name__)


@router.get("/categories", response_model=list[CategoryRead])
async def list_categories(
    directory: MentorDirectory = Depends(get_directory),
) -> list[CategoryRead]:
    try:
        return await directory.fetch_categories()
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None


@router.get("/skills", response_model=list[SkillRead])
async def list_skills(
    directory: MentorDirectory = Depends(get_directory),
) -> list[SkillRead]:
    try:
        return await directory.fetch_skills()
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None


@router.get("/mentors/by-user/{user_id}", response_model=MentorRead)
async def get_mentor_by_user(
    user_id: str,
    directory: MentorDirectory = Depends(get_directory),
) -> MentorRead:
    try:
        mentor = await directory.get_profile(user_id)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None
    if mentor is None:
        raise HTTPException(status_code=404, detail="Mentor not found")
    return mentor


@router.post("/mentors", response_model=MentorRead, status_code=201)
async def create_mentor(
    body: MentorCreate,
    directory: MentorDirectory = Depends(get_directory),
) -> MentorRead:
    """Create a placeholder profile. Returns 409 if the user already has one."""
    try:
        if await directory.mentor_exists(body.user_id):
            raise HTTPException(status_code=409, detail="Mentor profile already exists")
        return await directory.create_profile(body.user_id, body.phone, body.email)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None


@router.patch("/mentors/{mentor_id}", response_model=MentorRead)
async def update_mentor(
    mentor_id: str,
    body: MentorUpdate,
    directory: MentorDirectory = Depends(get_directory),
) -> MentorRead:
    try:
        return await directory.update_profile(mentor_id, body)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None


@router.post("/mentors/claim", response_model=ClaimResponse)
async def claim_mentor(
    body: ClaimRequest,
    directory: MentorDirectory = Depends(get_directory),
) -> ClaimResponse:
    """Link a mentor profile registered under this phone number to the user."""
    try:
        linked = await directory.claim_by_phone(body.phone, body.user_id)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None
    return ClaimResponse(linked=linked)


@router.post("/mentors/applications", response_model=ApplicationResult, status_code=201)
async def submit_application(
    body: MentorApplication,
    directory: MentorDirectory = Depends(get_directory),
) -> ApplicationResult:
    """Store a full mentor application (profile, categories, skills, experience)."""
    try:
        mentor_id = await directory.submit_application(body)
    except PartialFailureError as e:
        logger.error("Mentor application left orphaned rows: %s", e.orphaned_ids)
        raise HTTPException(
            status_code=502,
            detail={"message": str(e), "orphaned_ids": e.orphaned_ids},
        ) from None
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None
    return ApplicationResult(mentor_id=mentor_id)
