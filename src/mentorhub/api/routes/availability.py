"""Availability API routes: add, list and delete a mentor's weekly slots."""

from fastapi import APIRouter, Depends, HTTPException

from mentorhub.api.deps import get_scheduler
from mentorhub.errors import BackendError, NotFoundError, PartialFailureError, ValidationError
from mentorhub.schemas.availability import AvailabilitySlotRead, SlotCreate
from mentorhub.scheduling.slots import AvailabilityScheduler

router = APIRouter(prefix="/api", tags=["availability"])


@router.post(
    "/mentors/{mentor_id}/availability",
    response_model=list[AvailabilitySlotRead],
    status_code=201,
)
async def add_slot(
    mentor_id: str,
    body: SlotCreate,
    scheduler: AvailabilityScheduler = Depends(get_scheduler),
) -> list[AvailabilitySlotRead]:
    """Add a slot. An end time at or before the start time spans midnight and
    is stored as two slots on consecutive days."""
    try:
        return await scheduler.add_slot(mentor_id, body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    except PartialFailureError as e:
        raise HTTPException(
            status_code=502,
            detail={"message": str(e), "orphaned_ids": e.orphaned_ids},
        ) from None
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None


@router.get("/mentors/{mentor_id}/availability", response_model=list[AvailabilitySlotRead])
async def list_slots(
    mentor_id: str,
    scheduler: AvailabilityScheduler = Depends(get_scheduler),
) -> list[AvailabilitySlotRead]:
    """List slots ordered by day of week, then start time."""
    try:
        return await scheduler.list_slots(mentor_id)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None


@router.delete("/availability/{slot_id}", status_code=204)
async def delete_slot(
    slot_id: str,
    scheduler: AvailabilityScheduler = Depends(get_scheduler),
) -> None:
    """Delete a single availability slot."""
    try:
        await scheduler.delete_slot(slot_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None
