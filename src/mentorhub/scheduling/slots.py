"""Availability slots: normalization and the overnight split.

A stored slot never spans midnight. A request whose end time is not after
its start time is split into two slots on consecutive days, written one
after the other. If the second write fails the first is deleted again.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

from pydantic import ValidationError as PydanticValidationError

from mentorhub.backend.base import BackendService, Order
from mentorhub.backend.saga import Saga
from mentorhub.errors import BackendError, NotFoundError, ValidationError
from mentorhub.schemas.availability import AvailabilitySlotRead, SlotCreate

logger = logging.getLogger(__name__)

COLLECTION = "availability_slots"
START_OF_DAY = "00:00:00"
END_OF_DAY = "23:59:59"

OnChange = Callable[[list[AvailabilitySlotRead]], Awaitable[None]]


def normalize_time(value: str) -> str:
    """Pad 'HH:MM' to 'HH:MM:SS'. Values of any other length pass through."""
    if len(value) == 5:
        return f"{value}:00"
    return value


@dataclass(frozen=True)
class SlotSpec:
    """A slot bounded within a single day, ready to be written."""

    day_of_week: int
    start_time: str
    end_time: str


def split_slot(day_of_week: int, start_time: str, end_time: str) -> list[SlotSpec]:
    """Turn a requested interval into one or two same-day slots.

    Times are compared as zero-padded strings. `end <= start` means the
    interval runs past midnight: the first slot ends at 23:59:59 and the
    second starts at 00:00:00 on the next day (Saturday wraps to Sunday).
    """
    start = normalize_time(start_time)
    end = normalize_time(end_time)
    if end <= start:
        return [
            SlotSpec(day_of_week, start, END_OF_DAY),
            SlotSpec((day_of_week + 1) % 7, START_OF_DAY, end),
        ]
    return [SlotSpec(day_of_week, start, end)]


class AvailabilityScheduler:
    """Creates, lists and deletes a mentor's availability slots."""

    def __init__(
        self,
        backend: BackendService,
        *,
        reject_zero_length: bool = False,
        on_change: OnChange | None = None,
    ) -> None:
        self._backend = backend
        self._reject_zero_length = reject_zero_length
        self._on_change = on_change

    async def add_slot(self, mentor_id: str, request: SlotCreate) -> list[AvailabilitySlotRead]:
        """Persist the slot(s) for a request and return what was created.

        Raises:
            ValidationError: missing mentor, or zero-length slot when those are rejected.
            BackendError: a write failed; earlier writes of the split were undone.
            PartialFailureError: a write failed and an earlier one could not be undone.
        """
        if not mentor_id:
            raise ValidationError("mentor_id is required")
        if self._reject_zero_length and (
            normalize_time(request.start_time) == normalize_time(request.end_time)
        ):
            raise ValidationError("Start and end time must differ")

        parts = split_slot(request.day_of_week, request.start_time, request.end_time)
        saga = Saga("Overnight slot" if len(parts) > 1 else "Slot")
        created: list[AvailabilitySlotRead] = []

        for part in parts:
            try:
                row = await self._backend.insert(
                    COLLECTION,
                    {
                        "mentor_id": mentor_id,
                        "day_of_week": part.day_of_week,
                        "start_time": part.start_time,
                        "end_time": part.end_time,
                        "is_recurring": request.is_recurring,
                        "is_available": True,
                    },
                )
            except BackendError as e:
                await saga.abort(e)
            row_id = str(row.get("id"))
            saga.record(row_id, partial(self._backend.delete, COLLECTION, {"id": row_id}))
            try:
                slot = AvailabilitySlotRead.model_validate(row)
            except PydanticValidationError as e:
                await saga.abort(BackendError(f"Unexpected slot record from data service: {e}"))
            created.append(slot)

        if len(created) > 1:
            logger.info(
                "Overnight slot for mentor %s split into %s",
                mentor_id,
                ", ".join(s.id for s in created),
            )

        if self._on_change is not None:
            await self._on_change(created)
        return created

    async def list_slots(self, mentor_id: str) -> list[AvailabilitySlotRead]:
        rows = await self._backend.query(
            COLLECTION,
            {"mentor_id": mentor_id},
            order=[Order("day_of_week"), Order("start_time")],
        )
        return [AvailabilitySlotRead.model_validate(row) for row in rows]

    async def delete_slot(self, slot_id: str) -> None:
        removed = await self._backend.delete(COLLECTION, {"id": slot_id})
        if not removed:
            raise NotFoundError("Slot not found")
