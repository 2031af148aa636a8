"""Compensating rollback for multi-step writes that have no transaction."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import NoReturn

from mentorhub.errors import BackendError, MentorHubError, PartialFailureError

logger = logging.getLogger(__name__)


@dataclass
class _Compensation:
    record_id: str
    undo: Callable[[], Awaitable[object]]


@dataclass
class Saga:
    """Records an undo step for every completed write.

    On failure, `abort` runs the undo steps newest-first. If all of them
    succeed the original error is re-raised; otherwise a
    `PartialFailureError` lists the records that could not be removed.
    """

    name: str
    _steps: list[_Compensation] = field(default_factory=list)

    def record(self, record_id: str, undo: Callable[[], Awaitable[object]]) -> None:
        self._steps.append(_Compensation(record_id, undo))

    @property
    def completed(self) -> list[str]:
        return [step.record_id for step in self._steps]

    async def abort(self, error: MentorHubError) -> NoReturn:
        orphaned: list[str] = []
        for step in reversed(self._steps):
            try:
                await step.undo()
            except BackendError as e:
                logger.warning("%s: could not undo %s: %s", self.name, step.record_id, e)
                orphaned.append(step.record_id)
            else:
                logger.warning("%s: rolled back %s", self.name, step.record_id)
        self._steps.clear()

        if orphaned:
            raise PartialFailureError(
                f"{self.name} failed ({error}) and left {len(orphaned)} record(s) behind",
                orphaned_ids=orphaned,
            ) from error
        raise error
