"""Audition queues: a fixed order of applicants seen one at a time."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import delete, select

from callboard.concepts.base import BaseConcept, id_strings, to_uuids
from callboard.exceptions import (
    DuplicateQueueError,
    InvalidQueueTimingError,
    NotInQueueError,
    NotQueueManagerError,
    QueueExhaustedError,
    QueueNotFoundError,
)
from callboard.logging_config import get_logger
from callboard.models import Queue

logger = get_logger(__name__)


class QueueConcept(BaseConcept):
    """
    Handles queues, one per opportunity.

    The order is decided by the caller; a queue only stores and walks it.
    ``current_position`` counts the applicants already called, so it starts
    at 0 and never passes ``total_queued``.
    """

    async def create(
        self,
        manager: UUID,
        opportunity: UUID,
        ordered_applicants: list[UUID],
        start_time: datetime,
        minutes_per_person: int,
    ) -> Queue:
        if minutes_per_person <= 0:
            raise InvalidQueueTimingError(minutes_per_person)
        if await self._find(opportunity) is not None:
            raise DuplicateQueueError(opportunity)
        if start_time.tzinfo is None:
            start_time = start_time.replace(tzinfo=timezone.utc)

        queue = await self._create(
            Queue,
            manager=manager,
            opportunity=opportunity,
            applicants=id_strings(ordered_applicants),
            start_time=start_time,
            minutes_per_person=minutes_per_person,
            current_position=0,
            total_queued=len(ordered_applicants),
        )
        logger.info(
            "queue_created",
            manager=str(manager),
            opportunity=str(opportunity),
            total_queued=queue.total_queued,
        )
        return queue

    async def get(self, opportunity: UUID) -> Queue:
        queue = await self._find(opportunity)
        if queue is None:
            raise QueueNotFoundError(opportunity)
        return queue

    async def get_by_manager(self, manager: UUID) -> list[Queue]:
        return await self._all(
            select(Queue).where(Queue.manager == manager).order_by(Queue.start_time)
        )

    async def get_estimated_time(self, opportunity: UUID, user: UUID) -> datetime:
        """``start_time + k * minutes_per_person`` for the applicant at 1-based index k."""
        queue = await self.get(opportunity)
        applicants = to_uuids(queue.applicants)
        if user not in applicants:
            raise NotInQueueError(user, opportunity)
        k = applicants.index(user) + 1
        return queue.start_time + timedelta(minutes=k * queue.minutes_per_person)

    async def progress_queue(
        self, manager: UUID, opportunity: UUID
    ) -> tuple[UUID, UUID | None, int]:
        """
        Call the next applicant.

        Returns the applicant now being seen, the one after them (or None)
        and the new position.
        """
        queue = await self._first(
            select(Queue).where(Queue.opportunity == opportunity).with_for_update()
        )
        if queue is None:
            raise QueueNotFoundError(opportunity)
        if queue.manager != manager:
            raise NotQueueManagerError(manager, opportunity)

        position = queue.current_position + 1
        if position > queue.total_queued:
            raise QueueExhaustedError(opportunity)

        applicants = to_uuids(queue.applicants)
        queue.current_position = position
        await self.session.flush()

        current = applicants[position - 1]
        following = applicants[position] if position < len(applicants) else None
        logger.info("queue_progressed", opportunity=str(opportunity), position=position)
        return current, following, position

    async def delete(self, manager: UUID, opportunity: UUID) -> None:
        queue = await self.get(opportunity)
        if queue.manager != manager:
            raise NotQueueManagerError(manager, opportunity)
        await self._delete(queue)
        logger.info("queue_deleted", opportunity=str(opportunity))

    async def delete_all_manager_queues(self, manager: UUID) -> None:
        await self.session.execute(delete(Queue).where(Queue.manager == manager))
        await self.session.flush()
        logger.info("queues_deleted_for_manager", manager=str(manager))

    async def delete_for_opportunity(self, opportunity: UUID) -> None:
        await self.session.execute(delete(Queue).where(Queue.opportunity == opportunity))
        await self.session.flush()

    async def _find(self, opportunity: UUID) -> Queue | None:
        return await self._first(select(Queue).where(Queue.opportunity == opportunity))
