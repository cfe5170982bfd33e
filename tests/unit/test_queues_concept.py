"""Unit tests for audition queues."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from callboard.exceptions import (
    DuplicateQueueError,
    InvalidQueueTimingError,
    NotAllowedError,
    NotInQueueError,
    NotQueueManagerError,
    QueueExhaustedError,
    QueueNotFoundError,
)

START = datetime(2026, 7, 1, 9, 0, tzinfo=timezone.utc)


async def _queue(concepts, applicants, manager=None, opportunity=None, minutes=15):
    return await concepts.queues.create(
        manager or uuid4(), opportunity or uuid4(), applicants, START, minutes
    )


class TestQueueCreation:
    @pytest.mark.asyncio
    async def test_starts_at_zero(self, concepts):
        queue = await _queue(concepts, [uuid4(), uuid4()])
        assert queue.current_position == 0
        assert queue.total_queued == 2

    @pytest.mark.asyncio
    async def test_one_queue_per_opportunity(self, concepts):
        opportunity = uuid4()
        await _queue(concepts, [uuid4()], opportunity=opportunity)
        with pytest.raises(DuplicateQueueError):
            await _queue(concepts, [uuid4()], opportunity=opportunity)

    @pytest.mark.asyncio
    async def test_non_positive_duration(self, concepts):
        with pytest.raises(InvalidQueueTimingError):
            await _queue(concepts, [uuid4()], minutes=0)

    @pytest.mark.asyncio
    async def test_get_missing(self, concepts):
        with pytest.raises(QueueNotFoundError):
            await concepts.queues.get(uuid4())


class TestQueueProgression:
    @pytest.mark.asyncio
    async def test_walks_in_order_then_exhausts(self, concepts):
        manager, opportunity = uuid4(), uuid4()
        applicants = [uuid4(), uuid4(), uuid4()]
        await _queue(concepts, applicants, manager=manager, opportunity=opportunity)

        seen = []
        for expected_position in range(1, len(applicants) + 1):
            current, following, position = await concepts.queues.progress_queue(
                manager, opportunity
            )
            assert position == expected_position
            seen.append(current)
            if position < len(applicants):
                assert following == applicants[position]
            else:
                assert following is None
        assert seen == applicants

        with pytest.raises(QueueExhaustedError):
            await concepts.queues.progress_queue(manager, opportunity)

    @pytest.mark.asyncio
    async def test_exhausted_is_not_allowed_kind(self, concepts):
        manager, opportunity = uuid4(), uuid4()
        await _queue(concepts, [], manager=manager, opportunity=opportunity)
        with pytest.raises(NotAllowedError):
            await concepts.queues.progress_queue(manager, opportunity)

    @pytest.mark.asyncio
    async def test_only_manager_progresses(self, concepts):
        opportunity = uuid4()
        await _queue(concepts, [uuid4()], opportunity=opportunity)
        with pytest.raises(NotQueueManagerError):
            await concepts.queues.progress_queue(uuid4(), opportunity)


class TestEstimatedTime:
    @pytest.mark.asyncio
    async def test_one_based_slots(self, concepts):
        opportunity = uuid4()
        applicants = [uuid4(), uuid4(), uuid4()]
        await _queue(concepts, applicants, opportunity=opportunity, minutes=20)
        for k, applicant in enumerate(applicants, start=1):
            estimate = await concepts.queues.get_estimated_time(opportunity, applicant)
            assert estimate == START + timedelta(minutes=20 * k)

    @pytest.mark.asyncio
    async def test_not_in_queue(self, concepts):
        opportunity = uuid4()
        await _queue(concepts, [uuid4()], opportunity=opportunity)
        with pytest.raises(NotInQueueError):
            await concepts.queues.get_estimated_time(opportunity, uuid4())


class TestQueueDeletion:
    @pytest.mark.asyncio
    async def test_delete_by_manager(self, concepts):
        manager, opportunity = uuid4(), uuid4()
        await _queue(concepts, [uuid4()], manager=manager, opportunity=opportunity)
        with pytest.raises(NotQueueManagerError):
            await concepts.queues.delete(uuid4(), opportunity)
        await concepts.queues.delete(manager, opportunity)
        with pytest.raises(QueueNotFoundError):
            await concepts.queues.get(opportunity)

    @pytest.mark.asyncio
    async def test_delete_all_manager_queues(self, concepts):
        manager = uuid4()
        await _queue(concepts, [uuid4()], manager=manager)
        await _queue(concepts, [uuid4()], manager=manager)
        kept = await _queue(concepts, [uuid4()])
        await concepts.queues.delete_all_manager_queues(manager)
        assert await concepts.queues.get_by_manager(manager) == []
        assert (await concepts.queues.get(kept.opportunity)).id == kept.id
