"""Unit tests for applications and their two-party status changes."""

from uuid import uuid4

import pytest

from callboard.exceptions import (
    ApplicationAccessError,
    ApplicationNotFoundError,
    DuplicateApplicationError,
    InvalidStatusTransitionError,
    NotApplicationOwnerError,
    NotApplierError,
    SelfApplicationError,
)


@pytest.fixture
def parties():
    """(opportunity owner, applicant, opportunity id)."""
    return uuid4(), uuid4(), uuid4()


async def _apply(concepts, owner, applicant, opportunity, text="Pick me"):
    return await concepts.applications.create(owner, applicant, text, [], opportunity)


class TestCreation:
    @pytest.mark.asyncio
    async def test_create_pending(self, concepts, parties):
        application = await _apply(concepts, *parties)
        assert application.status == "pending"

    @pytest.mark.asyncio
    async def test_self_application(self, concepts):
        owner = uuid4()
        with pytest.raises(SelfApplicationError):
            await _apply(concepts, owner, owner, uuid4())

    @pytest.mark.asyncio
    async def test_duplicate_live_application(self, concepts, parties):
        await _apply(concepts, *parties)
        with pytest.raises(DuplicateApplicationError):
            await _apply(concepts, *parties)

    @pytest.mark.asyncio
    async def test_reapply_after_withdrawing(self, concepts, parties):
        owner, applicant, opportunity = parties
        first = await _apply(concepts, *parties)
        await concepts.applications.change_status(applicant, first.id, "withdrawn")
        second = await _apply(concepts, *parties)
        assert second.id != first.id


class TestStatusChanges:
    @pytest.mark.asyncio
    async def test_applicant_withdraws(self, concepts, parties):
        owner, applicant, _ = parties
        application = await _apply(concepts, *parties)
        updated = await concepts.applications.change_status(applicant, application.id, "withdrawn")
        assert updated.status == "withdrawn"

    @pytest.mark.asyncio
    async def test_owner_cannot_withdraw(self, concepts, parties):
        owner, _, _ = parties
        application = await _apply(concepts, *parties)
        with pytest.raises(NotApplierError):
            await concepts.applications.change_status(owner, application.id, "withdrawn")

    @pytest.mark.asyncio
    async def test_applicant_cannot_approve(self, concepts, parties):
        _, applicant, _ = parties
        application = await _apply(concepts, *parties)
        for status in ["approved", "audition", "rejected"]:
            with pytest.raises(NotApplicationOwnerError):
                await concepts.applications.change_status(applicant, application.id, status)

    @pytest.mark.asyncio
    async def test_owner_moves_through_audition(self, concepts, parties):
        owner, _, _ = parties
        application = await _apply(concepts, *parties)
        await concepts.applications.change_status(owner, application.id, "audition")
        approved = await concepts.applications.change_status(owner, application.id, "approved")
        assert approved.status == "approved"

    @pytest.mark.asyncio
    async def test_terminal_status_is_final(self, concepts, parties):
        owner, _, _ = parties
        application = await _apply(concepts, *parties)
        await concepts.applications.change_status(owner, application.id, "rejected")
        with pytest.raises(InvalidStatusTransitionError):
            await concepts.applications.change_status(owner, application.id, "approved")

    @pytest.mark.asyncio
    async def test_missing_application(self, concepts):
        with pytest.raises(ApplicationNotFoundError):
            await concepts.applications.change_status(uuid4(), uuid4(), "approved")


class TestVisibility:
    @pytest.mark.asyncio
    async def test_owner_sees_live_applications(self, concepts, parties):
        owner, applicant, opportunity = parties
        live = await _apply(concepts, *parties)
        gone = await _apply(concepts, owner, uuid4(), opportunity)
        await concepts.applications.change_status(gone.applicant, gone.id, "withdrawn")

        visible = await concepts.applications.get_apps_for_op(owner, opportunity, owner)
        assert [a.id for a in visible] == [live.id]

    @pytest.mark.asyncio
    async def test_non_owner_cannot_list(self, concepts, parties):
        owner, applicant, opportunity = parties
        with pytest.raises(ApplicationAccessError):
            await concepts.applications.get_apps_for_op(applicant, opportunity, owner)

    @pytest.mark.asyncio
    async def test_get_by_id_for_parties_only(self, concepts, parties):
        owner, applicant, _ = parties
        application = await _apply(concepts, *parties)
        assert (await concepts.applications.get_app_by_id(application.id, owner)).id == application.id
        assert (await concepts.applications.get_app_by_id(application.id, applicant)).id == application.id
        with pytest.raises(ApplicationAccessError):
            await concepts.applications.get_app_by_id(application.id, uuid4())

    @pytest.mark.asyncio
    async def test_auditioning_applicants(self, concepts, parties):
        owner, applicant, opportunity = parties
        chosen = await _apply(concepts, *parties)
        await _apply(concepts, owner, uuid4(), opportunity)
        await concepts.applications.change_status(owner, chosen.id, "audition")
        assert await concepts.applications.get_auditioning_applicants(opportunity) == [applicant]


class TestWithdrawUser:
    @pytest.mark.asyncio
    async def test_withdraws_live_applications(self, concepts):
        applicant = uuid4()
        owner = uuid4()
        pending = await _apply(concepts, owner, applicant, uuid4())
        approved = await _apply(concepts, owner, applicant, uuid4())
        rejected = await _apply(concepts, owner, applicant, uuid4())
        await concepts.applications.change_status(owner, approved.id, "approved")
        await concepts.applications.change_status(owner, rejected.id, "rejected")

        withdrawn = await concepts.applications.withdraw_user(applicant)
        assert set(withdrawn) == {pending.id, approved.id}
        assert rejected.status == "rejected"
