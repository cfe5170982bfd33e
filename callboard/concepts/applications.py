"""Applications to opportunities.

Two parties may move an application: the applicant can only withdraw it and
the opportunity owner can only audition, approve or reject it.
"""

from uuid import UUID

from sqlalchemy import select

from callboard.concepts.application_state import (
    APPROVED,
    AUDITION,
    OWNER_STATUSES,
    PENDING,
    WITHDRAWN,
    validate_transition,
)
from callboard.concepts.base import BaseConcept, id_strings
from callboard.exceptions import (
    ApplicationAccessError,
    ApplicationNotFoundError,
    DuplicateApplicationError,
    NotApplicationOwnerError,
    NotApplierError,
    SelfApplicationError,
)
from callboard.logging_config import get_logger
from callboard.models import Application

logger = get_logger(__name__)


class ApplicationConcept(BaseConcept):
    """Handles applications and their status changes."""

    async def create(
        self,
        owner: UUID,
        applicant: UUID,
        text: str,
        media: list[UUID],
        opportunity: UUID,
    ) -> Application:
        if owner == applicant:
            raise SelfApplicationError()
        existing = await self._first(
            select(Application.id).where(
                Application.applicant == applicant,
                Application.opportunity == opportunity,
                Application.status != WITHDRAWN,
            )
        )
        if existing is not None:
            raise DuplicateApplicationError(applicant, opportunity)

        application = await self._create(
            Application,
            owner=owner,
            applicant=applicant,
            status=PENDING,
            text=text,
            media=id_strings(media),
            opportunity=opportunity,
        )
        logger.info(
            "application_created",
            applicant=str(applicant),
            opportunity=str(opportunity),
            application=str(application.id),
        )
        return application

    async def get_apps_for_op(
        self, user: UUID, opportunity: UUID, opportunity_owner: UUID
    ) -> list[Application]:
        """Applications to an opportunity, visible to its owner only. Withdrawn ones are hidden."""
        if user != opportunity_owner:
            raise ApplicationAccessError(
                "Not owner of opportunity so can't access this information"
            )
        return await self._all(
            select(Application)
            .where(Application.opportunity == opportunity, Application.status != WITHDRAWN)
            .order_by(Application.created_at)
        )

    async def get_apps_for_user(self, user: UUID) -> list[Application]:
        return await self._all(
            select(Application)
            .where(Application.applicant == user)
            .order_by(Application.created_at.desc())
        )

    async def get_app_by_id(self, application_id: UUID, user: UUID) -> Application:
        application = await self._get(application_id)
        if user not in (application.owner, application.applicant):
            raise ApplicationAccessError()
        return application

    async def change_status(self, actor: UUID, application_id: UUID, new_status: str) -> Application:
        application = await self._get(application_id)
        if new_status == WITHDRAWN and actor != application.applicant:
            raise NotApplierError(actor)
        if new_status in OWNER_STATUSES and actor != application.owner:
            raise NotApplicationOwnerError(actor, new_status)
        validate_transition(application.status, new_status)

        previous = application.status
        application.status = new_status
        await self.session.flush()
        logger.info(
            "application_status_changed",
            application=str(application_id),
            previous=previous,
            status=new_status,
        )
        return application

    async def withdraw_user(self, user: UUID) -> list[UUID]:
        """Withdraw every live application of ``user``, approved ones included."""
        applications = await self._all(
            select(Application).where(
                Application.applicant == user,
                Application.status.in_([PENDING, AUDITION, APPROVED]),
            )
        )
        for application in applications:
            application.status = WITHDRAWN
        await self.session.flush()
        logger.info("applications_withdrawn_for_user", user=str(user), count=len(applications))
        return [a.id for a in applications]

    async def get_auditioning_applicants(self, opportunity: UUID) -> list[UUID]:
        """Applicants currently invited to audition, oldest application first."""
        result = await self.session.execute(
            select(Application.applicant)
            .where(Application.opportunity == opportunity, Application.status == AUDITION)
            .order_by(Application.created_at)
        )
        return list(result.scalars().all())

    async def _get(self, application_id: UUID) -> Application:
        application = await self.session.get(Application, application_id)
        if application is None:
            raise ApplicationNotFoundError(application_id)
        return application
