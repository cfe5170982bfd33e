"""Casting opportunities and their active/expired lifecycle."""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import select

from callboard.concepts.base import BaseConcept
from callboard.exceptions import (
    DateRangeError,
    MissingOpportunityFieldsError,
    NotOpportunityOwnerError,
    OpportunityNotFoundError,
)
from callboard.logging_config import get_logger
from callboard.models import Opportunity
from callboard.schemas import OpportunityUpdate

logger = get_logger(__name__)

DEFAULT_LIFETIME_DAYS = 14


def check_date_range(start: datetime, end: datetime) -> None:
    if start >= end:
        raise DateRangeError(start, end)


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class OpportunityConcept(BaseConcept):
    """
    Handles opportunities.

    A new or reactivated opportunity expires ``lifetime_days`` after that
    moment. Expiry itself only takes effect when the system sweep runs.
    """

    def __init__(self, session, lifetime_days: int = DEFAULT_LIFETIME_DAYS):
        super().__init__(session)
        self.lifetime = timedelta(days=lifetime_days)

    def _expiry_from_now(self) -> datetime:
        return datetime.now(timezone.utc) + self.lifetime

    async def create(
        self,
        owner: UUID,
        title: str,
        description: str,
        start_on: datetime | None,
        ends_on: datetime | None,
        requirements: dict[str, Any] | None = None,
    ) -> Opportunity:
        if not (title and description and start_on and ends_on):
            raise MissingOpportunityFieldsError()
        start_on, ends_on = _aware(start_on), _aware(ends_on)
        check_date_range(start_on, ends_on)

        opportunity = await self._create(
            Opportunity,
            owner=owner,
            title=title,
            description=description,
            start_on=start_on,
            ends_on=ends_on,
            expires_on=self._expiry_from_now(),
            requirements=requirements or {"physical": [], "skill": [], "location": ""},
            is_active=True,
        )
        logger.info("opportunity_created", owner=str(owner), opportunity=str(opportunity.id))
        return opportunity

    async def get_all(self) -> list[Opportunity]:
        return await self._all(select(Opportunity).order_by(Opportunity.updated_at.desc()))

    async def get_by_id(self, opportunity_id: UUID) -> Opportunity:
        opportunity = await self.session.get(Opportunity, opportunity_id)
        if opportunity is None:
            raise OpportunityNotFoundError(opportunity_id)
        return opportunity

    async def get_by_user(self, user: UUID) -> list[Opportunity]:
        return await self._all(
            select(Opportunity).where(Opportunity.owner == user).order_by(Opportunity.created_at)
        )

    async def get_by_title(self, title: str) -> list[Opportunity]:
        return await self._all(
            select(Opportunity)
            .where(Opportunity.title == title)
            .order_by(Opportunity.updated_at.desc())
        )

    async def dates_in_range(self, opportunity_id: UUID, start: datetime, end: datetime) -> bool:
        """Whether ``[start, end]`` fully contains the opportunity's dates."""
        start, end = _aware(start), _aware(end)
        check_date_range(start, end)
        opportunity = await self.get_by_id(opportunity_id)
        return start <= opportunity.start_on and opportunity.ends_on <= end

    async def update(self, opportunity_id: UUID, user: UUID, update: OpportunityUpdate) -> Opportunity:
        opportunity = await self._get_owned(opportunity_id, user)
        changes = update.changes()

        # A date left out of the update is checked against the stored one.
        start_on = _aware(changes.get("start_on") or opportunity.start_on)
        ends_on = _aware(changes.get("ends_on") or opportunity.ends_on)
        if "start_on" in changes or "ends_on" in changes:
            check_date_range(start_on, ends_on)

        if changes.get("description"):
            opportunity.description = changes["description"]
        opportunity.start_on = start_on
        opportunity.ends_on = ends_on
        if changes.get("requirements") is not None:
            opportunity.requirements = changes["requirements"]

        await self.session.flush()
        logger.info("opportunity_updated", opportunity=str(opportunity_id), fields=sorted(changes))
        return opportunity

    async def deactivate(self, opportunity_id: UUID, user: UUID | None = None) -> bool:
        """
        Deactivate an opportunity.

        With a ``user`` this is the owner closing it, which always succeeds.
        Without one it is the system sweep, which only deactivates an
        opportunity that is still active and past its expiry. Returns whether
        the opportunity was deactivated by this call.
        """
        if user is not None:
            opportunity = await self._get_owned(opportunity_id, user)
            opportunity.is_active = False
            await self.session.flush()
            logger.info("opportunity_deactivated", opportunity=str(opportunity_id), by=str(user))
            return True

        opportunity = await self.get_by_id(opportunity_id)
        if opportunity.is_active and opportunity.expires_on < datetime.now(timezone.utc):
            opportunity.is_active = False
            await self.session.flush()
            logger.info("opportunity_expired", opportunity=str(opportunity_id))
            return True
        return False

    async def reactivate(self, opportunity_id: UUID, user: UUID) -> Opportunity:
        opportunity = await self._get_owned(opportunity_id, user)
        opportunity.is_active = True
        opportunity.expires_on = self._expiry_from_now()
        await self.session.flush()
        logger.info("opportunity_reactivated", opportunity=str(opportunity_id))
        return opportunity

    async def delete(self, opportunity_id: UUID, user: UUID) -> Opportunity:
        opportunity = await self._get_owned(opportunity_id, user)
        await self._delete(opportunity)
        logger.info("opportunity_deleted", opportunity=str(opportunity_id))
        return opportunity

    async def deactivate_user(self, user: UUID) -> list[UUID]:
        opportunities = await self.get_by_user(user)
        for opportunity in opportunities:
            opportunity.is_active = False
        await self.session.flush()
        logger.info("opportunities_deactivated_for_user", user=str(user), count=len(opportunities))
        return [o.id for o in opportunities]

    async def expire_due(self, now: datetime | None = None) -> list[UUID]:
        """Deactivate every active opportunity whose expiry has passed."""
        now = now or datetime.now(timezone.utc)
        due = await self._all(
            select(Opportunity).where(
                Opportunity.is_active.is_(True),
                Opportunity.expires_on < now,
            )
        )
        for opportunity in due:
            opportunity.is_active = False
        await self.session.flush()
        if due:
            logger.info("opportunities_expired", count=len(due))
        return [o.id for o in due]

    async def _get_owned(self, opportunity_id: UUID, user: UUID) -> Opportunity:
        opportunity = await self.get_by_id(opportunity_id)
        if opportunity.owner != user:
            raise NotOpportunityOwnerError(user, opportunity_id)
        return opportunity
