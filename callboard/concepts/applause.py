"""Applause concept: a running reputation score per user."""

from typing import Any
from uuid import UUID

from sqlalchemy import select

from callboard.concepts.base import BaseConcept
from callboard.exceptions import ApplauseExistsError, NoApplauseCounterError
from callboard.logging_config import get_logger
from callboard.models import Applause

logger = get_logger(__name__)

# Adjustments applied by the routes as a consequence of other concepts' actions.
APPLAUSE_DELTAS: dict[str, float] = {
    "post_created": 3,
    "post_deleted": -3,
    "comment_created": 1,
    "comment_deleted": -1,
    "tag_created": 2,
    "tag_deleted": -2,
    "connection_accepted": 1,
    "connection_removed": -1,
    "vote": 0.5,
    "application_submitted": 1,
    "application_withdrawn": -2,
    "challenge_accepted": 1,
}


class ApplauseConcept(BaseConcept):
    """Handles applause counters."""

    async def initialize(self, user: UUID) -> Applause:
        if await self._find(user) is not None:
            raise ApplauseExistsError(user)
        applause = await self._create(Applause, user=user, value=0.0)
        logger.info("applause_initialized", user=str(user))
        return applause

    async def get_value(self, user: UUID) -> float:
        return (await self._get(user)).value

    async def update(self, user: UUID, delta: float, reason: str | None = None) -> float:
        """Add ``delta`` (fractional or negative) and return the new value."""
        applause = await self._get(user)
        applause.value = float(applause.value) + float(delta)
        await self.session.flush()
        logger.info(
            "applause_updated",
            user=str(user),
            delta=delta,
            value=applause.value,
            reason=reason,
        )
        return applause.value

    async def award(self, event: str, *users: UUID, sign: int = 1) -> None:
        """Apply the delta registered for ``event`` to every user given."""
        delta = APPLAUSE_DELTAS[event] * sign
        for user in users:
            await self.update(user, delta, reason=event)

    async def rank(self, users: list[UUID]) -> list[dict[str, Any]]:
        """
        Counters of ``users`` sorted by value, highest first.

        Ties keep the input order. Fails if any user has no counter.
        """
        rows = await self._all(select(Applause).where(Applause.user.in_(set(users))))
        by_user = {row.user: row for row in rows}
        counters = []
        for user in users:
            if user not in by_user:
                raise NoApplauseCounterError(user)
            counters.append({"user": user, "value": by_user[user].value})
        return sorted(counters, key=lambda c: c["value"], reverse=True)

    async def delete(self, user: UUID) -> None:
        applause = await self._get(user)
        await self._delete(applause)
        logger.info("applause_deleted", user=str(user))

    async def _find(self, user: UUID) -> Applause | None:
        return await self._first(select(Applause).where(Applause.user == user))

    async def _get(self, user: UUID) -> Applause:
        applause = await self._find(user)
        if applause is None:
            raise NoApplauseCounterError(user)
        return applause
