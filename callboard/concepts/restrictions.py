"""Restrictions concept: per-user role flags and the role gate."""

from uuid import UUID

from sqlalchemy import select

from callboard.concepts.base import BaseConcept
from callboard.exceptions import (
    MissingRoleError,
    NoRestrictionsError,
    NotLoggedInError,
    RestrictionsExistError,
)
from callboard.logging_config import get_logger
from callboard.models import Restriction

logger = get_logger(__name__)

ACTOR = "actor"
CASTING_DIRECTOR = "casting director"
ADMIN = "admin"

ROLE_FLAGS = {
    ACTOR: "actor",
    CASTING_DIRECTOR: "casting_director",
    ADMIN: "admin",
}


def flags_from_account_types(account_types: list[str]) -> dict[str, bool]:
    """Unrecognized role names are ignored."""
    return {flag: name in account_types for name, flag in ROLE_FLAGS.items()}


class RestrictionsConcept(BaseConcept):
    """Handles which kinds of pages a user may act on."""

    async def create(self, user: UUID, account_types: list[str]) -> Restriction:
        if await self._find(user) is not None:
            raise RestrictionsExistError(user)
        restriction = await self._create(
            Restriction, user=user, **flags_from_account_types(account_types)
        )
        logger.info("restrictions_created", user=str(user), account_types=account_types)
        return restriction

    async def edit(self, user: UUID, account_types: list[str]) -> Restriction:
        restriction = await self._get(user)
        for flag, value in flags_from_account_types(account_types).items():
            setattr(restriction, flag, value)
        await self.session.flush()
        logger.info("restrictions_edited", user=str(user), account_types=account_types)
        return restriction

    async def delete(self, user: UUID) -> None:
        await self._delete(await self._get(user))
        logger.info("restrictions_deleted", user=str(user))

    async def is_actor(self, user: UUID) -> bool:
        return (await self._get(user)).actor

    async def is_casting_director(self, user: UUID) -> bool:
        return (await self._get(user)).casting_director

    async def is_admin(self, user: UUID) -> bool:
        return (await self._get(user)).admin

    async def any_admins(self) -> bool:
        return await self._first(select(Restriction.id).where(Restriction.admin.is_(True))) is not None

    async def get_account_types(self, user: UUID) -> list[str]:
        restriction = await self._get(user)
        return [name for name, flag in ROLE_FLAGS.items() if getattr(restriction, flag)]

    @staticmethod
    def check(flag: bool | None, type_name: str) -> None:
        """
        Gate used by routes before a role-restricted action.

        ``None`` means there is no session to look the flag up for.
        """
        if flag is None:
            raise NotLoggedInError()
        if not flag:
            raise MissingRoleError(type_name)

    async def _find(self, user: UUID) -> Restriction | None:
        return await self._first(select(Restriction).where(Restriction.user == user))

    async def _get(self, user: UUID) -> Restriction:
        restriction = await self._find(user)
        if restriction is None:
            raise NoRestrictionsError(user)
        return restriction
