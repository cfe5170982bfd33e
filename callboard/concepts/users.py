"""Users concept: accounts, credentials and profile fields."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select

from callboard.auth import hash_password, verify_password
from callboard.concepts.base import BaseConcept
from callboard.exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    MissingCredentialsError,
    UserNotFoundError,
)
from callboard.logging_config import get_logger
from callboard.models import User
from callboard.schemas import UserUpdate

logger = get_logger(__name__)

DELETED_USER = "DELETED_USER"


def sanitize_user(user: User) -> dict[str, Any]:
    """Public view of a user row (never includes the password hash)."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "profile_pic": user.profile_pic,
        "birthday": user.birthday,
        "city": user.city,
        "state": user.state,
        "country": user.country,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


class UsersConcept(BaseConcept):
    """Handles accounts and the credential check."""

    async def create(
        self,
        email: str,
        password: str,
        name: str,
        birthday: datetime | None = None,
        city: str = "",
        state: str = "",
        country: str = "",
        profile_pic: UUID | None = None,
    ) -> dict[str, Any]:
        """Create a user after checking the credentials are usable."""
        if not email or not password:
            raise MissingCredentialsError()
        await self._ensure_email_unique(email)

        user = await self._create(
            User,
            email=email,
            password_hash=hash_password(password),
            name=name,
            birthday=birthday,
            city=city,
            state=state,
            country=country,
            profile_pic=profile_pic,
        )
        logger.info("user_created", user_id=str(user.id))
        return sanitize_user(user)

    async def authenticate(self, email: str, password: str) -> UUID:
        """Return the id of the user owning these credentials."""
        user = await self._first(select(User).where(User.email == email))
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return user.id

    async def get_by_id(self, user_id: UUID) -> dict[str, Any]:
        return sanitize_user(await self._get(user_id))

    async def get_by_email(self, email: str) -> dict[str, Any]:
        user = await self._first(select(User).where(User.email == email))
        if user is None:
            raise UserNotFoundError(email)
        return sanitize_user(user)

    async def get_users(self, name: str | None = None) -> list[dict[str, Any]]:
        """All users, or only those with exactly this name."""
        query = select(User).order_by(User.created_at)
        if name:
            query = query.where(User.name == name)
        return [sanitize_user(u) for u in await self._all(query)]

    async def exists(self, user_id: UUID) -> bool:
        return await self._first(select(User.id).where(User.id == user_id)) is not None

    async def ids_to_names(self, ids: list[UUID]) -> list[str]:
        """Names in input order; ids with no user map to DELETED_USER."""
        if not ids:
            return []
        rows = await self.session.execute(
            select(User.id, User.name).where(User.id.in_(set(ids)))
        )
        names = {row.id: row.name for row in rows}
        return [names.get(i, DELETED_USER) for i in ids]

    async def update(self, user_id: UUID, update: UserUpdate) -> dict[str, Any]:
        user = await self._get(user_id)
        changes = update.changes()

        if changes.get("email") and changes["email"] != user.email:
            await self._ensure_email_unique(changes["email"])
        elif "email" in changes and not changes["email"]:
            raise MissingCredentialsError()

        if "password" in changes:
            if not changes["password"]:
                raise MissingCredentialsError()
            user.password_hash = hash_password(changes.pop("password"))

        for field, value in changes.items():
            if value is None and field != "birthday":
                continue
            setattr(user, field, value)

        await self.session.flush()
        logger.info("user_updated", user_id=str(user_id), fields=sorted(update.changes()))
        return sanitize_user(user)

    async def update_profile_pic(self, user_id: UUID, media: UUID | None) -> UUID | None:
        """Swap the profile picture, returning the previous media id."""
        user = await self._get(user_id)
        previous = user.profile_pic
        user.profile_pic = media
        await self.session.flush()
        return previous

    async def delete(self, user_id: UUID) -> None:
        user = await self._get(user_id)
        await self._delete(user)
        logger.info("user_deleted", user_id=str(user_id))

    async def _get(self, user_id: UUID) -> User:
        user = await self.session.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _ensure_email_unique(self, email: str) -> None:
        if await self._first(select(User.id).where(User.email == email)) is not None:
            raise EmailTakenError(email)
