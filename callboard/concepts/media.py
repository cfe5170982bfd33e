"""Media concept: Google Drive links owned by a user."""

from uuid import UUID

from sqlalchemy import delete, select

from callboard.concepts.base import BaseConcept
from callboard.exceptions import EmptyMediaUrlError, InvalidMediaLinkError, MediaNotFoundError
from callboard.logging_config import get_logger
from callboard.models import Media

logger = get_logger(__name__)

DRIVE_HOST = "drive.google.com"

# Share-link path endings rewritten to the embeddable preview form, longest first.
_PREVIEW_SUFFIXES = ("/view?usp=share_link", "/view?usp=sharing", "/view")


def normalize_drive_url(url: str) -> str:
    if not url:
        raise EmptyMediaUrlError()
    if DRIVE_HOST not in url:
        raise InvalidMediaLinkError(url)
    for suffix in _PREVIEW_SUFFIXES:
        if url.endswith(suffix):
            return url[: -len(suffix)] + "/preview"
    return url


class MediaConcept(BaseConcept):
    """Handles stored media links."""

    async def create(self, user: UUID, url: str) -> Media:
        media = await self._create(Media, user=user, url=normalize_drive_url(url))
        logger.info("media_created", user=str(user), media=str(media.id))
        return media

    async def create_many(self, user: UUID, urls: list[str]) -> list[UUID]:
        return [(await self.create(user, url)).id for url in urls]

    async def get(self, media_id: UUID) -> Media:
        media = await self.session.get(Media, media_id)
        if media is None:
            raise MediaNotFoundError(media_id)
        return media

    async def ids_to_urls(self, ids: list[UUID]) -> list[str]:
        """URLs in input order. Fails on the first id with no media."""
        if not ids:
            return []
        rows = await self._all(select(Media).where(Media.id.in_(set(ids))))
        urls = {row.id: row.url for row in rows}
        for media_id in ids:
            if media_id not in urls:
                raise MediaNotFoundError(media_id)
        return [urls[i] for i in ids]

    async def delete(self, media_id: UUID) -> None:
        await self.session.execute(delete(Media).where(Media.id == media_id))
        await self.session.flush()
        logger.info("media_deleted", media=str(media_id))

    async def delete_many(self, ids: list[UUID]) -> None:
        if not ids:
            return
        await self.session.execute(delete(Media).where(Media.id.in_(set(ids))))
        await self.session.flush()
        logger.info("media_deleted", count=len(ids))

    async def delete_user(self, user: UUID) -> None:
        await self.session.execute(delete(Media).where(Media.user == user))
        await self.session.flush()
        logger.info("media_deleted_for_user", user=str(user))
