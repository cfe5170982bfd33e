"""Tags: one user marking another on a post."""

from uuid import UUID

from sqlalchemy import or_, select

from callboard.concepts.base import BaseConcept
from callboard.exceptions import DuplicateTagError, TaggerNotMatchError, TagNotFoundError
from callboard.logging_config import get_logger
from callboard.models import Tag

logger = get_logger(__name__)


class TagConcept(BaseConcept):
    """Handles tags. A user can be tagged on a given post only once."""

    async def create(self, tagger: UUID, tagged: UUID, post: UUID) -> Tag:
        if await self._find(tagged, post) is not None:
            raise DuplicateTagError(tagged, post)
        tag = await self._create(Tag, tagger=tagger, tagged=tagged, post=post)
        logger.info("tag_created", tagger=str(tagger), tagged=str(tagged), post=str(post))
        return tag

    async def get_by_post(self, post: UUID) -> list[Tag]:
        return await self._all(
            select(Tag).where(Tag.post == post).order_by(Tag.updated_at.desc())
        )

    async def get_by_tagged(self, tagged: UUID) -> list[Tag]:
        return await self._all(
            select(Tag).where(Tag.tagged == tagged).order_by(Tag.updated_at.desc())
        )

    async def delete_tag(self, user: UUID, tagged: UUID, post: UUID) -> Tag:
        """Remove the tag of ``tagged`` on ``post``; only its tagger may."""
        tag = await self._find(tagged, post)
        if tag is None:
            raise TagNotFoundError(tagged, post)
        if tag.tagger != user:
            raise TaggerNotMatchError(user, tag.id)
        await self._delete(tag)
        logger.info("tag_deleted", tagger=str(user), tagged=str(tagged), post=str(post))
        return tag

    async def delete_post(self, post: UUID) -> list[Tag]:
        return await self._delete_where(Tag.post == post)

    async def delete_user(self, user: UUID) -> list[Tag]:
        """Remove every tag where ``user`` is the tagger or the tagged."""
        return await self._delete_where(or_(Tag.tagger == user, Tag.tagged == user))

    async def _find(self, tagged: UUID, post: UUID) -> Tag | None:
        return await self._first(select(Tag).where(Tag.tagged == tagged, Tag.post == post))

    async def _delete_where(self, condition) -> list[Tag]:
        tags = await self._all(select(Tag).where(condition))
        for tag in tags:
            await self.session.delete(tag)
        await self.session.flush()
        if tags:
            logger.info("tags_deleted", count=len(tags))
        return tags
