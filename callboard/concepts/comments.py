"""Comments on posts or on other comments."""

from uuid import UUID

from sqlalchemy import select

from callboard.concepts.base import BaseConcept
from callboard.exceptions import CommentAuthorNotMatchError, CommentNotFoundError, EmptyCommentError
from callboard.logging_config import get_logger
from callboard.models import Comment

logger = get_logger(__name__)


class CommentConcept(BaseConcept):

    async def create(self, author: UUID, content: str, parent: UUID) -> Comment:
        if not content:
            raise EmptyCommentError()
        comment = await self._create(Comment, author=author, content=content, parent=parent)
        logger.info("comment_created", author=str(author), parent=str(parent))
        return comment

    async def get_by_parent(self, parent: UUID) -> list[Comment]:
        return await self._all(
            select(Comment).where(Comment.parent == parent).order_by(Comment.created_at)
        )

    async def get(self, comment_id: UUID) -> Comment:
        comment = await self.session.get(Comment, comment_id)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        return comment

    async def exists(self, comment_id: UUID) -> bool:
        return await self._first(select(Comment.id).where(Comment.id == comment_id)) is not None

    async def update(self, comment_id: UUID, user: UUID, content: str) -> Comment:
        comment = await self._verify_author(comment_id, user)
        if not content:
            raise EmptyCommentError()
        comment.content = content
        await self.session.flush()
        logger.info("comment_updated", comment=str(comment_id))
        return comment

    async def delete(self, comment_id: UUID, user: UUID) -> Comment:
        comment = await self._verify_author(comment_id, user)
        await self._delete(comment)
        logger.info("comment_deleted", comment=str(comment_id))
        return comment

    async def delete_by_parent(self, parent: UUID) -> list[Comment]:
        comments = await self.get_by_parent(parent)
        for comment in comments:
            await self.session.delete(comment)
        await self.session.flush()
        return comments

    async def delete_user(self, user: UUID) -> list[Comment]:
        comments = await self._all(select(Comment).where(Comment.author == user))
        for comment in comments:
            await self.session.delete(comment)
        await self.session.flush()
        logger.info("comments_deleted_for_user", user=str(user), count=len(comments))
        return comments

    async def _verify_author(self, comment_id: UUID, user: UUID) -> Comment:
        comment = await self.get(comment_id)
        if comment.author != user:
            raise CommentAuthorNotMatchError(user, comment_id)
        return comment
