"""Focused posts and the categories they are filed under."""

from uuid import UUID

from sqlalchemy import select

from callboard.concepts.base import BaseConcept, id_strings, to_uuids
from callboard.exceptions import (
    CategoryExistsError,
    CategoryNotFoundError,
    EmptyPostError,
    InvalidCategoryError,
    PostAuthorNotMatchError,
    PostNotFoundError,
)
from callboard.logging_config import get_logger
from callboard.models import Category, FocusedPost
from callboard.schemas import PostUpdate

logger = get_logger(__name__)


class FocusedPostConcept(BaseConcept):
    """Handles focused posts and categories."""

    # ==========================================
    # POSTS
    # ==========================================

    async def create(
        self, author: UUID, content: str, media: list[UUID], category: UUID
    ) -> FocusedPost:
        await self._verify_category(content, category)
        post = await self._create(
            FocusedPost,
            author=author,
            content=content,
            media=id_strings(media),
            category=category,
        )
        logger.info("post_created", author=str(author), post=str(post.id))
        return post

    async def get_posts(
        self, author: UUID | None = None, category: UUID | None = None
    ) -> list[FocusedPost]:
        """Posts matching the filters, most recently updated first."""
        query = select(FocusedPost).order_by(
            FocusedPost.updated_at.desc(), FocusedPost.created_at.desc()
        )
        if author is not None:
            query = query.where(FocusedPost.author == author)
        if category is not None:
            query = query.where(FocusedPost.category == category)
        return await self._all(query)

    async def get_by_author(self, author: UUID) -> list[FocusedPost]:
        return await self.get_posts(author=author)

    async def get_by_id(self, post_id: UUID) -> FocusedPost:
        post = await self.session.get(FocusedPost, post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    async def exists(self, post_id: UUID) -> bool:
        return await self._first(select(FocusedPost.id).where(FocusedPost.id == post_id)) is not None

    async def get_and_verify(self, post_id: UUID, user: UUID) -> FocusedPost:
        """Fetch a post, failing unless ``user`` wrote it."""
        post = await self.get_by_id(post_id)
        if post.author != user:
            raise PostAuthorNotMatchError(user, post_id)
        return post

    async def get_media(self, post_id: UUID) -> list[UUID]:
        return to_uuids((await self.get_by_id(post_id)).media)

    async def update(self, post_id: UUID, update: PostUpdate, user: UUID) -> FocusedPost:
        post = await self.get_and_verify(post_id, user)
        changes = update.changes()
        content = changes.get("content", post.content)
        category = changes.get("category") or post.category
        await self._verify_category(content, category)

        post.content = content
        post.category = category
        await self.session.flush()
        logger.info("post_updated", post=str(post_id), fields=sorted(changes))
        return post

    async def delete(self, post_id: UUID, user: UUID) -> FocusedPost:
        post = await self.get_and_verify(post_id, user)
        await self._delete(post)
        logger.info("post_deleted", post=str(post_id), author=str(user))
        return post

    async def delete_user(self, author: UUID) -> list[FocusedPost]:
        posts = await self.get_by_author(author)
        for post in posts:
            await self.session.delete(post)
        await self.session.flush()
        logger.info("posts_deleted_for_user", author=str(author), count=len(posts))
        return posts

    # ==========================================
    # CATEGORIES
    # ==========================================

    async def create_category(self, name: str, description: str) -> Category:
        if not (name and description):
            raise InvalidCategoryError()
        if await self._first(select(Category.id).where(Category.name == name)) is not None:
            raise CategoryExistsError(name)
        category = await self._create(Category, name=name, description=description)
        logger.info("category_created", category=str(category.id), name=name)
        return category

    async def get_category(self, category_id: UUID) -> Category:
        category = await self.session.get(Category, category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def get_all_categories(self) -> list[Category]:
        return await self._all(select(Category).order_by(Category.name))

    async def delete_category(self, category_id: UUID) -> list[FocusedPost]:
        """Delete a category together with every post filed under it."""
        category = await self.get_category(category_id)
        posts = await self.get_posts(category=category_id)
        for post in posts:
            await self.session.delete(post)
        await self.session.delete(category)
        await self.session.flush()
        logger.info("category_deleted", category=str(category_id), posts=len(posts))
        return posts

    async def _verify_category(self, content: str, category: UUID | None) -> None:
        if category is None or not content:
            raise EmptyPostError()
        await self.get_category(category)
