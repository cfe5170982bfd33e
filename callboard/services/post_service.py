"""Post lifecycle across concepts: creation with media, and the deletion cascade."""

from uuid import UUID

from callboard.concepts import Concepts
from callboard.concepts.base import to_uuids
from callboard.logging_config import get_logger
from callboard.models import FocusedPost

logger = get_logger(__name__)


async def create_post(
    concepts: Concepts,
    author: UUID,
    content: str,
    media_urls: list[str],
    category: UUID,
) -> FocusedPost:
    """Store the media links, create the post and reward its author."""
    media = await concepts.media.create_many(author, media_urls)
    post = await concepts.posts.create(author, content, media, category)
    await concepts.applause.award("post_created", author)
    return post


async def remove_comment_thread(concepts: Concepts, parent: UUID) -> int:
    """Delete every comment under ``parent``, replies included. Each author loses the comment reward."""
    removed = 0
    pending = [parent]
    while pending:
        comments = await concepts.comments.delete_by_parent(pending.pop())
        for comment in comments:
            await concepts.applause.award("comment_deleted", comment.author)
            pending.append(comment.id)
        removed += len(comments)
    return removed


async def _detach(concepts: Concepts, post_id: UUID) -> int:
    """Remove the tags (with their applause), votes and comments of a post."""
    for tag in await concepts.tags.delete_post(post_id):
        await concepts.applause.award("tag_deleted", tag.tagged)
    await concepts.votes.delete_parent(post_id)
    return await remove_comment_thread(concepts, post_id)


async def delete_post(concepts: Concepts, post_id: UUID, user: UUID) -> FocusedPost:
    """
    Delete a post written by ``user``.

    Order: author check, tags (-2 to each tagged user), votes, comments, the
    post itself, its media, then -3 to the author.
    """
    await concepts.posts.get_and_verify(post_id, user)
    comments = await _detach(concepts, post_id)

    deleted = await concepts.posts.delete(post_id, user)
    await concepts.media.delete_many(to_uuids(deleted.media))
    await concepts.applause.award("post_deleted", deleted.author)

    logger.info("post_cascade_complete", post=str(post_id), comments=comments)
    return deleted


async def delete_category(concepts: Concepts, category_id: UUID) -> list[UUID]:
    """Delete a category and clean up after each post filed under it."""
    posts = await concepts.posts.delete_category(category_id)
    for post in posts:
        await _detach(concepts, post.id)
        await concepts.media.delete_many(to_uuids(post.media))
        await concepts.applause.award("post_deleted", post.author)
    return [p.id for p in posts]
