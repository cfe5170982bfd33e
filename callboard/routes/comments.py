"""Comment endpoints. A comment hangs off a post or another comment."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.exceptions import ParentNotFoundError
from callboard.logging_config import get_logger
from callboard.routes.deps import responses
from callboard.schemas import CommentCreateRequest, CommentUpdateRequest
from callboard.services.post_service import remove_comment_thread

logger = get_logger(__name__)
router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("/parent/{parent_id}")
async def list_comments(parent_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).comments(await concepts.comments.get_by_parent(parent_id))


@router.get("/{comment_id}")
async def get_comment(comment_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).comment(await concepts.comments.get(comment_id))


@router.post("", status_code=201)
async def create_comment(
    body: CommentCreateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    if not (
        await concepts.posts.exists(body.parent) or await concepts.comments.exists(body.parent)
    ):
        raise ParentNotFoundError(body.parent)

    comment = await concepts.comments.create(user, body.content, body.parent)
    await concepts.applause.award("comment_created", user)
    await concepts.session.commit()
    return {"msg": "Comment created!", "comment": await responses(concepts).comment(comment)}


@router.patch("/{comment_id}")
async def update_comment(
    comment_id: UUID,
    body: CommentUpdateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    comment = await concepts.comments.update(comment_id, user, body.content)
    await concepts.session.commit()
    return {"msg": "Comment updated!", "comment": await responses(concepts).comment(comment)}


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """Delete a comment and the replies under it."""
    comment = await concepts.comments.delete(comment_id, user)
    await concepts.applause.award("comment_deleted", comment.author)
    replies = await remove_comment_thread(concepts, comment_id)
    await concepts.session.commit()
    return {"msg": "Comment deleted!", "comment": comment_id, "replies_removed": replies}
