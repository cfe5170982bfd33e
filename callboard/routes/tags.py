"""Tag endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.exceptions import PostNotFoundError, UserNotFoundError
from callboard.routes.deps import responses
from callboard.schemas import TagRequest

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("/post/{post_id}")
async def tags_on_post(post_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).tags(await concepts.tags.get_by_post(post_id))


@router.get("/user/{user_id}")
async def tags_of_user(user_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).tags(await concepts.tags.get_by_tagged(user_id))


@router.post("", status_code=201)
async def create_tag(
    body: TagRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """Tag a user on a post. The tagged user gets the tag reward."""
    if not await concepts.posts.exists(body.post):
        raise PostNotFoundError(body.post)
    if not await concepts.users.exists(body.tagged):
        raise UserNotFoundError(body.tagged)

    tag = await concepts.tags.create(user, body.tagged, body.post)
    await concepts.applause.award("tag_created", body.tagged)
    await concepts.session.commit()
    return {"msg": "Tag created!", "tag": (await responses(concepts).tags([tag]))[0]}


@router.delete("")
async def delete_tag(
    body: TagRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    tag = await concepts.tags.delete_tag(user, body.tagged, body.post)
    await concepts.applause.award("tag_deleted", tag.tagged)
    await concepts.session.commit()
    return {"msg": "Tag deleted!", "tag": tag.id}
