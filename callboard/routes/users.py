"""User endpoints: lookup, signup, profile update, account deletion."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.logging_config import get_logger
from callboard.redis import SessionStore, get_session_store
from callboard.routes.deps import responses
from callboard.schemas import MessageResponse, UserCreateRequest, UserUpdate, UserUpdateRequest
from callboard.services.account_service import create_account, delete_account

logger = get_logger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
async def list_users(name: str | None = None, concepts: Concepts = Depends(get_concepts)):
    """All users, or those with exactly ``name``."""
    return await responses(concepts).users(await concepts.users.get_users(name))


@router.get("/{email}")
async def get_user(email: str, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).user(await concepts.users.get_by_email(email))


@router.post("", status_code=201)
async def create_user(body: UserCreateRequest, concepts: Concepts = Depends(get_concepts)):
    """Sign up. The account starts with applause, restrictions and folders."""
    user = await create_account(concepts, body)
    await concepts.session.commit()
    return {"msg": "User created successfully!", "user": await responses(concepts).user(user)}


@router.patch("")
async def update_user(
    body: UserUpdateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    changes = body.changes()
    profile_pic = changes.pop("profile_pic", None)

    updated = await concepts.users.update(user, UserUpdate(**changes))
    if profile_pic:
        media = await concepts.media.create(user, profile_pic)
        previous = await concepts.users.update_profile_pic(user, media.id)
        if previous is not None:
            await concepts.media.delete(previous)
        updated = await concepts.users.get_by_id(user)

    await concepts.session.commit()
    return {"msg": "User updated successfully!", "user": await responses(concepts).user(updated)}


@router.delete("", response_model=MessageResponse)
async def delete_user(
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
    sessions: SessionStore = Depends(get_session_store),
):
    """Delete the caller's account and everything attached to it."""
    await delete_account(concepts, sessions, user)
    await concepts.session.commit()
    return MessageResponse(msg="User deleted!")
