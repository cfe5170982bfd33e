"""Restriction endpoints: read and change the caller's account types."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.concepts.restrictions import ADMIN
from callboard.exceptions import MissingRoleError
from callboard.logging_config import get_logger
from callboard.schemas import RestrictionsResponse, RestrictionsUpdateRequest

logger = get_logger(__name__)
router = APIRouter(prefix="/api/restrictions", tags=["restrictions"])


def _to_response(restriction, account_types: list[str]) -> RestrictionsResponse:
    return RestrictionsResponse(
        actor=restriction.actor,
        casting_director=restriction.casting_director,
        admin=restriction.admin,
        account_types=account_types,
    )


@router.get("", response_model=RestrictionsResponse)
async def get_restrictions(
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    account_types = await concepts.restrictions.get_account_types(user)
    return RestrictionsResponse(
        actor=await concepts.restrictions.is_actor(user),
        casting_director=await concepts.restrictions.is_casting_director(user),
        admin=await concepts.restrictions.is_admin(user),
        account_types=account_types,
    )


@router.patch("", response_model=RestrictionsResponse)
async def edit_restrictions(
    body: RestrictionsUpdateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """
    Replace the caller's account types.

    Taking the admin role needs an existing admin, except while the platform
    has none yet.
    """
    if ADMIN in body.account_types and not await concepts.restrictions.is_admin(user):
        if await concepts.restrictions.any_admins():
            raise MissingRoleError(ADMIN)
        logger.info("first_admin_granted", user=str(user))

    restriction = await concepts.restrictions.edit(user, body.account_types)
    account_types = await concepts.restrictions.get_account_types(user)
    await concepts.session.commit()
    return _to_response(restriction, account_types)
