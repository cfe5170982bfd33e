"""Account lifecycle across concepts: signup and the deletion cascade."""

from uuid import UUID

from callboard.concepts import Concepts
from callboard.concepts.base import to_uuids
from callboard.concepts.restrictions import ACTOR, ADMIN
from callboard.concepts.votes import VOTE_DELTA
from callboard.exceptions import MissingRoleError
from callboard.logging_config import get_logger
from callboard.redis import SessionStore
from callboard.schemas import UserCreateRequest
from callboard.services.post_service import delete_post

logger = get_logger(__name__)


async def create_account(concepts: Concepts, body: UserCreateRequest) -> dict:
    """
    Create a user with everything an account starts with.

    Order: user, profile picture media, applause counter, restrictions,
    practice folder, and a portfolio for actors. The admin role can only be
    claimed at signup while no admin exists.
    """
    if ADMIN in body.account_types and await concepts.restrictions.any_admins():
        raise MissingRoleError(ADMIN)

    user = await concepts.users.create(
        body.email,
        body.password,
        body.name,
        birthday=body.birthday,
        city=body.city,
        state=body.state,
        country=body.country,
    )
    user_id = user["id"]

    if body.profile_pic:
        media = await concepts.media.create(user_id, body.profile_pic)
        await concepts.users.update_profile_pic(user_id, media.id)

    await concepts.applause.initialize(user_id)
    await concepts.restrictions.create(user_id, body.account_types)
    await concepts.folders.create_practice(user_id)
    if ACTOR in body.account_types:
        await concepts.portfolios.create(user_id)

    logger.info("account_created", user_id=str(user_id), account_types=body.account_types)
    return await concepts.users.get_by_id(user_id)


async def _reverse_votes(concepts: Concepts, user: UUID) -> None:
    """Remove the user's votes and take their effect back off surviving post authors."""
    for vote in await concepts.votes.delete_user(user):
        if not await concepts.posts.exists(vote.parent):
            continue
        post = await concepts.posts.get_by_id(vote.parent)
        delta = -VOTE_DELTA if vote.upvote else VOTE_DELTA
        await concepts.applause.update(post.author, delta, reason="vote_removed")


async def delete_account(concepts: Concepts, sessions: SessionStore, user: UUID) -> None:
    """
    Delete a user and everything that belongs to them.

    Runs inside the caller's transaction, so a failure at any step leaves the
    account untouched.
    """
    await concepts.users.get_by_id(user)
    await sessions.end(user)

    for post in await concepts.posts.get_by_author(user):
        await delete_post(concepts, post.id, user)
    await concepts.comments.delete_user(user)

    for tag in await concepts.tags.delete_user(user):
        if tag.tagged != user:
            await concepts.applause.award("tag_deleted", tag.tagged)

    await _reverse_votes(concepts, user)

    for other in await concepts.connections.delete_user(user):
        await concepts.applause.award("connection_removed", other)

    await concepts.challenges.delete_user(user)
    await concepts.opportunities.deactivate_user(user)
    await concepts.queues.delete_all_manager_queues(user)
    await concepts.applications.withdraw_user(user)

    portfolio = await concepts.portfolios.delete(user)
    if portfolio is not None:
        await concepts.media.delete_many(to_uuids(portfolio.media))
    await concepts.folders.delete_user(user)
    await concepts.media.delete_user(user)

    await concepts.restrictions.delete(user)
    await concepts.applause.delete(user)
    await concepts.users.delete(user)
    logger.info("account_deleted", user_id=str(user))
