"""Unit tests for account creation and the account deletion cascade."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from callboard.concepts.restrictions import ACTOR, ADMIN, CASTING_DIRECTOR
from callboard.exceptions import (
    EmailTakenError,
    MissingRoleError,
    PortfolioNotFoundError,
    UserNotFoundError,
)
from callboard.services.account_service import create_account, delete_account
from callboard.services.post_service import create_post
from tests.factories import AccountFactory, drive_link

START = datetime(2026, 8, 1, tzinfo=timezone.utc)
END = datetime(2026, 8, 15, tzinfo=timezone.utc)


class TestCreateAccount:
    @pytest.mark.asyncio
    async def test_actor_starts_with_everything(self, concepts):
        user = await create_account(concepts, AccountFactory.request(account_types=[ACTOR]))
        user_id = user["id"]

        assert await concepts.applause.get_value(user_id) == 0
        assert await concepts.restrictions.is_actor(user_id) is True
        assert (await concepts.folders.get_practice(user_id)).num_contents == 0
        assert (await concepts.portfolios.get_by_user(user_id)).user == user_id
        assert "password_hash" not in user

    @pytest.mark.asyncio
    async def test_non_actor_has_no_portfolio(self, concepts):
        user = await create_account(
            concepts, AccountFactory.request(account_types=[CASTING_DIRECTOR])
        )
        with pytest.raises(PortfolioNotFoundError):
            await concepts.portfolios.get_by_user(user["id"])

    @pytest.mark.asyncio
    async def test_profile_pic_becomes_media(self, concepts):
        user = await create_account(concepts, AccountFactory.request(profile_pic=drive_link()))
        media = await concepts.media.get(user["profile_pic"])
        assert media.user == user["id"]

    @pytest.mark.asyncio
    async def test_email_taken(self, concepts):
        await create_account(concepts, AccountFactory.request(email="dup@callboard.test"))
        with pytest.raises(EmailTakenError):
            await create_account(concepts, AccountFactory.request(email="dup@callboard.test"))

    @pytest.mark.asyncio
    async def test_admin_only_while_none_exists(self, concepts):
        first = await create_account(concepts, AccountFactory.request(account_types=[ADMIN]))
        assert await concepts.restrictions.is_admin(first["id"]) is True
        with pytest.raises(MissingRoleError):
            await create_account(
                concepts, AccountFactory.request(email="late@callboard.test", account_types=[ADMIN])
            )
        with pytest.raises(UserNotFoundError):
            await concepts.users.get_by_email("late@callboard.test")


class TestDeleteAccount:
    @pytest.mark.asyncio
    async def test_cascade(self, concepts, make_user, session_store, mock_redis_client):
        leaving = await make_user(account_types=[ACTOR, CASTING_DIRECTOR])
        friend = await make_user()
        director = await make_user(account_types=[CASTING_DIRECTOR])
        category = await concepts.posts.create_category("Scenes", "Two-handers")

        await session_store.start(leaving, "jti-1", ttl_seconds=3600)

        # A tag by the leaving user on someone else's post
        post = await create_post(concepts, friend, "Rehearsal", [], category.id)
        await concepts.tags.create(leaving, director, post.id)
        await concepts.applause.award("tag_created", director)

        # An upvote on that post
        outcome = await concepts.votes.vote(leaving, post.id, True)
        await concepts.applause.update(friend, outcome.delta)

        # A connection
        await concepts.connections.send_request(leaving, friend)
        await concepts.connections.accept_request(leaving, friend)
        await concepts.applause.award("connection_accepted", leaving, friend)

        # An application and an opportunity of their own
        role = await concepts.opportunities.create(director, "Lead", "Drama", START, END)
        application = await concepts.applications.create(
            director, leaving, "Me!", [], role.id
        )
        own = await concepts.opportunities.create(leaving, "Extra", "Crowd", START, END)
        await concepts.queues.create(leaving, own.id, [], START, 10)

        assert await concepts.applause.get_value(friend) == 3 + 0.5 + 1
        assert await concepts.applause.get_value(director) == 2

        await delete_account(concepts, session_store, leaving)

        assert f"session:{leaving}" not in mock_redis_client.store
        with pytest.raises(UserNotFoundError):
            await concepts.users.get_by_id(leaving)
        assert await concepts.tags.get_by_post(post.id) == []
        assert await concepts.votes.get_by_parent(post.id) == []
        assert await concepts.connections.get_connections(friend) == []
        assert application.status == "withdrawn"
        assert own.is_active is False
        assert await concepts.queues.get_by_manager(leaving) == []
        assert await concepts.applause.get_value(friend) == 3
        assert await concepts.applause.get_value(director) == 0

    @pytest.mark.asyncio
    async def test_own_posts_removed(self, concepts, make_user, session_store):
        leaving = await make_user()
        category = await concepts.posts.create_category("Songs", "Sixteen bars")
        await create_post(concepts, leaving, "Audition cut", [drive_link()], category.id)

        await delete_account(concepts, session_store, leaving)
        assert await concepts.posts.get_by_author(leaving) == []

    @pytest.mark.asyncio
    async def test_missing_user(self, concepts, session_store):
        with pytest.raises(UserNotFoundError):
            await delete_account(concepts, session_store, uuid4())
