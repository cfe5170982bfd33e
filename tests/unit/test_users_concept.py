"""Unit tests for the users concept."""

from uuid import uuid4

import pytest

from callboard.concepts.users import DELETED_USER
from callboard.exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    MissingCredentialsError,
    UserNotFoundError,
)
from callboard.schemas import UserUpdate


class TestUserCreation:
    @pytest.mark.asyncio
    async def test_create_returns_sanitized_user(self, concepts):
        user = await concepts.users.create("ada@example.com", "s3cret", "Ada")
        assert user["email"] == "ada@example.com"
        assert user["name"] == "Ada"
        assert "password" not in user
        assert "password_hash" not in user

    @pytest.mark.asyncio
    async def test_empty_password_rejected(self, concepts):
        with pytest.raises(MissingCredentialsError):
            await concepts.users.create("ada@example.com", "", "Ada")

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, concepts):
        await concepts.users.create("ada@example.com", "s3cret", "Ada")
        with pytest.raises(EmailTakenError):
            await concepts.users.create("ada@example.com", "other", "Ada Two")


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_correct_password(self, concepts):
        user = await concepts.users.create("ada@example.com", "s3cret", "Ada")
        assert await concepts.users.authenticate("ada@example.com", "s3cret") == user["id"]

    @pytest.mark.asyncio
    async def test_wrong_password(self, concepts):
        await concepts.users.create("ada@example.com", "s3cret", "Ada")
        with pytest.raises(InvalidCredentialsError, match="incorrect"):
            await concepts.users.authenticate("ada@example.com", "wrong")

    @pytest.mark.asyncio
    async def test_unknown_email(self, concepts):
        with pytest.raises(InvalidCredentialsError):
            await concepts.users.authenticate("nobody@example.com", "s3cret")


class TestLookups:
    @pytest.mark.asyncio
    async def test_get_users_by_exact_name(self, concepts):
        await concepts.users.create("a@example.com", "pw", "Ada")
        await concepts.users.create("b@example.com", "pw", "Grace")
        found = await concepts.users.get_users("Grace")
        assert [u["email"] for u in found] == ["b@example.com"]
        assert len(await concepts.users.get_users()) == 2

    @pytest.mark.asyncio
    async def test_ids_to_names_marks_missing(self, concepts):
        user = await concepts.users.create("a@example.com", "pw", "Ada")
        missing = uuid4()
        names = await concepts.users.ids_to_names([missing, user["id"]])
        assert names == [DELETED_USER, "Ada"]

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, concepts):
        with pytest.raises(UserNotFoundError):
            await concepts.users.get_by_id(uuid4())


class TestUpdate:
    @pytest.mark.asyncio
    async def test_partial_update(self, concepts):
        user = await concepts.users.create("a@example.com", "pw", "Ada", city="London")
        updated = await concepts.users.update(user["id"], UserUpdate(name="Ada L."))
        assert updated["name"] == "Ada L."
        assert updated["city"] == "London"

    @pytest.mark.asyncio
    async def test_password_change(self, concepts):
        user = await concepts.users.create("a@example.com", "pw", "Ada")
        await concepts.users.update(user["id"], UserUpdate(password="new-pw"))
        assert await concepts.users.authenticate("a@example.com", "new-pw") == user["id"]

    @pytest.mark.asyncio
    async def test_email_taken_by_other_user(self, concepts):
        await concepts.users.create("a@example.com", "pw", "Ada")
        other = await concepts.users.create("b@example.com", "pw", "Grace")
        with pytest.raises(EmailTakenError):
            await concepts.users.update(other["id"], UserUpdate(email="a@example.com"))

    def test_mask_rejects_unknown_fields(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            UserUpdate(password_hash="x")

    @pytest.mark.asyncio
    async def test_profile_pic_swap_returns_previous(self, concepts):
        user = await concepts.users.create("a@example.com", "pw", "Ada")
        first, second = uuid4(), uuid4()
        assert await concepts.users.update_profile_pic(user["id"], first) is None
        assert await concepts.users.update_profile_pic(user["id"], second) == first
