"""Unit tests for role flags and the role gate."""

from uuid import uuid4

import pytest

from callboard.concepts.restrictions import (
    ACTOR,
    ADMIN,
    CASTING_DIRECTOR,
    RestrictionsConcept,
    flags_from_account_types,
)
from callboard.exceptions import (
    MissingRoleError,
    NoRestrictionsError,
    NotLoggedInError,
    RestrictionsExistError,
)


class TestFlagsFromAccountTypes:
    def test_recognized_roles(self):
        assert flags_from_account_types(["actor", "casting director"]) == {
            "actor": True,
            "casting_director": True,
            "admin": False,
        }

    def test_unrecognized_roles_ignored(self):
        assert flags_from_account_types(["director", "Actor"]) == {
            "actor": False,
            "casting_director": False,
            "admin": False,
        }


class TestCheckGate:
    def test_no_session(self):
        with pytest.raises(NotLoggedInError):
            RestrictionsConcept.check(None, ACTOR)

    def test_missing_role(self):
        with pytest.raises(MissingRoleError, match="actor"):
            RestrictionsConcept.check(False, ACTOR)

    def test_has_role(self):
        RestrictionsConcept.check(True, ACTOR)


class TestRestrictionsConcept:
    @pytest.mark.asyncio
    async def test_create_and_query(self, concepts):
        user = uuid4()
        await concepts.restrictions.create(user, [ACTOR])
        assert await concepts.restrictions.is_actor(user) is True
        assert await concepts.restrictions.is_casting_director(user) is False
        assert await concepts.restrictions.is_admin(user) is False
        assert await concepts.restrictions.get_account_types(user) == [ACTOR]

    @pytest.mark.asyncio
    async def test_create_twice_fails(self, concepts):
        user = uuid4()
        await concepts.restrictions.create(user, [])
        with pytest.raises(RestrictionsExistError):
            await concepts.restrictions.create(user, [ACTOR])

    @pytest.mark.asyncio
    async def test_edit_replaces_flags(self, concepts):
        user = uuid4()
        await concepts.restrictions.create(user, [ACTOR])
        await concepts.restrictions.edit(user, [CASTING_DIRECTOR, ADMIN])
        assert await concepts.restrictions.get_account_types(user) == [CASTING_DIRECTOR, ADMIN]

    @pytest.mark.asyncio
    async def test_missing_record(self, concepts):
        with pytest.raises(NoRestrictionsError):
            await concepts.restrictions.is_actor(uuid4())

    @pytest.mark.asyncio
    async def test_any_admins(self, concepts):
        user = uuid4()
        await concepts.restrictions.create(user, [ACTOR])
        assert await concepts.restrictions.any_admins() is False
        await concepts.restrictions.edit(user, [ADMIN])
        assert await concepts.restrictions.any_admins() is True
