"""Unit tests for the comments concept."""

from uuid import uuid4

import pytest

from callboard.exceptions import (
    CommentAuthorNotMatchError,
    CommentNotFoundError,
    EmptyCommentError,
)


class TestComments:
    @pytest.mark.asyncio
    async def test_create_and_list_by_parent(self, concepts):
        parent = uuid4()
        first = await concepts.comments.create(uuid4(), "Bravo", parent)
        second = await concepts.comments.create(uuid4(), "Encore", parent)
        listed = await concepts.comments.get_by_parent(parent)
        assert [c.id for c in listed] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_empty_content(self, concepts):
        with pytest.raises(EmptyCommentError):
            await concepts.comments.create(uuid4(), "", uuid4())

    @pytest.mark.asyncio
    async def test_update_by_author(self, concepts):
        author = uuid4()
        comment = await concepts.comments.create(author, "Nice", uuid4())
        updated = await concepts.comments.update(comment.id, author, "Very nice")
        assert updated.content == "Very nice"

    @pytest.mark.asyncio
    async def test_update_by_someone_else(self, concepts):
        comment = await concepts.comments.create(uuid4(), "Nice", uuid4())
        with pytest.raises(CommentAuthorNotMatchError):
            await concepts.comments.update(comment.id, uuid4(), "Mine now")

    @pytest.mark.asyncio
    async def test_delete(self, concepts):
        author = uuid4()
        comment = await concepts.comments.create(author, "Nice", uuid4())
        deleted = await concepts.comments.delete(comment.id, author)
        assert deleted.id == comment.id
        assert await concepts.comments.exists(comment.id) is False
        with pytest.raises(CommentNotFoundError):
            await concepts.comments.get(comment.id)

    @pytest.mark.asyncio
    async def test_delete_user(self, concepts):
        author, parent = uuid4(), uuid4()
        await concepts.comments.create(author, "One", parent)
        await concepts.comments.create(author, "Two", parent)
        kept = await concepts.comments.create(uuid4(), "Three", parent)
        removed = await concepts.comments.delete_user(author)
        assert len(removed) == 2
        assert [c.id for c in await concepts.comments.get_by_parent(parent)] == [kept.id]
