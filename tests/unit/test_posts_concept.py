"""Unit tests for focused posts and categories."""

from uuid import uuid4

import pytest
import pytest_asyncio

from callboard.exceptions import (
    CategoryExistsError,
    CategoryNotFoundError,
    EmptyPostError,
    InvalidCategoryError,
    NotAllowedError,
    PostAuthorNotMatchError,
    PostNotFoundError,
)
from callboard.schemas import PostUpdate


@pytest_asyncio.fixture
async def category(concepts):
    return await concepts.posts.create_category("Monologues", "Solo pieces")


class TestCategories:
    @pytest.mark.asyncio
    async def test_duplicate_name(self, concepts, category):
        with pytest.raises(CategoryExistsError):
            await concepts.posts.create_category("Monologues", "Again")

    @pytest.mark.asyncio
    async def test_missing_description(self, concepts):
        with pytest.raises(InvalidCategoryError):
            await concepts.posts.create_category("Scenes", "")

    @pytest.mark.asyncio
    async def test_all_sorted_by_name(self, concepts, category):
        await concepts.posts.create_category("Auditions", "Tapes")
        names = [c.name for c in await concepts.posts.get_all_categories()]
        assert names == ["Auditions", "Monologues"]

    @pytest.mark.asyncio
    async def test_delete_category_returns_posts(self, concepts, category):
        author = uuid4()
        post = await concepts.posts.create(author, "Hamlet, act 3", [], category.id)
        deleted = await concepts.posts.delete_category(category.id)
        assert [p.id for p in deleted] == [post.id]
        with pytest.raises(CategoryNotFoundError):
            await concepts.posts.get_category(category.id)
        assert await concepts.posts.exists(post.id) is False


class TestPosts:
    @pytest.mark.asyncio
    async def test_create_requires_existing_category(self, concepts):
        with pytest.raises(CategoryNotFoundError):
            await concepts.posts.create(uuid4(), "Hello", [], uuid4())

    @pytest.mark.asyncio
    async def test_empty_content_not_allowed(self, concepts, category):
        with pytest.raises(EmptyPostError):
            await concepts.posts.create(uuid4(), "", [], category.id)

    @pytest.mark.asyncio
    async def test_media_ids_round_trip(self, concepts, category):
        media = [uuid4(), uuid4()]
        post = await concepts.posts.create(uuid4(), "Reel", media, category.id)
        assert await concepts.posts.get_media(post.id) == media

    @pytest.mark.asyncio
    async def test_filters(self, concepts, category):
        other = await concepts.posts.create_category("Scenes", "Two-handers")
        author = uuid4()
        mine = await concepts.posts.create(author, "One", [], category.id)
        await concepts.posts.create(uuid4(), "Two", [], category.id)
        await concepts.posts.create(author, "Three", [], other.id)

        by_both = await concepts.posts.get_posts(author=author, category=category.id)
        assert [p.id for p in by_both] == [mine.id]
        assert len(await concepts.posts.get_by_author(author)) == 2

    @pytest.mark.asyncio
    async def test_get_and_verify_wrong_author(self, concepts, category):
        post = await concepts.posts.create(uuid4(), "Mine", [], category.id)
        with pytest.raises(PostAuthorNotMatchError):
            await concepts.posts.get_and_verify(post.id, uuid4())

    @pytest.mark.asyncio
    async def test_update_content_only(self, concepts, category):
        author = uuid4()
        post = await concepts.posts.create(author, "Draft", [], category.id)
        updated = await concepts.posts.update(post.id, PostUpdate(content="Final"), author)
        assert updated.content == "Final"
        assert updated.category == category.id

    @pytest.mark.asyncio
    async def test_update_to_missing_category(self, concepts, category):
        author = uuid4()
        post = await concepts.posts.create(author, "Draft", [], category.id)
        with pytest.raises(CategoryNotFoundError):
            await concepts.posts.update(post.id, PostUpdate(category=uuid4()), author)

    @pytest.mark.asyncio
    async def test_update_by_other_user(self, concepts, category):
        post = await concepts.posts.create(uuid4(), "Draft", [], category.id)
        with pytest.raises(NotAllowedError):
            await concepts.posts.update(post.id, PostUpdate(content="Hijack"), uuid4())

    @pytest.mark.asyncio
    async def test_delete(self, concepts, category):
        author = uuid4()
        post = await concepts.posts.create(author, "Bye", [], category.id)
        await concepts.posts.delete(post.id, author)
        with pytest.raises(PostNotFoundError):
            await concepts.posts.get_by_id(post.id)
