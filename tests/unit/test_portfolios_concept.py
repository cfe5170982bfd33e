"""Unit tests for actor portfolios."""

from uuid import uuid4

import pytest

from callboard.exceptions import HasPortfolioError, MediaNotInPortfolioError, PortfolioNotFoundError
from callboard.schemas import PortfolioInfo, PortfolioUpdate


class TestPortfolio:
    @pytest.mark.asyncio
    async def test_created_with_default_style(self, concepts):
        portfolio = await concepts.portfolios.create(uuid4())
        assert portfolio.style["background_color"] == "white"
        assert portfolio.style["font"] == "Arial"
        assert portfolio.style["font_size"] == 12
        assert portfolio.intro == ""
        assert portfolio.media == []
        assert portfolio.headshot is None

    @pytest.mark.asyncio
    async def test_one_per_user(self, concepts):
        user = uuid4()
        await concepts.portfolios.create(user)
        with pytest.raises(HasPortfolioError):
            await concepts.portfolios.create(user)

    @pytest.mark.asyncio
    async def test_missing(self, concepts):
        with pytest.raises(PortfolioNotFoundError):
            await concepts.portfolios.get_by_user(uuid4())

    @pytest.mark.asyncio
    async def test_update_only_supplied_fields(self, concepts):
        user = uuid4()
        await concepts.portfolios.create(user)
        updated = await concepts.portfolios.update(
            user, PortfolioUpdate(info=PortfolioInfo(skills=["tap", "stage combat"]))
        )
        assert updated.info["skills"] == ["tap", "stage combat"]
        assert updated.intro == ""
        assert updated.style["text_color"] == "black"

    @pytest.mark.asyncio
    async def test_headshot_swap_returns_previous(self, concepts):
        user, first, second = uuid4(), uuid4(), uuid4()
        await concepts.portfolios.create(user, headshot=first)
        assert await concepts.portfolios.update_headshot(user, second) == first
        assert (await concepts.portfolios.get_by_user(user)).headshot == second


class TestPortfolioMedia:
    @pytest.mark.asyncio
    async def test_add_and_remove(self, concepts):
        user, clip, reel = uuid4(), uuid4(), uuid4()
        await concepts.portfolios.create(user)
        await concepts.portfolios.add_media(user, clip)
        await concepts.portfolios.add_media(user, reel)
        portfolio = await concepts.portfolios.remove_media(user, clip)
        assert portfolio.media == [str(reel)]

    @pytest.mark.asyncio
    async def test_remove_unknown_media(self, concepts):
        user = uuid4()
        await concepts.portfolios.create(user)
        with pytest.raises(MediaNotInPortfolioError):
            await concepts.portfolios.remove_media(user, uuid4())

    @pytest.mark.asyncio
    async def test_delete_returns_portfolio(self, concepts):
        user = uuid4()
        await concepts.portfolios.create(user)
        assert (await concepts.portfolios.delete(user)).user == user
        assert await concepts.portfolios.delete(user) is None
