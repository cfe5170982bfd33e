"""Portfolios: one styled showcase page per actor."""

from uuid import UUID

from sqlalchemy import select

from callboard.concepts.base import BaseConcept, id_strings
from callboard.exceptions import HasPortfolioError, MediaNotInPortfolioError, PortfolioNotFoundError
from callboard.logging_config import get_logger
from callboard.models import Portfolio
from callboard.schemas import PortfolioInfo, PortfolioStyle, PortfolioUpdate

logger = get_logger(__name__)


class PortfolioConcept(BaseConcept):

    async def create(self, user: UUID, headshot: UUID | None = None) -> Portfolio:
        if await self._find(user) is not None:
            raise HasPortfolioError(user)
        portfolio = await self._create(
            Portfolio,
            user=user,
            style=PortfolioStyle().model_dump(),
            intro="",
            info=PortfolioInfo().model_dump(),
            media=[],
            headshot=headshot,
        )
        logger.info("portfolio_created", user=str(user))
        return portfolio

    async def get_by_user(self, user: UUID) -> Portfolio:
        portfolio = await self._find(user)
        if portfolio is None:
            raise PortfolioNotFoundError(user)
        return portfolio

    async def update(self, user: UUID, update: PortfolioUpdate) -> Portfolio:
        portfolio = await self.get_by_user(user)
        changes = update.changes()
        for field, value in changes.items():
            if value is not None:
                setattr(portfolio, field, value)
        await self.session.flush()
        logger.info("portfolio_updated", user=str(user), fields=sorted(changes))
        return portfolio

    async def update_headshot(self, user: UUID, media: UUID | None) -> UUID | None:
        """Swap the headshot, returning the previous media id."""
        portfolio = await self.get_by_user(user)
        previous = portfolio.headshot
        portfolio.headshot = media
        await self.session.flush()
        return previous

    async def add_media(self, user: UUID, media: UUID) -> Portfolio:
        portfolio = await self.get_by_user(user)
        portfolio.media = [*portfolio.media, str(media)]
        await self.session.flush()
        logger.info("portfolio_media_added", user=str(user), media=str(media))
        return portfolio

    async def remove_media(self, user: UUID, media: UUID) -> Portfolio:
        portfolio = await self.get_by_user(user)
        contents = list(portfolio.media)
        if str(media) not in contents:
            raise MediaNotInPortfolioError(media)
        contents.remove(str(media))
        portfolio.media = id_strings(contents)
        await self.session.flush()
        logger.info("portfolio_media_removed", user=str(user), media=str(media))
        return portfolio

    async def delete(self, user: UUID) -> Portfolio | None:
        """Delete the user's portfolio if any, returning it so its media can be released."""
        portfolio = await self._find(user)
        if portfolio is None:
            return None
        await self._delete(portfolio)
        logger.info("portfolio_deleted", user=str(user))
        return portfolio

    async def _find(self, user: UUID) -> Portfolio | None:
        return await self._first(select(Portfolio).where(Portfolio.user == user))
