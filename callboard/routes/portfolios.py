"""Portfolio endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.concepts.restrictions import ACTOR
from callboard.routes.deps import require_role, responses
from callboard.schemas import (
    MediaAddRequest,
    MediaRemoveRequest,
    PortfolioCreateRequest,
    PortfolioUpdate,
    PortfolioUpdateRequest,
)

router = APIRouter(prefix="/api/portfolio", tags=["portfolios"])


@router.get("/{user_id}")
async def get_portfolio(user_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).portfolio(await concepts.portfolios.get_by_user(user_id))


@router.post("", status_code=201)
async def create_portfolio(
    body: PortfolioCreateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await require_role(concepts, user, ACTOR)
    headshot = None
    if body.headshot:
        headshot = (await concepts.media.create(user, body.headshot)).id
    portfolio = await concepts.portfolios.create(user, headshot)
    await concepts.session.commit()
    return {"msg": "Portfolio created!", "portfolio": await responses(concepts).portfolio(portfolio)}


@router.patch("")
async def update_portfolio(
    body: PortfolioUpdateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """Update style, intro or info. A new headshot link replaces the old image."""
    changes = body.changes()
    headshot = changes.pop("headshot", None)

    portfolio = await concepts.portfolios.update(user, PortfolioUpdate(**changes))
    if headshot:
        media = await concepts.media.create(user, headshot)
        previous = await concepts.portfolios.update_headshot(user, media.id)
        if previous is not None:
            await concepts.media.delete(previous)

    await concepts.session.commit()
    return {"msg": "Portfolio updated!", "portfolio": await responses(concepts).portfolio(portfolio)}


@router.patch("/media/add")
async def add_media(
    body: MediaAddRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    media = await concepts.media.create(user, body.url)
    portfolio = await concepts.portfolios.add_media(user, media.id)
    await concepts.session.commit()
    return {"msg": "Media added!", "portfolio": await responses(concepts).portfolio(portfolio)}


@router.patch("/media/remove")
async def remove_media(
    body: MediaRemoveRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    portfolio = await concepts.portfolios.remove_media(user, body.media)
    await concepts.media.delete(body.media)
    await concepts.session.commit()
    return {"msg": "Media removed!", "portfolio": await responses(concepts).portfolio(portfolio)}
