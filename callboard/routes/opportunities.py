"""Opportunity endpoints."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from callboard.auth import get_current_user_id, get_current_user_id_optional
from callboard.concepts import Concepts, get_concepts
from callboard.concepts.restrictions import CASTING_DIRECTOR
from callboard.logging_config import get_logger
from callboard.routes.deps import require_role, responses
from callboard.schemas import OpportunityCreateRequest, OpportunityResponse, OpportunityUpdate

logger = get_logger(__name__)
router = APIRouter(prefix="/api/opportunities", tags=["opportunities"])


@router.get("", response_model=list[OpportunityResponse])
async def list_opportunities(concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).opportunities(await concepts.opportunities.get_all())


@router.get("/title/{title}", response_model=list[OpportunityResponse])
async def by_title(title: str, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).opportunities(await concepts.opportunities.get_by_title(title))


@router.get("/user/{user_id}", response_model=list[OpportunityResponse])
async def by_user(user_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).opportunities(await concepts.opportunities.get_by_user(user_id))


@router.get("/{opportunity_id}", response_model=OpportunityResponse)
async def get_opportunity(opportunity_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).opportunity(
        await concepts.opportunities.get_by_id(opportunity_id)
    )


@router.get("/{opportunity_id}/in-range")
async def in_range(
    opportunity_id: UUID,
    start: datetime = Query(...),
    end: datetime = Query(...),
    concepts: Concepts = Depends(get_concepts),
):
    """Whether the opportunity's dates fall inside ``[start, end]``."""
    return {"in_range": await concepts.opportunities.dates_in_range(opportunity_id, start, end)}


@router.post("", status_code=201)
async def create_opportunity(
    body: OpportunityCreateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await require_role(concepts, user, CASTING_DIRECTOR)
    opportunity = await concepts.opportunities.create(
        user,
        body.title,
        body.description,
        body.start_on,
        body.ends_on,
        body.requirements.model_dump(),
    )
    await concepts.session.commit()
    return {
        "msg": "Opportunity created!",
        "opportunity": await responses(concepts).opportunity(opportunity),
    }


@router.patch("/{opportunity_id}")
async def update_opportunity(
    opportunity_id: UUID,
    body: OpportunityUpdate,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    opportunity = await concepts.opportunities.update(opportunity_id, user, body)
    await concepts.session.commit()
    return {
        "msg": "Opportunity updated!",
        "opportunity": await responses(concepts).opportunity(opportunity),
    }


@router.patch("/{opportunity_id}/deactivate")
async def deactivate_opportunity(
    opportunity_id: UUID,
    user: UUID | None = Depends(get_current_user_id_optional),
    concepts: Concepts = Depends(get_concepts),
):
    """
    Close an opportunity.

    The logged-in owner closes it outright. Without a session this runs the
    expiry check for that one opportunity and closes it only if it is due.
    """
    deactivated = await concepts.opportunities.deactivate(opportunity_id, user)
    await concepts.session.commit()
    msg = "Opportunity deactivated!" if deactivated else "Opportunity is not due to expire."
    return {"msg": msg, "deactivated": deactivated}


@router.patch("/{opportunity_id}/reactivate")
async def reactivate_opportunity(
    opportunity_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    opportunity = await concepts.opportunities.reactivate(opportunity_id, user)
    await concepts.session.commit()
    return {
        "msg": "Opportunity reactivated!",
        "opportunity": await responses(concepts).opportunity(opportunity),
    }


@router.delete("/{opportunity_id}")
async def delete_opportunity(
    opportunity_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await concepts.opportunities.delete(opportunity_id, user)
    await concepts.queues.delete_for_opportunity(opportunity_id)
    await concepts.session.commit()
    return {"msg": "Opportunity deleted!", "opportunity": opportunity_id}
