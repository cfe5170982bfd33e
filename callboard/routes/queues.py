"""Audition queue endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.exceptions import NotOpportunityOwnerError
from callboard.logging_config import get_logger
from callboard.routes.deps import responses
from callboard.schemas import EstimatedTimeResponse, QueueCreateRequest, QueueProgressResponse

logger = get_logger(__name__)
router = APIRouter(prefix="/api/queues", tags=["queues"])


@router.post("", status_code=201)
async def create_queue(
    body: QueueCreateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """
    Line up everyone invited to audition for an opportunity.

    Applicants are ordered by applause, highest first.
    """
    opportunity = await concepts.opportunities.get_by_id(body.opportunity)
    if opportunity.owner != user:
        raise NotOpportunityOwnerError(user, opportunity.id)

    auditioning = await concepts.applications.get_auditioning_applicants(opportunity.id)
    ranking = await concepts.applause.rank(auditioning)
    queue = await concepts.queues.create(
        user,
        opportunity.id,
        [entry["user"] for entry in ranking],
        body.start_time,
        body.minutes_per_person,
    )
    await concepts.session.commit()
    return {"msg": "Queue created!", "queue": await responses(concepts).queue(queue)}


@router.get("/{opportunity_id}")
async def get_queue(opportunity_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).queue(await concepts.queues.get(opportunity_id))


@router.get("/{opportunity_id}/estimated-time", response_model=EstimatedTimeResponse)
async def estimated_time(
    opportunity_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """When the caller is expected to be seen."""
    return EstimatedTimeResponse(
        opportunity=opportunity_id,
        estimated_time=await concepts.queues.get_estimated_time(opportunity_id, user),
    )


@router.patch("/{opportunity_id}/progress", response_model=QueueProgressResponse)
async def progress_queue(
    opportunity_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    current, following, position = await concepts.queues.progress_queue(user, opportunity_id)
    await concepts.session.commit()

    ids = [current] if following is None else [current, following]
    names = await concepts.users.ids_to_names(ids)
    return QueueProgressResponse(
        current=names[0],
        next=names[1] if following is not None else None,
        position=position,
    )


@router.delete("/{opportunity_id}")
async def delete_queue(
    opportunity_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await concepts.queues.delete(user, opportunity_id)
    await concepts.session.commit()
    return {"msg": "Queue deleted!"}
