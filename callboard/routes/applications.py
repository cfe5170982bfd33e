"""Application endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.concepts.application_state import WITHDRAWN
from callboard.concepts.restrictions import ACTOR
from callboard.exceptions import OpportunityInactiveError
from callboard.logging_config import get_logger
from callboard.routes.deps import require_role, responses
from callboard.schemas import ApplicationCreateRequest, ApplicationResponse, ApplicationStatusRequest

logger = get_logger(__name__)
router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("", response_model=list[ApplicationResponse])
async def my_applications(
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    return await responses(concepts).applications(
        await concepts.applications.get_apps_for_user(user)
    )


@router.get("/opportunity/{opportunity_id}", response_model=list[ApplicationResponse])
async def applications_for_opportunity(
    opportunity_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """Applications received by an opportunity; owner only."""
    opportunity = await concepts.opportunities.get_by_id(opportunity_id)
    applications = await concepts.applications.get_apps_for_op(
        user, opportunity_id, opportunity.owner
    )
    return await responses(concepts).applications(applications)


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    return await responses(concepts).application(
        await concepts.applications.get_app_by_id(application_id, user)
    )


@router.post("", status_code=201)
async def apply(
    body: ApplicationCreateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await require_role(concepts, user, ACTOR)
    opportunity = await concepts.opportunities.get_by_id(body.opportunity)
    if not opportunity.is_active:
        raise OpportunityInactiveError(opportunity.id)

    media = await concepts.media.create_many(user, body.media)
    application = await concepts.applications.create(
        opportunity.owner, user, body.text, media, opportunity.id
    )
    await concepts.applause.award("application_submitted", user)
    await concepts.session.commit()
    return {
        "msg": "Application submitted!",
        "application": await responses(concepts).application(application),
    }


@router.patch("/{application_id}")
async def change_status(
    application_id: UUID,
    body: ApplicationStatusRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """Withdrawing is the applicant's call; every other status is the owner's."""
    application = await concepts.applications.change_status(user, application_id, body.status)
    if body.status == WITHDRAWN:
        await concepts.applause.award("application_withdrawn", application.applicant)
    await concepts.session.commit()
    return {
        "msg": f"Application {body.status}!",
        "application": await responses(concepts).application(application),
    }
