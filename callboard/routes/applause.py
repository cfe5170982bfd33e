"""Applause endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.routes.deps import responses
from callboard.schemas import RankingRequest

router = APIRouter(prefix="/api/applause", tags=["applause"])


@router.get("")
async def get_applause(
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    return {"user": user, "value": await concepts.applause.get_value(user)}


@router.post("/ranking")
async def rank(body: RankingRequest, concepts: Concepts = Depends(get_concepts)):
    """The given users ordered by applause, highest first."""
    return await responses(concepts).ranking(await concepts.applause.rank(body.users))
