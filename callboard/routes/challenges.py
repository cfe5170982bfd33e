"""Challenge endpoints: propose, post one at random, take part."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.concepts.restrictions import ADMIN
from callboard.routes.deps import require_role, responses
from callboard.schemas import ChallengeProposeRequest

router = APIRouter(prefix="/api/challenges", tags=["challenges"])


@router.get("")
async def list_posted(concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).challenges(await concepts.challenges.get_all_posted())


@router.get("/proposed")
async def list_proposed(concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).challenges(await concepts.challenges.get_all_proposed())


@router.get("/{challenge_id}")
async def get_challenge(challenge_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).challenge(await concepts.challenges.get_posted(challenge_id))


@router.post("", status_code=201)
async def propose(
    body: ChallengeProposeRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    proposal = await concepts.challenges.propose(user, body.prompt)
    await concepts.session.commit()
    return {"msg": "Challenge proposed!", "challenge": await responses(concepts).challenge(proposal)}


@router.post("/post", status_code=201)
async def post_challenge(
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await require_role(concepts, user, ADMIN)
    posted = await concepts.challenges.randomly_post_one()
    await concepts.session.commit()
    return {"msg": "Challenge posted!", "challenge": await responses(concepts).challenge(posted)}


@router.patch("/{challenge_id}/accept")
async def accept_challenge(
    challenge_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    count = await concepts.challenges.accept(challenge_id, user)
    await concepts.applause.award("challenge_accepted", user)
    await concepts.session.commit()
    return {"msg": "Challenge accepted!", "num_accepted": count}


@router.patch("/{challenge_id}/reject")
async def reject_challenge(
    challenge_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    count = await concepts.challenges.reject(challenge_id, user)
    await concepts.applause.award("challenge_accepted", user, sign=-1)
    await concepts.session.commit()
    return {"msg": "Challenge rejected!", "num_accepted": count}
