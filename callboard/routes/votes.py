"""Vote endpoints. Votes move the post author's applause."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.logging_config import get_logger
from callboard.schemas import VoteRequest, VoteTallyResponse

logger = get_logger(__name__)
router = APIRouter(prefix="/api/votes", tags=["votes"])


@router.post("")
async def vote(
    body: VoteRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    post = await concepts.posts.get_by_id(body.parent)
    outcome = await concepts.votes.vote(user, body.parent, body.upvote)
    await concepts.applause.update(post.author, outcome.delta, reason=f"vote_{outcome.action}")
    await concepts.session.commit()
    return {"msg": f"Vote {outcome.action}!", "action": outcome.action, "upvote": outcome.upvote}


@router.get("/{post_id}", response_model=VoteTallyResponse)
async def tally(post_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return VoteTallyResponse(parent=post_id, **await concepts.votes.tally(post_id))
