"""Votes on posts, with toggle semantics."""

from dataclasses import dataclass
from typing import Literal
from uuid import UUID

from sqlalchemy import delete, select

from callboard.concepts.applause import APPLAUSE_DELTAS
from callboard.concepts.base import BaseConcept
from callboard.logging_config import get_logger
from callboard.models import Vote

logger = get_logger(__name__)

VOTE_DELTA = APPLAUSE_DELTAS["vote"]


@dataclass(frozen=True)
class VoteOutcome:
    """What a vote call did and the applause change it implies for the post author."""

    action: Literal["created", "removed", "flipped"]
    upvote: bool
    delta: float


class VoteConcept(BaseConcept):
    """Handles votes. One vote per (user, parent)."""

    async def vote(self, user: UUID, parent: UUID, upvote: bool) -> VoteOutcome:
        """
        Cast, retract or flip a vote.

        - no vote yet: create it, +0.5 for an upvote and -0.5 for a downvote
        - same polarity again: remove it, undoing its delta
        - opposite polarity: flip it, doubling the delta so the old vote is
          cancelled and the new one applied in a single adjustment
        """
        sign = 1 if upvote else -1
        existing = await self._first(
            select(Vote).where(Vote.user == user, Vote.parent == parent)
        )

        if existing is None:
            await self._create(Vote, user=user, parent=parent, upvote=upvote)
            outcome = VoteOutcome("created", upvote, sign * VOTE_DELTA)
        elif existing.upvote == upvote:
            await self._delete(existing)
            outcome = VoteOutcome("removed", upvote, -sign * VOTE_DELTA)
        else:
            existing.upvote = upvote
            await self.session.flush()
            outcome = VoteOutcome("flipped", upvote, 2 * sign * VOTE_DELTA)

        logger.info(
            "vote_cast",
            user=str(user),
            parent=str(parent),
            action=outcome.action,
            delta=outcome.delta,
        )
        return outcome

    async def get_by_parent(self, parent: UUID) -> list[Vote]:
        return await self._all(select(Vote).where(Vote.parent == parent))

    async def get_user_vote(self, user: UUID, parent: UUID) -> Vote | None:
        return await self._first(select(Vote).where(Vote.user == user, Vote.parent == parent))

    async def tally(self, parent: UUID) -> dict[str, int]:
        votes = await self.get_by_parent(parent)
        upvotes = sum(1 for v in votes if v.upvote)
        downvotes = len(votes) - upvotes
        return {"upvotes": upvotes, "downvotes": downvotes, "score": upvotes - downvotes}

    async def delete_parent(self, parent: UUID) -> None:
        await self.session.execute(delete(Vote).where(Vote.parent == parent))
        await self.session.flush()

    async def delete_user(self, user: UUID) -> list[Vote]:
        """Remove every vote cast by ``user``, returning them for applause reversal."""
        votes = await self._all(select(Vote).where(Vote.user == user))
        for vote in votes:
            await self.session.delete(vote)
        await self.session.flush()
        logger.info("votes_deleted_for_user", user=str(user), count=len(votes))
        return votes
