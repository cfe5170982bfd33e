"""Challenges: user-proposed prompts, one of which gets posted at random."""

import random
from uuid import UUID

from sqlalchemy import delete, select

from callboard.concepts.base import BaseConcept
from callboard.exceptions import (
    ChallengeAlreadyAcceptedError,
    ChallengeNotAcceptedError,
    ChallengeNotFoundError,
    EmptyPromptError,
    NoProposedChallengesError,
)
from callboard.logging_config import get_logger
from callboard.models import ChallengeParticipant, PostedChallenge, ProposedChallenge

logger = get_logger(__name__)


class ChallengeConcept(BaseConcept):

    def __init__(self, session, rng: random.Random | None = None):
        super().__init__(session)
        self.rng = rng or random.Random()

    async def propose(self, challenger: UUID, prompt: str) -> ProposedChallenge:
        if not prompt:
            raise EmptyPromptError()
        proposal = await self._create(ProposedChallenge, challenger=challenger, prompt=prompt)
        logger.info("challenge_proposed", challenger=str(challenger), challenge=str(proposal.id))
        return proposal

    async def randomly_post_one(self) -> PostedChallenge:
        """Move one uniformly chosen proposal to the posted challenges."""
        proposals = await self.get_all_proposed()
        if not proposals:
            raise NoProposedChallengesError()
        chosen = self.rng.choice(proposals)
        posted = await self._create(
            PostedChallenge,
            challenger=chosen.challenger,
            prompt=chosen.prompt,
            num_accepted=0,
        )
        await self._delete(chosen)
        logger.info("challenge_posted", challenge=str(posted.id), proposal=str(chosen.id))
        return posted

    async def get_posted(self, challenge_id: UUID) -> PostedChallenge:
        challenge = await self.session.get(PostedChallenge, challenge_id)
        if challenge is None:
            raise ChallengeNotFoundError(challenge_id)
        return challenge

    async def get_all_posted(self) -> list[PostedChallenge]:
        return await self._all(select(PostedChallenge).order_by(PostedChallenge.created_at.desc()))

    async def get_all_proposed(self) -> list[ProposedChallenge]:
        return await self._all(select(ProposedChallenge).order_by(ProposedChallenge.created_at))

    async def update_count(self, challenge_id: UUID, delta: int) -> int:
        """Record a user taking up (+1) or dropping (-1) a posted challenge."""
        challenge = await self.get_posted(challenge_id)
        challenge.num_accepted = max(0, challenge.num_accepted + delta)
        await self.session.flush()
        logger.info("challenge_count_updated", challenge=str(challenge_id), num_accepted=challenge.num_accepted)
        return challenge.num_accepted

    async def accept(self, challenge_id: UUID, user: UUID) -> int:
        """Record ``user`` taking part. Each user counts once per challenge."""
        await self.get_posted(challenge_id)
        if await self._participation(challenge_id, user) is not None:
            raise ChallengeAlreadyAcceptedError(user, challenge_id)
        await self._create(ChallengeParticipant, challenge=challenge_id, user=user)
        return await self.update_count(challenge_id, 1)

    async def reject(self, challenge_id: UUID, user: UUID) -> int:
        """Drop a participation previously recorded by ``accept``."""
        await self.get_posted(challenge_id)
        participation = await self._participation(challenge_id, user)
        if participation is None:
            raise ChallengeNotAcceptedError(user, challenge_id)
        await self._delete(participation)
        return await self.update_count(challenge_id, -1)

    async def has_accepted(self, challenge_id: UUID, user: UUID) -> bool:
        return await self._participation(challenge_id, user) is not None

    async def _participation(self, challenge_id: UUID, user: UUID) -> ChallengeParticipant | None:
        return await self._first(
            select(ChallengeParticipant).where(
                ChallengeParticipant.challenge == challenge_id,
                ChallengeParticipant.user == user,
            )
        )

    async def delete_user(self, user: UUID) -> None:
        """Remove the user's proposals and take back their participations."""
        await self.session.execute(delete(ProposedChallenge).where(ProposedChallenge.challenger == user))
        participations = await self._all(select(ChallengeParticipant).where(ChallengeParticipant.user == user))
        for participation in participations:
            await self.update_count(participation.challenge, -1)
            await self._delete(participation)
        await self.session.flush()
