"""Concepts: independent domain units, each owning its own tables.

``Concepts`` wires one instance of every concept to a single session so a
request's calls share one transaction.
"""

import random

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from callboard.concepts.applause import ApplauseConcept
from callboard.concepts.applications import ApplicationConcept
from callboard.concepts.challenges import ChallengeConcept
from callboard.concepts.comments import CommentConcept
from callboard.concepts.connections import ConnectionConcept
from callboard.concepts.folders import FolderConcept
from callboard.concepts.media import MediaConcept
from callboard.concepts.opportunities import DEFAULT_LIFETIME_DAYS, OpportunityConcept
from callboard.concepts.portfolios import PortfolioConcept
from callboard.concepts.posts import FocusedPostConcept
from callboard.concepts.queues import QueueConcept
from callboard.concepts.restrictions import RestrictionsConcept
from callboard.concepts.tags import TagConcept
from callboard.concepts.users import UsersConcept
from callboard.concepts.votes import VoteConcept
from callboard.config import FolderSettings, get_settings
from callboard.database import get_db


class Concepts:
    """Every concept bound to one session."""

    def __init__(
        self,
        session: AsyncSession,
        folder_settings: FolderSettings | None = None,
        opportunity_lifetime_days: int = DEFAULT_LIFETIME_DAYS,
        rng: random.Random | None = None,
    ):
        self.session = session
        self.users = UsersConcept(session)
        self.applause = ApplauseConcept(session)
        self.restrictions = RestrictionsConcept(session)
        self.media = MediaConcept(session)
        self.posts = FocusedPostConcept(session)
        self.comments = CommentConcept(session)
        self.tags = TagConcept(session)
        self.votes = VoteConcept(session)
        self.connections = ConnectionConcept(session)
        self.challenges = ChallengeConcept(session, rng=rng)
        self.opportunities = OpportunityConcept(session, lifetime_days=opportunity_lifetime_days)
        self.applications = ApplicationConcept(session)
        self.queues = QueueConcept(session)
        self.portfolios = PortfolioConcept(session)
        self.folders = FolderConcept(session, settings=folder_settings)


def get_concepts(request: Request, db: AsyncSession = Depends(get_db)) -> Concepts:
    """FastAPI dependency: the concept graph for the current request."""
    return Concepts(
        db,
        folder_settings=getattr(request.app.state, "folder_settings", None),
        opportunity_lifetime_days=get_settings().opportunity_lifetime_days,
    )


__all__ = [
    "ApplauseConcept",
    "ApplicationConcept",
    "ChallengeConcept",
    "CommentConcept",
    "Concepts",
    "ConnectionConcept",
    "FocusedPostConcept",
    "FolderConcept",
    "MediaConcept",
    "OpportunityConcept",
    "PortfolioConcept",
    "QueueConcept",
    "RestrictionsConcept",
    "TagConcept",
    "UsersConcept",
    "VoteConcept",
    "get_concepts",
]
