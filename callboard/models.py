"""SQLAlchemy ORM models, one table per concept collection."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    Index,
    Integer,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime that always reads back as UTC.

    SQLite drops the offset on write, so naive values coming back from the
    driver are tagged as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, onupdate=utcnow, nullable=False
    )


# ---------------------------------------------------------------------------
# Users, applause, restrictions
# ---------------------------------------------------------------------------


class User(TimestampMixin, Base):
    __tablename__ = "users"
    __table_args__ = (Index("idx_users_name", "name"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    profile_pic: Mapped[UUID | None] = mapped_column(Uuid)
    birthday: Mapped[datetime | None] = mapped_column(UTCDateTime())
    city: Mapped[str] = mapped_column(Text, nullable=False, default="")
    state: Mapped[str] = mapped_column(Text, nullable=False, default="")
    country: Mapped[str] = mapped_column(Text, nullable=False, default="")


class Applause(TimestampMixin, Base):
    __tablename__ = "applause"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user: Mapped[UUID] = mapped_column(Uuid, unique=True, nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)


class Restriction(TimestampMixin, Base):
    __tablename__ = "restrictions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user: Mapped[UUID] = mapped_column(Uuid, unique=True, nullable=False)
    actor: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    casting_director: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Media(TimestampMixin, Base):
    __tablename__ = "media"
    __table_args__ = (Index("idx_media_user", "user"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)


# ---------------------------------------------------------------------------
# Posts, comments, tags, votes
# ---------------------------------------------------------------------------


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class FocusedPost(TimestampMixin, Base):
    __tablename__ = "focused_posts"
    __table_args__ = (
        Index("idx_focused_posts_author", "author"),
        Index("idx_focused_posts_category", "category"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    author: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    media: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    category: Mapped[UUID] = mapped_column(Uuid, nullable=False)


class Comment(TimestampMixin, Base):
    __tablename__ = "comments"
    __table_args__ = (
        Index("idx_comments_parent", "parent"),
        Index("idx_comments_author", "author"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    author: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    parent: Mapped[UUID] = mapped_column(Uuid, nullable=False)


class Tag(TimestampMixin, Base):
    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint("tagged", "post", name="uq_tag_tagged_post"),
        Index("idx_tags_post", "post"),
        Index("idx_tags_tagger", "tagger"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    tagger: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    tagged: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    post: Mapped[UUID] = mapped_column(Uuid, nullable=False)


class Vote(TimestampMixin, Base):
    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("user", "parent", name="uq_vote_user_parent"),
        Index("idx_votes_parent", "parent"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    parent: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    upvote: Mapped[bool] = mapped_column(Boolean, nullable=False)


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------


class Connection(TimestampMixin, Base):
    """Symmetric connection, stored once with ``user1 < user2``."""

    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("user1", "user2", name="uq_connection_pair"),
        Index("idx_connections_user2", "user2"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user1: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    user2: Mapped[UUID] = mapped_column(Uuid, nullable=False)


class ConnectionRequest(TimestampMixin, Base):
    __tablename__ = "connection_requests"
    __table_args__ = (
        Index("idx_connection_requests_from", "from_user", "status"),
        Index("idx_connection_requests_to", "to_user", "status"),
        CheckConstraint(
            "status IN ('pending','accepted','rejected')",
            name="ck_connection_request_status",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    from_user: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    to_user: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="pending")


# ---------------------------------------------------------------------------
# Challenges
# ---------------------------------------------------------------------------


class ProposedChallenge(TimestampMixin, Base):
    __tablename__ = "proposed_challenges"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    challenger: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)


class PostedChallenge(TimestampMixin, Base):
    __tablename__ = "posted_challenges"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    challenger: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    num_accepted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ChallengeParticipant(TimestampMixin, Base):
    __tablename__ = "challenge_participants"
    __table_args__ = (
        UniqueConstraint("challenge", "user", name="uq_challenge_participant"),
        Index("idx_challenge_participants_user", "user"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    challenge: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    user: Mapped[UUID] = mapped_column(Uuid, nullable=False)


# ---------------------------------------------------------------------------
# Opportunities, applications, queues
# ---------------------------------------------------------------------------


class Opportunity(TimestampMixin, Base):
    __tablename__ = "opportunities"
    __table_args__ = (
        Index("idx_opportunities_owner", "owner"),
        Index("idx_opportunities_active_expiry", "is_active", "expires_on"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    owner: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_on: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    ends_on: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    expires_on: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    requirements: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Application(TimestampMixin, Base):
    __tablename__ = "applications"
    __table_args__ = (
        Index("idx_applications_opportunity", "opportunity"),
        Index("idx_applications_applicant", "applicant"),
        CheckConstraint(
            "status IN ('pending','audition','approved','rejected','withdrawn')",
            name="ck_application_status",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    owner: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    applicant: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="pending")
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    media: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    opportunity: Mapped[UUID] = mapped_column(Uuid, nullable=False)


class Queue(TimestampMixin, Base):
    __tablename__ = "queues"
    __table_args__ = (
        Index("idx_queues_manager", "manager"),
        CheckConstraint("current_position <= total_queued", name="ck_queue_position"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    manager: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    opportunity: Mapped[UUID] = mapped_column(Uuid, unique=True, nullable=False)
    applicants: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    start_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    minutes_per_person: Mapped[int] = mapped_column(Integer, nullable=False)
    current_position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_queued: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


# ---------------------------------------------------------------------------
# Portfolios and folders
# ---------------------------------------------------------------------------


class Portfolio(TimestampMixin, Base):
    __tablename__ = "portfolios"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user: Mapped[UUID] = mapped_column(Uuid, unique=True, nullable=False)
    style: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    intro: Mapped[str] = mapped_column(Text, nullable=False, default="")
    info: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    media: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    headshot: Mapped[UUID | None] = mapped_column(Uuid)


class PracticeFolder(TimestampMixin, Base):
    __tablename__ = "practice_folders"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user: Mapped[UUID] = mapped_column(Uuid, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="Practice")
    contents: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    num_contents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class RepertoireFolder(TimestampMixin, Base):
    __tablename__ = "repertoire_folders"
    __table_args__ = (Index("idx_repertoire_folders_user", "user"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    contents: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
