"""Pydantic v2 request/response schemas for all endpoints.

The ``*Update`` models are field masks: they enumerate exactly the fields a
caller may change and reject anything else.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FieldMask(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class MessageResponse(BaseModel):
    msg: str


# ---------------------------------------------------------------------------
# Sessions & users
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    msg: str
    access_token: str
    token_type: str = "bearer"
    user: dict


class UserCreateRequest(BaseModel):
    email: str
    password: str
    name: str = Field(..., min_length=1, max_length=200)
    birthday: datetime | None = None
    city: str = ""
    state: str = ""
    country: str = ""
    profile_pic: str | None = Field(default=None, description="Google Drive link")
    account_types: list[str] = Field(default_factory=list)


class UserUpdate(FieldMask):
    email: str | None = None
    password: str | None = None
    name: str | None = None
    birthday: datetime | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None


class UserUpdateRequest(UserUpdate):
    profile_pic: str | None = Field(default=None, description="Google Drive link")


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    profile_pic: UUID | None = None
    birthday: datetime | None = None
    city: str = ""
    state: str = ""
    country: str = ""
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Categories, posts, comments
# ---------------------------------------------------------------------------


class CategoryCreateRequest(BaseModel):
    name: str
    description: str


class PostCreateRequest(BaseModel):
    content: str
    category: UUID
    media: list[str] = Field(default_factory=list, description="Google Drive links")


class PostUpdate(FieldMask):
    content: str | None = None
    category: UUID | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


class PostResponse(BaseModel):
    """A focused post with author and category names and media URLs."""

    id: UUID
    author: str
    content: str
    category: str
    media: list[str]
    created_at: datetime
    updated_at: datetime


class CommentCreateRequest(BaseModel):
    content: str
    parent: UUID


class CommentUpdateRequest(BaseModel):
    content: str


# ---------------------------------------------------------------------------
# Tags, votes
# ---------------------------------------------------------------------------


class TagRequest(BaseModel):
    tagged: UUID
    post: UUID


class VoteRequest(BaseModel):
    parent: UUID
    upvote: bool


class VoteTallyResponse(BaseModel):
    parent: UUID
    upvotes: int
    downvotes: int
    score: int


# ---------------------------------------------------------------------------
# Challenges, applause, restrictions
# ---------------------------------------------------------------------------


class ChallengeProposeRequest(BaseModel):
    prompt: str


class RankingRequest(BaseModel):
    users: list[UUID] = Field(..., min_length=1)


class RestrictionsUpdateRequest(BaseModel):
    account_types: list[str]


class RestrictionsResponse(BaseModel):
    actor: bool
    casting_director: bool
    admin: bool
    account_types: list[str]


# ---------------------------------------------------------------------------
# Opportunities, applications, queues
# ---------------------------------------------------------------------------


class Requirements(BaseModel):
    physical: list[str] = Field(default_factory=list)
    skill: list[str] = Field(default_factory=list)
    location: str = ""


class OpportunityCreateRequest(BaseModel):
    title: str
    description: str
    start_on: datetime | None = None
    ends_on: datetime | None = None
    requirements: Requirements = Field(default_factory=Requirements)


class OpportunityUpdate(FieldMask):
    description: str | None = None
    start_on: datetime | None = None
    ends_on: datetime | None = None
    requirements: Requirements | None = None


class DateRangeQuery(BaseModel):
    start: datetime
    end: datetime


class OpportunityResponse(BaseModel):
    id: UUID
    owner: str
    title: str
    description: str
    start_on: datetime
    ends_on: datetime
    expires_on: datetime
    requirements: Requirements
    is_active: bool
    created_at: datetime
    updated_at: datetime


ApplicationStatus = Literal["pending", "audition", "approved", "rejected", "withdrawn"]


class ApplicationCreateRequest(BaseModel):
    opportunity: UUID
    text: str = ""
    media: list[str] = Field(default_factory=list, description="Google Drive links")


class ApplicationStatusRequest(BaseModel):
    status: Literal["audition", "approved", "rejected", "withdrawn"]


class ApplicationResponse(BaseModel):
    """Owner and applicant names, the opportunity title, and media URLs."""

    id: UUID
    owner: str
    applicant: str
    opportunity: str
    status: ApplicationStatus
    text: str
    media: list[str]
    created_at: datetime
    updated_at: datetime


class QueueCreateRequest(BaseModel):
    opportunity: UUID
    start_time: datetime
    minutes_per_person: int


class QueueProgressResponse(BaseModel):
    current: str
    next: str | None
    position: int


class EstimatedTimeResponse(BaseModel):
    opportunity: UUID
    estimated_time: datetime


# ---------------------------------------------------------------------------
# Portfolios & folders
# ---------------------------------------------------------------------------


class PortfolioStyle(BaseModel):
    background_image: str = ""
    background_color: str = "white"
    font: str = "Arial"
    font_size: int = 12
    text_color: str = "black"


class PortfolioInfo(BaseModel):
    education: list[str] = Field(default_factory=list)
    experience: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)


class PortfolioCreateRequest(BaseModel):
    headshot: str | None = Field(default=None, description="Google Drive link")


class PortfolioUpdate(FieldMask):
    style: PortfolioStyle | None = None
    intro: str | None = None
    info: PortfolioInfo | None = None


class PortfolioUpdateRequest(PortfolioUpdate):
    headshot: str | None = Field(default=None, description="Google Drive link")


class MediaAddRequest(BaseModel):
    url: str


class MediaRemoveRequest(BaseModel):
    media: UUID


class FolderItemRequest(BaseModel):
    item: UUID


class RepertoireCreateRequest(BaseModel):
    name: str


class FolderSettingsRequest(BaseModel):
    capacity: int


class FolderSettingsResponse(BaseModel):
    capacity: int
