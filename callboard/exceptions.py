"""Error taxonomy shared by every concept.

Every failure a concept can report is a ``ConceptError`` of exactly one kind:
not found, not allowed, bad values or unauthenticated. Messages are
templates; positional ``{n}`` placeholders refer to ``refs`` and the ones
listed in ``user_refs`` are user ids that the HTTP layer may resolve into
names before answering.
"""

from typing import Any
from uuid import UUID

from fastapi import status


class ConceptError(Exception):
    """Base exception for concept errors."""

    kind = "concept_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        template: str,
        *refs: Any,
        error_type: str | None = None,
        user_refs: tuple[int, ...] = (),
    ):
        self.template = template
        self.refs = refs
        self.error_type = error_type or self.kind
        self.user_refs = user_refs
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return self.format_with(*self.refs)

    def format_with(self, *values: Any) -> str:
        return self.template.format(*values)


class NotFoundError(ConceptError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class NotAllowedError(ConceptError):
    kind = "not_allowed"
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(NotAllowedError):
    """A NotAllowed error caused by existing state (duplicates, exhausted queues)."""

    status_code = status.HTTP_409_CONFLICT


class BadValuesError(ConceptError):
    kind = "bad_values"
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(ConceptError):
    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserNotFoundError(NotFoundError):
    def __init__(self, identifier: UUID | str):
        super().__init__("User {0} not found!", identifier, error_type="user_not_found")
        self.identifier = identifier


class MissingCredentialsError(BadValuesError):
    def __init__(self):
        super().__init__("Email and password must be non-empty!", error_type="missing_credentials")


class EmailTakenError(ConflictError):
    def __init__(self, email: str):
        super().__init__("User with email {0} already exists!", email, error_type="email_taken")
        self.email = email


class InvalidCredentialsError(NotAllowedError):
    def __init__(self):
        super().__init__("Email or password is incorrect.", error_type="invalid_credentials")


class NotLoggedInError(UnauthenticatedError):
    def __init__(self):
        super().__init__("Must be logged in!", error_type="not_logged_in")


class AlreadyLoggedInError(NotAllowedError):
    def __init__(self):
        super().__init__("Must be logged out!", error_type="already_logged_in")


# ---------------------------------------------------------------------------
# Applause
# ---------------------------------------------------------------------------


class ApplauseExistsError(ConflictError):
    def __init__(self, user: UUID):
        super().__init__(
            "{0} already has applause counter!", user,
            error_type="applause_exists", user_refs=(0,),
        )
        self.user = user


class NoApplauseCounterError(NotFoundError):
    def __init__(self, user: UUID):
        super().__init__(
            "{0} doesn't have applause counter!", user,
            error_type="no_applause_counter", user_refs=(0,),
        )
        self.user = user


# ---------------------------------------------------------------------------
# Restrictions
# ---------------------------------------------------------------------------


class RestrictionsExistError(ConflictError):
    def __init__(self, user: UUID):
        super().__init__(
            "{0} already has initialized restrictions", user,
            error_type="restrictions_exist", user_refs=(0,),
        )
        self.user = user


class NoRestrictionsError(NotFoundError):
    def __init__(self, user: UUID):
        super().__init__(
            "{0} hasn't initialized restrictions", user,
            error_type="no_restrictions", user_refs=(0,),
        )
        self.user = user


class MissingRoleError(NotAllowedError):
    def __init__(self, type_name: str):
        super().__init__("User isn't of type: {0}", type_name, error_type="missing_role")
        self.type_name = type_name


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------


class MediaNotFoundError(NotFoundError):
    def __init__(self, media_id: UUID):
        super().__init__("No media with id {0} exists", media_id, error_type="media_not_found")
        self.media_id = media_id


class EmptyMediaUrlError(BadValuesError):
    def __init__(self):
        super().__init__("can't leave url empty for media", error_type="empty_media_url")


class InvalidMediaLinkError(BadValuesError):
    def __init__(self, url: str):
        super().__init__(
            "Media links must be Google Drive links. The current link isn't: {0}", url,
            error_type="invalid_media_link",
        )
        self.url = url


# ---------------------------------------------------------------------------
# Focused posts & categories
# ---------------------------------------------------------------------------


class PostNotFoundError(NotFoundError):
    def __init__(self, post_id: UUID):
        super().__init__("Focused post {0} does not exist!", post_id, error_type="post_not_found")
        self.post_id = post_id


class PostAuthorNotMatchError(NotAllowedError):
    def __init__(self, author: UUID, post_id: UUID):
        super().__init__(
            "{0} is not the author of focused post {1}!", author, post_id,
            error_type="post_author_mismatch", user_refs=(0,),
        )
        self.author = author
        self.post_id = post_id


class EmptyPostError(NotAllowedError):
    def __init__(self):
        super().__init__("Category or content missing", error_type="empty_post")


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: UUID):
        super().__init__("'{0}' category not found", category_id, error_type="category_not_found")
        self.category_id = category_id


class CategoryExistsError(ConflictError):
    def __init__(self, name: str):
        super().__init__("'{0}' category already exists", name, error_type="category_exists")
        self.name = name


class InvalidCategoryError(NotAllowedError):
    def __init__(self):
        super().__init__("Name or description of category missing", error_type="invalid_category")


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


class CommentNotFoundError(NotFoundError):
    def __init__(self, comment_id: UUID):
        super().__init__("Comment {0} does not exist!", comment_id, error_type="comment_not_found")
        self.comment_id = comment_id


class CommentAuthorNotMatchError(NotAllowedError):
    def __init__(self, author: UUID, comment_id: UUID):
        super().__init__(
            "{0} is not the author of comment {1}!", author, comment_id,
            error_type="comment_author_mismatch", user_refs=(0,),
        )
        self.author = author
        self.comment_id = comment_id


class EmptyCommentError(BadValuesError):
    def __init__(self):
        super().__init__("Comment content can't be empty", error_type="empty_comment")


class ParentNotFoundError(NotFoundError):
    def __init__(self, parent_id: UUID):
        super().__init__("No post or comment with id {0} exists", parent_id, error_type="parent_not_found")
        self.parent_id = parent_id


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class DuplicateTagError(ConflictError):
    def __init__(self, tagged: UUID, post: UUID):
        super().__init__(
            "{0} is already tagged on post {1}!", tagged, post,
            error_type="duplicate_tag", user_refs=(0,),
        )
        self.tagged = tagged
        self.post = post


class TagNotFoundError(BadValuesError):
    def __init__(self, tagged: UUID, post: UUID):
        super().__init__(
            "{0} isn't tagged on post {1}", tagged, post,
            error_type="tag_not_found", user_refs=(0,),
        )
        self.tagged = tagged
        self.post = post


class TaggerNotMatchError(NotAllowedError):
    def __init__(self, user: UUID, tag_id: UUID):
        super().__init__(
            "{0} is not the tagger of {1}!", user, tag_id,
            error_type="tagger_mismatch", user_refs=(0,),
        )
        self.user = user
        self.tag_id = tag_id


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------


class ConnectionRequestNotFoundError(NotFoundError):
    def __init__(self, from_user: UUID, to_user: UUID):
        super().__init__(
            "Connection request from {0} to {1} does not exist!", from_user, to_user,
            error_type="connection_request_not_found", user_refs=(0, 1),
        )
        self.from_user = from_user
        self.to_user = to_user


class ConnectionRequestExistsError(ConflictError):
    def __init__(self, from_user: UUID, to_user: UUID):
        super().__init__(
            "Connection request between {0} and {1} already exists!", from_user, to_user,
            error_type="connection_request_exists", user_refs=(0, 1),
        )
        self.from_user = from_user
        self.to_user = to_user


class ConnectionNotFoundError(NotFoundError):
    def __init__(self, user1: UUID, user2: UUID):
        super().__init__(
            "Connection between {0} and {1} does not exist!", user1, user2,
            error_type="connection_not_found", user_refs=(0, 1),
        )
        self.user1 = user1
        self.user2 = user2


class AlreadyConnectedError(ConflictError):
    def __init__(self, user1: UUID, user2: UUID):
        super().__init__(
            "{0} and {1} are already connected!", user1, user2,
            error_type="already_connected", user_refs=(0, 1),
        )
        self.user1 = user1
        self.user2 = user2


class SelfConnectionError(NotAllowedError):
    def __init__(self, user: UUID):
        super().__init__(
            "{0} can't connect with themselves!", user,
            error_type="self_connection", user_refs=(0,),
        )
        self.user = user


# ---------------------------------------------------------------------------
# Challenges
# ---------------------------------------------------------------------------


class ChallengeNotFoundError(NotFoundError):
    def __init__(self, challenge_id: UUID):
        super().__init__("Challenge {0} does not exist!", challenge_id, error_type="challenge_not_found")
        self.challenge_id = challenge_id


class NoProposedChallengesError(NotAllowedError):
    def __init__(self):
        super().__init__("No proposed challenges to select from!", error_type="no_proposed_challenges")


class EmptyPromptError(BadValuesError):
    def __init__(self):
        super().__init__("Challenge prompt can't be empty", error_type="empty_prompt")


class ChallengeAlreadyAcceptedError(ConflictError):
    def __init__(self, user: UUID, challenge_id: UUID):
        super().__init__(
            "{0} already accepted challenge {1}", user, challenge_id,
            error_type="challenge_already_accepted", user_refs=(0,),
        )
        self.user = user
        self.challenge_id = challenge_id


class ChallengeNotAcceptedError(NotAllowedError):
    def __init__(self, user: UUID, challenge_id: UUID):
        super().__init__(
            "{0} has not accepted challenge {1}", user, challenge_id,
            error_type="challenge_not_accepted", user_refs=(0,),
        )
        self.user = user
        self.challenge_id = challenge_id


# ---------------------------------------------------------------------------
# Opportunities
# ---------------------------------------------------------------------------


class OpportunityNotFoundError(NotFoundError):
    def __init__(self, opportunity_id: UUID):
        super().__init__(
            "Opportunity ({0}) doesn't exist!", opportunity_id,
            error_type="opportunity_not_found",
        )
        self.opportunity_id = opportunity_id


class NotOpportunityOwnerError(NotAllowedError):
    def __init__(self, user: UUID, opportunity_id: UUID):
        super().__init__(
            "Opportunity ({1}) isn't owned by {0}!", user, opportunity_id,
            error_type="not_opportunity_owner", user_refs=(0,),
        )
        self.user = user
        self.opportunity_id = opportunity_id


class MissingOpportunityFieldsError(BadValuesError):
    def __init__(self):
        super().__init__(
            "missing a required input (one of the following: title, description, start or end date)",
            error_type="missing_opportunity_fields",
        )


class DateRangeError(NotAllowedError):
    def __init__(self, start, end):
        super().__init__(
            "{0} is greater than or equal to {1} which isn't a valid input!", start, end,
            error_type="invalid_date_range",
        )
        self.start = start
        self.end = end


class OpportunityInactiveError(NotAllowedError):
    def __init__(self, opportunity_id: UUID):
        super().__init__(
            "Opportunity ({0}) is no longer accepting applications", opportunity_id,
            error_type="opportunity_inactive",
        )
        self.opportunity_id = opportunity_id


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------


class ApplicationNotFoundError(NotFoundError):
    def __init__(self, application_id: UUID):
        super().__init__(
            "No application with id {0} found", application_id,
            error_type="application_not_found",
        )
        self.application_id = application_id


class SelfApplicationError(NotAllowedError):
    def __init__(self):
        super().__init__(
            "Owners of opportunities can't apply to their own listing",
            error_type="self_application",
        )


class DuplicateApplicationError(ConflictError):
    def __init__(self, user: UUID, opportunity_id: UUID):
        super().__init__(
            "{0} already applied to opportunity {1}", user, opportunity_id,
            error_type="duplicate_application", user_refs=(0,),
        )
        self.user = user
        self.opportunity_id = opportunity_id


class NotApplierError(NotAllowedError):
    def __init__(self, user: UUID):
        super().__init__(
            "{0} withdrawing isn't the applier", user,
            error_type="not_applier", user_refs=(0,),
        )
        self.user = user


class NotApplicationOwnerError(NotAllowedError):
    def __init__(self, user: UUID, new_status: str):
        super().__init__(
            "{0} can't change the status to {1} since they aren't the owner of the opportunity",
            user, new_status,
            error_type="not_application_owner", user_refs=(0,),
        )
        self.user = user
        self.new_status = new_status


class ApplicationAccessError(NotAllowedError):
    def __init__(self, message: str = "Not owner or applier. So can't view application"):
        super().__init__(message, error_type="application_access_denied")


class InvalidStatusTransitionError(ConflictError):
    def __init__(self, current: str, target: str):
        super().__init__(
            "Invalid status transition: '{0}' -> '{1}'", current, target,
            error_type="invalid_status_transition",
        )
        self.current = current
        self.target = target


# ---------------------------------------------------------------------------
# Queues
# ---------------------------------------------------------------------------


class DuplicateQueueError(ConflictError):
    def __init__(self, opportunity_id: UUID):
        super().__init__(
            "A queue for opportunity {0} already exists", opportunity_id,
            error_type="duplicate_queue",
        )
        self.opportunity_id = opportunity_id


class QueueNotFoundError(NotFoundError):
    def __init__(self, opportunity_id: UUID):
        super().__init__(
            "No queue exists for opportunity {0}", opportunity_id,
            error_type="queue_not_found",
        )
        self.opportunity_id = opportunity_id


class NotInQueueError(NotAllowedError):
    def __init__(self, user: UUID, opportunity_id: UUID):
        super().__init__(
            "{0} isn't in the queue for opportunity {1}", user, opportunity_id,
            error_type="not_in_queue", user_refs=(0,),
        )
        self.user = user
        self.opportunity_id = opportunity_id


class NotQueueManagerError(NotAllowedError):
    def __init__(self, user: UUID, opportunity_id: UUID):
        super().__init__(
            "{0} isn't the manager of the queue for opportunity {1}", user, opportunity_id,
            error_type="not_queue_manager", user_refs=(0,),
        )
        self.user = user
        self.opportunity_id = opportunity_id


class QueueExhaustedError(ConflictError):
    def __init__(self, opportunity_id: UUID):
        super().__init__(
            "Everyone in the queue for opportunity {0} has been seen", opportunity_id,
            error_type="queue_exhausted",
        )
        self.opportunity_id = opportunity_id


class InvalidQueueTimingError(BadValuesError):
    def __init__(self, minutes_per_person):
        super().__init__(
            "Time per person must be positive, got {0}", minutes_per_person,
            error_type="invalid_queue_timing",
        )


# ---------------------------------------------------------------------------
# Portfolios
# ---------------------------------------------------------------------------


class PortfolioNotFoundError(NotFoundError):
    def __init__(self, user: UUID):
        super().__init__(
            "{0} doesn't have a portfolio yet", user,
            error_type="portfolio_not_found", user_refs=(0,),
        )
        self.user = user


class HasPortfolioError(ConflictError):
    def __init__(self, user: UUID):
        super().__init__(
            "{0} already has a portfolio! They can't have 2", user,
            error_type="has_portfolio", user_refs=(0,),
        )
        self.user = user


class MediaNotInPortfolioError(BadValuesError):
    def __init__(self, media_id: UUID):
        super().__init__(
            "The media {0} doesn't exist in the media of the portfolio", media_id,
            error_type="media_not_in_portfolio",
        )
        self.media_id = media_id


# ---------------------------------------------------------------------------
# Folders
# ---------------------------------------------------------------------------


class HasPracticeFolderError(ConflictError):
    def __init__(self, user: UUID):
        super().__init__(
            "{0} can't have more than one practice folder", user,
            error_type="has_practice_folder", user_refs=(0,),
        )
        self.user = user


class NoPracticeFolderError(NotFoundError):
    def __init__(self, user: UUID):
        super().__init__(
            "The user {0} doesn't have a practice folder yet", user,
            error_type="no_practice_folder", user_refs=(0,),
        )
        self.user = user


class PracticeFolderFullError(NotAllowedError):
    def __init__(self, capacity: int):
        super().__init__(
            "Practice folder full ({0} items)! Remove before adding more", capacity,
            error_type="practice_folder_full",
        )
        self.capacity = capacity


class NotInFolderError(NotFoundError):
    def __init__(self, item: UUID):
        super().__init__(
            "{0} doesn't exist in the contents of the folder given", item,
            error_type="not_in_folder",
        )
        self.item = item


class RepertoireNotFoundError(NotFoundError):
    def __init__(self, folder_id: UUID):
        super().__init__(
            "There is no repertoire folder with id {0}", folder_id,
            error_type="repertoire_not_found",
        )
        self.folder_id = folder_id


class NotFolderOwnerError(NotAllowedError):
    def __init__(self, user: UUID):
        super().__init__(
            "The user {0} isn't the owner of this folder", user,
            error_type="not_folder_owner", user_refs=(0,),
        )
        self.user = user


class EmptyFolderNameError(BadValuesError):
    def __init__(self):
        super().__init__("Folder name can't be empty", error_type="empty_folder_name")


class InvalidCapacityError(BadValuesError):
    def __init__(self, capacity: int):
        super().__init__(
            "Practice folder capacity must be non-negative, got {0}", capacity,
            error_type="invalid_capacity",
        )
        self.capacity = capacity


def problem_detail(error: ConceptError, message: str | None = None) -> dict[str, Any]:
    """Render a concept error as a problem-details body."""
    return {
        "type": f"https://api.callboard.app/errors/{error.error_type}",
        "title": error.error_type.replace("_", " ").title(),
        "status": error.status_code,
        "detail": message if message is not None else error.message,
        "kind": error.kind,
    }
