"""Application status state machine.

pending → audition | approved | rejected | withdrawn
audition → approved | rejected | withdrawn
approved, rejected and withdrawn are terminal.
"""

from callboard.exceptions import InvalidStatusTransitionError

PENDING = "pending"
AUDITION = "audition"
APPROVED = "approved"
REJECTED = "rejected"
WITHDRAWN = "withdrawn"

# Statuses only the opportunity owner may set; withdrawn belongs to the applicant.
OWNER_STATUSES = frozenset({AUDITION, APPROVED, REJECTED})

VALID_TRANSITIONS: dict[str, list[str]] = {
    PENDING: [AUDITION, APPROVED, REJECTED, WITHDRAWN],
    AUDITION: [APPROVED, REJECTED, WITHDRAWN],
    APPROVED: [],   # terminal
    REJECTED: [],   # terminal
    WITHDRAWN: [],  # terminal
}


def can_transition(current: str, target: str) -> bool:
    """Check if an application status transition is valid."""
    return target in VALID_TRANSITIONS.get(current, [])


def validate_transition(current: str, target: str) -> None:
    """Raise InvalidStatusTransitionError unless ``current -> target`` is allowed."""
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(current, target)
