"""Helpers shared by routers: role gate and response wrapper."""

from uuid import UUID

from callboard.concepts import Concepts
from callboard.concepts.restrictions import ACTOR, ADMIN, CASTING_DIRECTOR
from callboard.responses import Responses

_ROLE_LOOKUP = {
    ACTOR: "is_actor",
    CASTING_DIRECTOR: "is_casting_director",
    ADMIN: "is_admin",
}


async def require_role(concepts: Concepts, user: UUID | None, role: str) -> None:
    """Fail unless the (possibly anonymous) caller holds ``role``."""
    flag = None
    if user is not None:
        flag = await getattr(concepts.restrictions, _ROLE_LOOKUP[role])(user)
    concepts.restrictions.check(flag, role)


def responses(concepts: Concepts) -> Responses:
    return Responses(concepts)
