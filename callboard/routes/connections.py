"""Connection and connection-request endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.exceptions import UserNotFoundError
from callboard.responses import row_to_dict
from callboard.routes.deps import responses

router = APIRouter(prefix="/api/connections", tags=["connections"])


@router.get("")
async def list_connections(
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    return await responses(concepts).connections(await concepts.connections.get_connections(user))


@router.get("/requests")
async def list_requests(
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """Pending requests, both received and sent."""
    received = await concepts.connections.get_requests(user)
    sent = await concepts.connections.get_sent_requests(user)
    return {
        "received": await responses(concepts).connection_requests(received),
        "sent": await responses(concepts).connection_requests(sent),
    }


@router.post("/requests/{to_user}", status_code=201)
async def send_request(
    to_user: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    if not await concepts.users.exists(to_user):
        raise UserNotFoundError(to_user)
    request = await concepts.connections.send_request(user, to_user)
    await concepts.session.commit()
    return {"msg": "Sent request!", "request": row_to_dict(request)}


@router.delete("/requests/{to_user}")
async def remove_request(
    to_user: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await concepts.connections.remove_request(user, to_user)
    await concepts.session.commit()
    return {"msg": "Removed request!"}


@router.patch("/accept/{from_user}")
async def accept_request(
    from_user: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """Accept a pending request sent to the caller. Both sides gain applause."""
    await concepts.connections.accept_request(from_user, user)
    await concepts.applause.award("connection_accepted", from_user, user)
    await concepts.session.commit()
    return {"msg": "Accepted request!"}


@router.patch("/reject/{from_user}")
async def reject_request(
    from_user: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await concepts.connections.reject_request(from_user, user)
    await concepts.session.commit()
    return {"msg": "Rejected request!"}


@router.delete("/{other}")
async def remove_connection(
    other: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await concepts.connections.remove_connection(user, other)
    await concepts.applause.award("connection_removed", user, other)
    await concepts.session.commit()
    return {"msg": "Connection removed!"}
