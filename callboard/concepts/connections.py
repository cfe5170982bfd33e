"""Connections between users and the requests that create them.

A request for an ordered pair moves ``pending -> accepted | rejected``. Only
pending requests block new ones, so a rejection never prevents asking again.
Connections are symmetric and stored once per unordered pair.
"""

from uuid import UUID

from sqlalchemy import and_, delete, or_, select

from callboard.concepts.base import BaseConcept
from callboard.exceptions import (
    AlreadyConnectedError,
    ConnectionNotFoundError,
    ConnectionRequestExistsError,
    ConnectionRequestNotFoundError,
    SelfConnectionError,
)
from callboard.logging_config import get_logger
from callboard.models import Connection, ConnectionRequest

logger = get_logger(__name__)

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"


def _ordered(a: UUID, b: UUID) -> tuple[UUID, UUID]:
    return (a, b) if str(a) < str(b) else (b, a)


class ConnectionConcept(BaseConcept):
    """Handles connection requests and the connections they produce."""

    # ==========================================
    # REQUESTS
    # ==========================================

    async def send_request(self, from_user: UUID, to_user: UUID) -> ConnectionRequest:
        if from_user == to_user:
            raise SelfConnectionError(from_user)
        if await self.are_connected(from_user, to_user):
            raise AlreadyConnectedError(from_user, to_user)
        pending = await self._first(
            select(ConnectionRequest).where(
                ConnectionRequest.status == PENDING,
                or_(
                    and_(ConnectionRequest.from_user == from_user, ConnectionRequest.to_user == to_user),
                    and_(ConnectionRequest.from_user == to_user, ConnectionRequest.to_user == from_user),
                ),
            )
        )
        if pending is not None:
            raise ConnectionRequestExistsError(from_user, to_user)

        request = await self._create(
            ConnectionRequest, from_user=from_user, to_user=to_user, status=PENDING
        )
        logger.info("connection_request_sent", from_user=str(from_user), to_user=str(to_user))
        return request

    async def accept_request(self, from_user: UUID, to_user: UUID) -> Connection:
        """Replace the pending request with an accepted one and connect the pair."""
        await self._pop_pending(from_user, to_user)
        await self._create(ConnectionRequest, from_user=from_user, to_user=to_user, status=ACCEPTED)
        user1, user2 = _ordered(from_user, to_user)
        connection = await self._create(Connection, user1=user1, user2=user2)
        logger.info("connection_request_accepted", from_user=str(from_user), to_user=str(to_user))
        return connection

    async def reject_request(self, from_user: UUID, to_user: UUID) -> ConnectionRequest:
        await self._pop_pending(from_user, to_user)
        request = await self._create(
            ConnectionRequest, from_user=from_user, to_user=to_user, status=REJECTED
        )
        logger.info("connection_request_rejected", from_user=str(from_user), to_user=str(to_user))
        return request

    async def remove_request(self, from_user: UUID, to_user: UUID) -> None:
        await self._pop_pending(from_user, to_user)
        logger.info("connection_request_removed", from_user=str(from_user), to_user=str(to_user))

    async def get_requests(self, user: UUID) -> list[ConnectionRequest]:
        """Pending requests sent to ``user``."""
        return await self._all(
            select(ConnectionRequest)
            .where(ConnectionRequest.to_user == user, ConnectionRequest.status == PENDING)
            .order_by(ConnectionRequest.created_at)
        )

    async def get_sent_requests(self, user: UUID) -> list[ConnectionRequest]:
        """Pending requests sent by ``user``."""
        return await self._all(
            select(ConnectionRequest)
            .where(ConnectionRequest.from_user == user, ConnectionRequest.status == PENDING)
            .order_by(ConnectionRequest.created_at)
        )

    # ==========================================
    # CONNECTIONS
    # ==========================================

    async def get_connections(self, user: UUID) -> list[UUID]:
        """The other party of every connection touching ``user``."""
        connections = await self._all(
            select(Connection)
            .where(or_(Connection.user1 == user, Connection.user2 == user))
            .order_by(Connection.created_at)
        )
        return [c.user2 if c.user1 == user else c.user1 for c in connections]

    async def are_connected(self, a: UUID, b: UUID) -> bool:
        return await self._find_connection(a, b) is not None

    async def remove_connection(self, a: UUID, b: UUID) -> None:
        connection = await self._find_connection(a, b)
        if connection is None:
            raise ConnectionNotFoundError(a, b)
        await self._delete(connection)
        logger.info("connection_removed", user1=str(a), user2=str(b))

    async def delete_user(self, user: UUID) -> list[UUID]:
        """Drop every connection and request of ``user``; returns former connections."""
        others = await self.get_connections(user)
        await self.session.execute(
            delete(Connection).where(or_(Connection.user1 == user, Connection.user2 == user))
        )
        await self.session.execute(
            delete(ConnectionRequest).where(
                or_(ConnectionRequest.from_user == user, ConnectionRequest.to_user == user)
            )
        )
        await self.session.flush()
        logger.info("connections_deleted_for_user", user=str(user), connections=len(others))
        return others

    async def _find_connection(self, a: UUID, b: UUID) -> Connection | None:
        user1, user2 = _ordered(a, b)
        return await self._first(
            select(Connection).where(Connection.user1 == user1, Connection.user2 == user2)
        )

    async def _pop_pending(self, from_user: UUID, to_user: UUID) -> None:
        request = await self._first(
            select(ConnectionRequest).where(
                ConnectionRequest.from_user == from_user,
                ConnectionRequest.to_user == to_user,
                ConnectionRequest.status == PENDING,
            )
        )
        if request is None:
            raise ConnectionRequestNotFoundError(from_user, to_user)
        await self._delete(request)
