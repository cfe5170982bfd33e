"""Unit tests for connection requests and connections."""

from uuid import uuid4

import pytest

from callboard.exceptions import (
    AlreadyConnectedError,
    ConnectionNotFoundError,
    ConnectionRequestExistsError,
    ConnectionRequestNotFoundError,
    NotAllowedError,
    SelfConnectionError,
)


class TestRequests:
    @pytest.mark.asyncio
    async def test_send_and_list(self, concepts):
        a, b = uuid4(), uuid4()
        await concepts.connections.send_request(a, b)
        assert [r.from_user for r in await concepts.connections.get_requests(b)] == [a]
        assert [r.to_user for r in await concepts.connections.get_sent_requests(a)] == [b]

    @pytest.mark.asyncio
    async def test_self_request(self, concepts):
        a = uuid4()
        with pytest.raises(SelfConnectionError):
            await concepts.connections.send_request(a, a)

    @pytest.mark.asyncio
    async def test_pending_in_either_direction_blocks(self, concepts):
        a, b = uuid4(), uuid4()
        await concepts.connections.send_request(a, b)
        with pytest.raises(ConnectionRequestExistsError):
            await concepts.connections.send_request(a, b)
        with pytest.raises(ConnectionRequestExistsError):
            await concepts.connections.send_request(b, a)

    @pytest.mark.asyncio
    async def test_accept_requires_pending(self, concepts):
        with pytest.raises(ConnectionRequestNotFoundError):
            await concepts.connections.accept_request(uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_remove_request(self, concepts):
        a, b = uuid4(), uuid4()
        await concepts.connections.send_request(a, b)
        await concepts.connections.remove_request(a, b)
        assert await concepts.connections.get_requests(b) == []
        with pytest.raises(ConnectionRequestNotFoundError):
            await concepts.connections.remove_request(a, b)

    @pytest.mark.asyncio
    async def test_reject_then_request_again(self, concepts):
        a, b = uuid4(), uuid4()
        await concepts.connections.send_request(a, b)
        rejected = await concepts.connections.reject_request(a, b)
        assert rejected.status == "rejected"
        assert await concepts.connections.are_connected(a, b) is False

        fresh = await concepts.connections.send_request(a, b)
        assert fresh.status == "pending"
        assert [r.id for r in await concepts.connections.get_requests(b)] == [fresh.id]


class TestConnections:
    @pytest.mark.asyncio
    async def test_accept_connects_both_ways(self, concepts):
        a, b = uuid4(), uuid4()
        await concepts.connections.send_request(a, b)
        await concepts.connections.accept_request(a, b)
        assert b in await concepts.connections.get_connections(a)
        assert a in await concepts.connections.get_connections(b)
        assert await concepts.connections.get_requests(b) == []

    @pytest.mark.asyncio
    async def test_request_after_connecting_fails(self, concepts):
        a, b = uuid4(), uuid4()
        await concepts.connections.send_request(a, b)
        await concepts.connections.accept_request(a, b)
        with pytest.raises(AlreadyConnectedError):
            await concepts.connections.send_request(a, b)
        with pytest.raises(NotAllowedError):
            await concepts.connections.send_request(b, a)

    @pytest.mark.asyncio
    async def test_remove_by_either_ordering(self, concepts):
        a, b = uuid4(), uuid4()
        await concepts.connections.send_request(a, b)
        await concepts.connections.accept_request(a, b)
        await concepts.connections.remove_connection(b, a)
        assert await concepts.connections.get_connections(a) == []

    @pytest.mark.asyncio
    async def test_remove_missing(self, concepts):
        with pytest.raises(ConnectionNotFoundError):
            await concepts.connections.remove_connection(uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_delete_user_returns_former_connections(self, concepts):
        a, b, c = uuid4(), uuid4(), uuid4()
        await concepts.connections.send_request(a, b)
        await concepts.connections.accept_request(a, b)
        await concepts.connections.send_request(c, a)

        assert await concepts.connections.delete_user(a) == [b]
        assert await concepts.connections.get_connections(b) == []
        assert await concepts.connections.get_sent_requests(c) == []
