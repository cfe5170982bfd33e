"""Redis-backed session store.

A logged-in user has exactly one active session id (the JWT ``jti``) stored
under ``session:{user_id}``. Logging out or deleting the account removes it,
which invalidates any token still held by the client.
"""

from uuid import UUID

import redis.asyncio as aioredis

from callboard.logging_config import get_logger

logger = get_logger(__name__)

_redis: aioredis.Redis | None = None


def get_redis() -> aioredis.Redis:
    """Get the shared Redis connection. Must be initialized first via init_redis()."""
    if _redis is None:
        raise RuntimeError("Redis not initialized; call init_redis() first")
    return _redis


async def init_redis(url: str = "redis://localhost:6379/0") -> aioredis.Redis:
    """Initialize the global Redis connection."""
    global _redis
    _redis = aioredis.from_url(url, decode_responses=True)
    await _redis.ping()
    return _redis


async def close_redis() -> None:
    """Close the Redis connection."""
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None


class SessionStore:
    """Tracks the active session id of each user."""

    def __init__(self, redis: aioredis.Redis):
        self.redis = redis

    @staticmethod
    def _key(user_id: UUID | str) -> str:
        return f"session:{user_id}"

    async def start(self, user_id: UUID, session_id: str, ttl_seconds: int) -> None:
        await self.redis.set(self._key(user_id), session_id, ex=ttl_seconds)
        logger.info("session_started", user_id=str(user_id))

    async def is_active(self, user_id: UUID | str, session_id: str) -> bool:
        stored = await self.redis.get(self._key(user_id))
        return stored is not None and stored == session_id

    async def end(self, user_id: UUID) -> None:
        await self.redis.delete(self._key(user_id))
        logger.info("session_ended", user_id=str(user_id))


def get_session_store() -> SessionStore:
    """FastAPI dependency for the session store."""
    return SessionStore(get_redis())
