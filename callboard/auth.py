"""Password hashing, JWT sessions and the FastAPI identity dependencies."""

import secrets
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from fastapi import Depends, Request
from passlib.hash import pbkdf2_sha256

from callboard.config import get_settings
from callboard.exceptions import NotLoggedInError
from callboard.logging_config import bind_request_context, get_logger
from callboard.redis import SessionStore, get_session_store

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pbkdf2_sha256.verify(password, password_hash)


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------


def new_session_id() -> str:
    return secrets.token_urlsafe(16)


def create_access_token(user_id: UUID | str, session_id: str) -> str:
    """Create a JWT access token bound to one session id."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {"sub": str(user_id), "jti": session_id, "exp": expire, "type": "access"}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_jwt(token: str) -> dict:
    """Decode and validate a JWT token. Raises NotLoggedInError on failure."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("token_expired")
        raise NotLoggedInError()
    except jwt.InvalidTokenError:
        logger.info("token_invalid")
        raise NotLoggedInError()


def _bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header.removeprefix("Bearer ").strip()
    return token or None


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


async def get_current_user_id(
    request: Request,
    sessions: SessionStore = Depends(get_session_store),
) -> UUID:
    """
    FastAPI dependency: resolve the caller's session into a user id.

    The token must decode and its ``jti`` must still be the active session
    of its user; otherwise the caller is treated as logged out.
    """
    token = _bearer_token(request)
    if token is None:
        raise NotLoggedInError()

    payload = decode_jwt(token)
    if payload.get("type") != "access":
        raise NotLoggedInError()

    user_id, session_id = payload.get("sub"), payload.get("jti")
    if not user_id or not session_id:
        raise NotLoggedInError()

    if not await sessions.is_active(user_id, session_id):
        raise NotLoggedInError()

    bind_request_context(user_id=user_id)
    return UUID(user_id)


async def get_current_user_id_optional(
    request: Request,
    sessions: SessionStore = Depends(get_session_store),
) -> UUID | None:
    """Optional variant: returns None instead of failing when logged out."""
    if _bearer_token(request) is None:
        return None
    try:
        return await get_current_user_id(request, sessions)
    except NotLoggedInError:
        return None
