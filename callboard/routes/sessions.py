"""Session endpoints: who am I, login, logout."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import create_access_token, get_current_user_id, new_session_id
from callboard.concepts import Concepts, get_concepts
from callboard.config import get_settings
from callboard.logging_config import get_logger
from callboard.redis import SessionStore, get_session_store
from callboard.routes.deps import responses
from callboard.schemas import LoginRequest, LoginResponse, MessageResponse

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["sessions"])


@router.get("/session")
async def get_session_user(
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """The logged-in user."""
    return await responses(concepts).user(await concepts.users.get_by_id(user))


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    concepts: Concepts = Depends(get_concepts),
    sessions: SessionStore = Depends(get_session_store),
):
    """Check credentials and start a session, replacing any previous one."""
    user_id = await concepts.users.authenticate(body.email, body.password)
    session_id = new_session_id()
    ttl = get_settings().access_token_expire_minutes * 60
    await sessions.start(user_id, session_id, ttl)

    logger.info("user_login", user_id=str(user_id))
    user = await responses(concepts).user(await concepts.users.get_by_id(user_id))
    return LoginResponse(
        msg="Logged in!",
        access_token=create_access_token(user_id, session_id),
        user=user,
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: UUID = Depends(get_current_user_id),
    sessions: SessionStore = Depends(get_session_store),
):
    """End the session; its token stops working."""
    await sessions.end(user)
    logger.info("user_logout", user_id=str(user))
    return MessageResponse(msg="Logged out!")
