"""Callboard FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from callboard.config import FolderSettings, get_settings
from callboard.database import close_db, get_session_factory, init_db
from callboard.error_handlers import register_exception_handlers
from callboard.logging_config import RequestContextMiddleware, configure_logging, get_logger
from callboard.redis import close_redis, init_redis
from callboard.services.scheduler_service import start_scheduler, stop_scheduler

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: init DB + Redis + expiry sweep on startup, cleanup on shutdown."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_format == "json")

    # Init database
    logger.info("starting_database_init")
    await init_db()
    app.state.session_factory = get_session_factory()
    app.state.folder_settings = FolderSettings(capacity=settings.practice_folder_capacity)

    # Init Redis
    await init_redis(settings.redis_url)
    logger.info("redis_connected", url=settings.redis_url)

    if settings.scheduler_enabled:
        await start_scheduler(settings.expiry_sweep_interval_minutes)

    logger.info("application_started")
    yield

    # Shutdown
    logger.info("shutting_down")
    await stop_scheduler()
    await close_redis()
    await close_db()
    logger.info("shutdown_complete")


app = FastAPI(
    title="Callboard",
    description="Casting network: posts, connections, opportunities and audition queues",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)

register_exception_handlers(app)

# --- Routers ---
from callboard.routes.applause import router as applause_router  # noqa: E402
from callboard.routes.applications import router as applications_router  # noqa: E402
from callboard.routes.challenges import router as challenges_router  # noqa: E402
from callboard.routes.comments import router as comments_router  # noqa: E402
from callboard.routes.connections import router as connections_router  # noqa: E402
from callboard.routes.folders import router as folders_router  # noqa: E402
from callboard.routes.opportunities import router as opportunities_router  # noqa: E402
from callboard.routes.portfolios import router as portfolios_router  # noqa: E402
from callboard.routes.posts import router as posts_router  # noqa: E402
from callboard.routes.queues import router as queues_router  # noqa: E402
from callboard.routes.restrictions import router as restrictions_router  # noqa: E402
from callboard.routes.sessions import router as sessions_router  # noqa: E402
from callboard.routes.tags import router as tags_router  # noqa: E402
from callboard.routes.users import router as users_router  # noqa: E402
from callboard.routes.votes import router as votes_router  # noqa: E402

app.include_router(sessions_router)
app.include_router(users_router)
app.include_router(posts_router)
app.include_router(comments_router)
app.include_router(tags_router)
app.include_router(votes_router)
app.include_router(connections_router)
app.include_router(challenges_router)
app.include_router(applause_router)
app.include_router(restrictions_router)
app.include_router(opportunities_router)
app.include_router(applications_router)
app.include_router(queues_router)
app.include_router(portfolios_router)
app.include_router(folders_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "callboard"}
