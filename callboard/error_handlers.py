"""FastAPI exception handlers mapping concept errors to problem-details responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from callboard.concepts.users import UsersConcept
from callboard.database import get_session_factory
from callboard.exceptions import ConceptError, problem_detail
from callboard.logging_config import get_logger

logger = get_logger(__name__)


async def enrich_message(request: Request, error: ConceptError) -> str:
    """Format the message with user names in place of the user ids it mentions."""
    if not error.user_refs:
        return error.message

    factory = getattr(request.app.state, "session_factory", None) or get_session_factory()
    try:
        async with factory() as session:
            ids = [error.refs[i] for i in error.user_refs]
            names = await UsersConcept(session).ids_to_names(ids)
    except SQLAlchemyError:
        logger.warning("error_enrichment_failed", error_type=error.error_type, exc_info=True)
        return error.message

    values = list(error.refs)
    for index, name in zip(error.user_refs, names):
        values[index] = name
    return error.format_with(*values)


async def concept_error_handler(request: Request, exc: ConceptError) -> JSONResponse:
    message = await enrich_message(request, exc)
    logger.warning(
        "concept_error",
        error_type=exc.error_type,
        kind=exc.kind,
        status=exc.status_code,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=problem_detail(exc, message))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """A unique constraint lost a race with a concurrent request."""
    logger.warning("integrity_conflict", path=request.url.path, error=str(exc.orig))
    return JSONResponse(
        status_code=409,
        content={
            "type": "https://api.callboard.app/errors/conflict",
            "title": "Conflict",
            "status": 409,
            "detail": "The request conflicts with a concurrent change; retry it.",
            "kind": "not_allowed",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConceptError, concept_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
