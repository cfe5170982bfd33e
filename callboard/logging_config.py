"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any
from uuid import uuid4

import structlog


def configure_logging(
    level: str = "INFO",
    json_format: bool = True,
    service_name: str = "callboard",
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, output JSON; if False, output colored console format
        service_name: Name of the service for log context
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_format:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None = None,
    user_id: str | None = None,
    **kwargs: Any,
) -> None:
    """Bind request context to all subsequent log entries."""
    context = {}
    if request_id:
        context["request_id"] = request_id
    if user_id:
        context["user_id"] = user_id
    context.update(kwargs)
    structlog.contextvars.bind_contextvars(**context)


def clear_request_context() -> None:
    """Drop request-scoped keys, keeping the service binding."""
    structlog.contextvars.unbind_contextvars("request_id", "user_id", "method", "path")


class RequestContextMiddleware:
    """ASGI middleware binding a request id and path to every log line of a request."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        request_id = headers.get(b"x-request-id", b"").decode() or uuid4().hex
        bind_request_context(
            request_id,
            method=scope.get("method"),
            path=scope.get("path"),
        )
        try:
            await self.app(scope, receive, send)
        finally:
            clear_request_context()
