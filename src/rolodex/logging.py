"""
structlog setup and per-request log context for Rolodex.

Every module logs through ``get_logger(__name__)``. Request-scoped values
(request id, caller id) live in context variables and are merged into each
event by ``RequestContextFilter``.
"""

import logging
import secrets
import sys
import time
from contextvars import ContextVar
from typing import Any

import structlog
from fastapi import Request

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

# Event key -> context variable
_CONTEXT_FIELDS: dict[str, ContextVar[str | None]] = {
    "request_id": request_id_ctx,
    "user_id": user_id_ctx,
}

_SHARED_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
]

_TRAILING_PROCESSORS: list[Any] = [
    structlog.processors.TimeStamper(fmt="ISO", utc=True),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


class RequestContextFilter:
    """structlog processor that copies the request context into the event."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        _ = logger, method_name
        for key, var in _CONTEXT_FIELDS.items():
            value = var.get()
            if value:
                event_dict.setdefault(key, value)
        return event_dict


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Route stdlib logging to stdout and configure structlog.

    Args:
        debug: Human-readable console output at DEBUG level instead of JSON
        level: Explicit level name; overrides the level implied by ``debug``
    """
    if level:
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, RequestContextFilter(), *_TRAILING_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Short sortable id: hex milliseconds followed by 4 random hex chars."""
    return f"{int(time.time() * 1000):x}{secrets.token_hex(2)}"


def set_request_context(request_id: str | None = None, user_id: str | None = None) -> str:
    """Start a request context and return its request id."""
    request_id = request_id or generate_request_id()
    request_id_ctx.set(request_id)
    if user_id is not None:
        user_id_ctx.set(user_id)
    return request_id


def clear_request_context() -> None:
    for var in _CONTEXT_FIELDS.values():
        var.set(None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


def get_user_id() -> str | None:
    return user_id_ctx.get()


def extract_user_id_from_request(request: Request) -> str | None:
    """Best-effort caller id for log lines, read from the ``X-User-Id`` header.

    Never used for authorization; tokens are verified in the GraphQL layer.
    """
    return request.headers.get("x-user-id") or None
