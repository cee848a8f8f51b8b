"""
Request logging middleware
"""

import json
import re
import time
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import (
    clear_request_context,
    extract_user_id_from_request,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

GRAPHQL_PATH = "/graphql"

# Matched as substrings of the lower-cased parameter name
SENSITIVE_KEYS = (
    "password",
    "token",
    "secret",
    "auth",
    "key",
    "jwt",
    "session",
    "cookie",
    "credential",
)

# GraphQL payload parts sent as GET parameters
GRAPHQL_PAYLOAD_PARAMS = ("query", "variables", "extensions")

_OPERATION_RE = re.compile(r"\b(query|mutation)\s+(\w+)")


def sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``params`` with sensitive values replaced by ``[REDACTED]``."""
    return {
        key: "[REDACTED]" if any(s in key.lower() for s in SENSITIVE_KEYS) else value
        for key, value in params.items()
    }


def operation_name_from_payload(data: dict[str, Any]) -> str | None:
    """Name to log for a GraphQL request payload.

    Uses ``operationName`` when given, otherwise the first named operation
    in the document. Mutations are prefixed with ``mutation:``.
    """
    name = data.get("operationName")
    if isinstance(name, str) and name:
        return name

    document = data.get("query")
    if not isinstance(document, str) or not document:
        return None
    if "__schema" in document or "IntrospectionQuery" in document:
        return "__introspection"

    match = _OPERATION_RE.search(document)
    if match is None:
        return "unnamed_operation"
    kind, name = match.groups()
    return f"mutation:{name}" if kind == "mutation" else name


async def _graphql_payload(request: Request) -> dict[str, Any] | None:
    if request.method == "GET":
        return dict(request.query_params)
    if request.method != "POST":
        return None
    try:
        data = json.loads(await request.body() or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


async def extract_graphql_operation_name(request: Request) -> str | None:
    if request.url.path != GRAPHQL_PATH:
        return None
    payload = await _graphql_payload(request)
    return operation_name_from_payload(payload) if payload else None


def _loggable_query_params(request: Request) -> dict[str, Any] | None:
    if not request.query_params:
        return None
    params = sanitize_query_params(dict(request.query_params))
    if request.url.path == GRAPHQL_PATH:
        params.update({k: "[REDACTED]" for k in GRAPHQL_PAYLOAD_PARAMS if k in params})
    return params


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Tag every log line of a request with its request id and log its outcome."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(user_id=extract_user_id_from_request(request))
        started = time.perf_counter()
        operation = await extract_graphql_operation_name(request)

        try:
            logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                query_params=_loggable_query_params(request),
                graphql_operation=operation,
                user_agent=request.headers.get("user-agent"),
                remote_addr=request.client.host if request.client else None,
            )

            response = await call_next(request)
            response.headers["X-Request-Id"] = request_id

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                graphql_operation=operation,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return response

        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                graphql_operation=operation,
                error=str(e),
            )
            raise

        finally:
            clear_request_context()
