"""HTTP logging middleware.

Design goals:
- Log *metadata only* (no request/response bodies, no query strings, no headers).
- Issue a fresh request id per request and expose it as X-Request-ID.
- Structured logging using the standard library logger `extra` fields.
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("relay.http")

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    """Return a random UUID4 in canonical hyphenated form."""

    return str(uuid.uuid4())


def safe_route_label(request: Request) -> str:
    """Return the matched route template, or "unmatched" so raw paths are never logged."""

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """Log request/response metadata and attach the request id.

    Incoming X-Request-ID headers are ignored: the id doubles as the audit
    request_id and must never be caller-chosen or reused.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = new_request_id()
        started = time.perf_counter()
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - we must log unexpected exceptions with stack trace
            duration_ms = (time.perf_counter() - started) * 1000.0
            logger.exception(
                "Unhandled exception while processing request",
                extra={
                    "request_id": request_id,
                    "http_method": request.method,
                    "request_path": safe_route_label(request),
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000.0
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": safe_route_label(request),
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
