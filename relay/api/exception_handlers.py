from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay.domain.exceptions import RelayInputError

logger = logging.getLogger("relay.completions")


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(RelayInputError)
    async def handle_relay_input_error(request: Request, exc: RelayInputError) -> Response:
        # IMPORTANT: do not log request bodies; the rejection reason is enough.
        logger.info(
            "Relay input rejected",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": status.HTTP_400_BAD_REQUEST,
                "error": exc.message,
            },
        )
        return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
        # Method mismatches answer in plain text, never JSON.
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return PlainTextResponse(
                "Method Not Allowed",
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
                headers=exc.headers,
            )
        return await http_exception_handler(request, exc)
