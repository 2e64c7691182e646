from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from relay.api.exception_handlers import register_exception_handlers
from relay.completions.router import router as completions_router
from relay.core.llm.deps import build_openai_client
from relay.core.logging import setup_logging
from relay.core.metrics import PrometheusMetricsMiddleware, metrics_router
from relay.core.middleware.http_logging import HttpLoggingMiddleware
from relay.core.settings import get_settings

setup_logging()


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Defer settings/env access until application startup so importing the module
        # (e.g. during pytest collection) doesn't require OPENAI_API_KEY.
        settings = get_settings()
        app.state.openai_client = build_openai_client(settings=settings)
        yield

    app = FastAPI(
        title="LLM Audit Relay",
        description=(
            "Single-endpoint relay to an upstream chat-completion model.\n\n"
            "Design principles:\n"
            "- Stateless: nothing about a request outlives its response.\n"
            "- Every successful reply carries SHA-256 fingerprints of the exact input and "
            "output text, plus a per-request UUID for correlation.\n"
            "- Upstream failures surface uniformly as 502; there is no retry.\n"
            "- Logs and metrics carry metadata and hashes only, never prompt or reply text."
        ),
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "completions",
                "description": "Relay a prompt upstream and return the audited reply.",
            },
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "Does not call the upstream model, so it never spends API quota."
        ),
    )
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(metrics_router)
    app.include_router(completions_router)
    return app


app = create_app()
