from __future__ import annotations

from fastapi import Request

from relay.core.llm.openai_client import OpenAIClient, OpenAIConfig
from relay.core.settings import Settings


def build_openai_client(*, settings: Settings) -> OpenAIClient:
    """Build the process-wide client from settings (called once at startup)."""

    config = OpenAIConfig(
        api_key=settings.openai_api_key.get_secret_value(),
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        timeout_seconds=float(settings.openai_timeout_seconds),
    )
    return OpenAIClient(config=config)


def get_openai_client(request: Request) -> OpenAIClient:
    """
    Dependency provider for OpenAIClient.

    The client is created in the app lifespan and never mutated afterwards; tests
    replace this provider through `app.dependency_overrides`.
    """

    return request.app.state.openai_client
