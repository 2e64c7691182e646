from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from relay.core.text import to_well_formed

# Sampling temperature is part of the relay contract, not a tunable.
CHAT_TEMPERATURE = 0.2


class OpenAIError(Exception):
    """Base error for OpenAI client failures (safe to map to 502)."""


class OpenAIUpstreamError(OpenAIError):
    """Raised when the OpenAI call fails, times out or returns a non-success status."""


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str = field(repr=False)
    base_url: str
    model: str
    timeout_seconds: float


def extract_reply_text(data: Any) -> str:
    """Return `choices[0].message.content`, or "" when any level of the path is missing."""

    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return to_well_formed(content) if isinstance(content, str) else ""


class OpenAIClient:
    """
    Minimal OpenAI chat-completions client for single-turn relaying.

    Design notes:
    - No logging in this module (prompts/replies are user content).
    - One request per call: no retry, batching or caching.
    - Returns the reply text exactly as received so callers can hash it.
    """

    def __init__(
        self,
        *,
        config: OpenAIConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @property
    def model(self) -> str:
        return self._config.model

    async def complete(self, *, prompt: str) -> str:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": self._config.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": CHAT_TEMPERATURE,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise OpenAIUpstreamError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise OpenAIUpstreamError("LLM request failed") from exc

        if not resp.is_success:
            # Avoid leaking upstream details to callers; map to generic 502 at the edge.
            raise OpenAIUpstreamError(f"LLM service returned status {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise OpenAIUpstreamError("LLM response was not valid JSON") from exc

        return extract_reply_text(data)
