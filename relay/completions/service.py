from __future__ import annotations

import json
from typing import Any, Protocol

from relay.completions.audit import sha256_hex
from relay.completions.schemas import AuditOut, RelayOut
from relay.core.text import to_well_formed
from relay.domain.exceptions import InvalidJSONError, MissingInputError


class CompletionClient(Protocol):
    async def complete(self, *, prompt: str) -> str: ...


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_prompt(body: bytes) -> str:
    """
    Validate a raw request body and return its `input` string.

    Raises InvalidJSONError when the body is not JSON (including empty or non-UTF-8
    bodies) and MissingInputError unless it is an object with a non-empty string `input`.
    NaN/Infinity literals and nesting deep enough to exhaust the recursion limit count
    as invalid JSON. Whitespace-only prompts are accepted; lone surrogates become U+FFFD
    so the prompt can be UTF-8 encoded for hashing and sending.
    """

    try:
        document: Any = json.loads(body, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise InvalidJSONError() from exc

    prompt = document.get("input") if isinstance(document, dict) else None
    if not isinstance(prompt, str) or not prompt:
        raise MissingInputError()
    return to_well_formed(prompt)


class CompletionRelayService:
    def __init__(self, *, llm_client: CompletionClient):
        self._llm = llm_client

    async def relay(self, *, prompt: str, request_id: str) -> RelayOut:
        """Hash the prompt, forward it, hash the reply.

        Upstream errors propagate unchanged; no audit is produced for a failed call.
        """

        input_hash = sha256_hex(prompt)
        reply = await self._llm.complete(prompt=prompt)
        output_hash = sha256_hex(reply)

        return RelayOut(
            reply=reply,
            request_id=request_id,
            audit=AuditOut(input_hash=input_hash, output_hash=output_hash),
        )
