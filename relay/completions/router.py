from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from relay.completions.schemas import RelayIn, RelayOut
from relay.completions.service import CompletionRelayService, parse_prompt
from relay.core.llm.deps import get_openai_client
from relay.core.llm.openai_client import OpenAIError
from relay.core.metrics import record_upstream_outcome
from relay.core.middleware.http_logging import new_request_id

router = APIRouter(tags=["completions"])
logger = logging.getLogger("relay.completions")

UPSTREAM_ERROR_BODY = {"error": "OpenAI error"}


@router.post(
    "/",
    response_model=RelayOut,
    summary="Relay a prompt to the completion model",
    description=(
        "Forward `input` to the upstream chat-completion model as a single user message "
        "and return its reply with an audit record.\n\n"
        "`audit.input_hash` / `audit.output_hash` are SHA-256 digests of the exact UTF-8 "
        "text sent and received. Nothing is stored; `request_id` is only for correlation."
    ),
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": RelayIn.model_json_schema()}},
        }
    },
    responses={
        400: {
            "description": "`Invalid JSON` or `Missing input` (text/plain).",
            "content": {"text/plain": {}},
        },
        405: {"description": "Method Not Allowed (text/plain).", "content": {"text/plain": {}}},
        502: {
            "description": "Upstream call failed; no audit is returned.",
            "content": {"application/json": {"example": UPSTREAM_ERROR_BODY}},
        },
    },
)
async def relay_completion(
    request: Request,
    openai_client=Depends(get_openai_client),
) -> RelayOut | Response:
    """
    Validate -> hash -> forward -> hash -> respond.

    IMPORTANT (privacy):
    - We never log the prompt or the reply, only their hashes.
    - Client input errors are raised as RelayInputError and rendered by the app's
      exception handler as plain text.
    """

    prompt = parse_prompt(await request.body())
    request_id = getattr(request.state, "request_id", None) or new_request_id()

    svc = CompletionRelayService(llm_client=openai_client)
    try:
        result = await svc.relay(prompt=prompt, request_id=request_id)
    except OpenAIError:
        record_upstream_outcome(success=False)
        logger.warning(
            "Completion relay failed (upstream)",
            exc_info=True,
            extra={
                "request_id": request_id,
                "status_code": status.HTTP_502_BAD_GATEWAY,
                "success": False,
            },
        )
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=UPSTREAM_ERROR_BODY)

    record_upstream_outcome(success=True)
    logger.info(
        "Completion relayed",
        extra={
            "request_id": request_id,
            "input_hash": result.audit.input_hash,
            "output_hash": result.audit.output_hash,
            "success": True,
        },
    )
    return result
