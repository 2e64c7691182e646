from __future__ import annotations

from pydantic import BaseModel, Field

_SHA256_HEX_PATTERN = r"^[0-9a-f]{64}$"


class RelayIn(BaseModel):
    """
    Documented request body for `POST /`.

    The route parses the raw body itself so that malformed JSON and a bad `input`
    field produce the plain-text 400s clients expect instead of a 422; this model
    only feeds the OpenAPI schema.
    """

    input: str = Field(min_length=1, description="Prompt forwarded to the model as a user message.")


class AuditOut(BaseModel):
    input_hash: str = Field(
        pattern=_SHA256_HEX_PATTERN,
        description="SHA-256 (hex) of the UTF-8 prompt exactly as sent upstream.",
    )
    output_hash: str = Field(
        pattern=_SHA256_HEX_PATTERN,
        description="SHA-256 (hex) of the UTF-8 reply exactly as received from upstream.",
    )


class RelayOut(BaseModel):
    reply: str = Field(description="First choice message content; empty when upstream sent none.")
    request_id: str = Field(description="Random UUID4 issued for this request only.")
    audit: AuditOut
