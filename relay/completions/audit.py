"""Audit fingerprints for relayed prompts and replies."""

from __future__ import annotations

import hashlib


def sha256_hex(text: str) -> str:
    """SHA-256 of the UTF-8 encoding of `text`, as 64 lowercase hex characters.

    Hash exactly what was sent to or received from the upstream: callers must not
    strip, normalize or truncate `text` first.
    """

    return hashlib.sha256(text.encode("utf-8")).hexdigest()
