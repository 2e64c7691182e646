"""Centralized logging configuration.

The relay handles arbitrary user prompts, so logs carry metadata only:
- Structured logs (JSON) to stdout for centralized collection (Docker/K8s/etc.)
- No prompt text, reply text, headers or credentials; audit hashes are fine to log
- Extra fields are optional; the formatter must never raise due to missing keys
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
from datetime import UTC, datetime
from typing import Any


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class JsonFormatter(logging.Formatter):
    """Emit JSON logs while safely handling missing `extra` fields.

    Third-party records (uvicorn, httpx) never carry our extras, so every field is
    read with `getattr(..., None)` instead of a `'%(request_id)s'`-style format string.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
            "method": getattr(record, "http_method", None),
            "path": getattr(record, "request_path", None),
            "status_code": getattr(record, "status_code", None),
            "duration_ms": getattr(record, "duration_ms", None),
            # Audit correlation (completion records only)
            "input_hash": getattr(record, "input_hash", None),
            "output_hash": getattr(record, "output_hash", None),
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


def setup_logging() -> None:
    """Configure application logging (JSON to stdout)."""

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": "relay.core.logging.JsonFormatter",
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {
                "level": LOG_LEVEL,
                "handlers": ["default"],
            },
            "loggers": {
                # httpx logs full request URLs at INFO; keep upstream chatter out of the stream.
                "httpx": {"level": "WARNING"},
            },
        }
    )
