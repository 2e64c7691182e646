from __future__ import annotations

import json
import logging
import sys

from relay.core.logging import JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="relay.completions",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Completion relayed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_tolerates_missing_extras() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert payload["message"] == "Completion relayed"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "relay.completions"
    assert payload["request_id"] is None
    assert payload["input_hash"] is None
    assert "exception" not in payload


def test_formatter_includes_request_and_audit_fields() -> None:
    record = _record(
        request_id="0b5c7a1e-2f3d-4c1b-9a8e-1f2e3d4c5b6a",
        http_method="POST",
        request_path="/",
        status_code=200,
        input_hash="a" * 64,
        output_hash="b" * 64,
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["request_id"] == "0b5c7a1e-2f3d-4c1b-9a8e-1f2e3d4c5b6a"
    assert payload["method"] == "POST"
    assert payload["path"] == "/"
    assert payload["status_code"] == 200
    assert payload["input_hash"] == "a" * 64
    assert payload["output_hash"] == "b" * 64


def test_formatter_renders_exception() -> None:
    try:
        raise ValueError("bad upstream payload")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))

    assert "ValueError: bad upstream payload" in payload["exception"]
