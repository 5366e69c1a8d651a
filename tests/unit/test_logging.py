from __future__ import annotations

import json
import logging

from easydb.utils.logging import _json_formatter

EXPECTED_MAX_SIZE = 10


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello %s",
        args=("pool",),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.role = "master"
    record.max_size = EXPECTED_MAX_SIZE

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello pool"
    assert payload["role"] == "master"
    assert payload["max_size"] == EXPECTED_MAX_SIZE
    assert "pathname" not in payload
    assert "args" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"pool": "easydb-slave"}

    payload = json.loads(_json_formatter(record))

    assert payload["pool"] == "easydb-slave"


def test_json_formatter_includes_exception_text() -> None:
    try:
        raise RuntimeError("pool closed")
    except RuntimeError:
        import sys

        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(_json_formatter(record))

    assert "RuntimeError: pool closed" in payload["exc_info"]
