"""Structured Logging — JSON lines with request extras."""

import json
import logging

from sanitas.infrastructure.observability import JSONFormatter, request_extra


def test_json_formatter_includes_request_extras():
    record = logging.LogRecord(
        "sanitas.test", logging.INFO, __file__, 1, "Querying DB...", None, None,
    )
    for key, value in request_extra("req-9", "check-cui", status_code=200).items():
        setattr(record, key, value)

    line = json.loads(JSONFormatter().format(record))

    assert line["message"] == "Querying DB..."
    assert line["request_id"] == "req-9"
    assert line["endpoint"] == "check-cui"
    assert line["status_code"] == 200


def test_json_formatter_skips_absent_extras():
    record = logging.LogRecord(
        "sanitas.test", logging.WARNING, __file__, 1, "hi", None, None,
    )

    line = json.loads(JSONFormatter().format(record))

    assert "request_id" not in line
    assert line["level"] == "WARNING"
