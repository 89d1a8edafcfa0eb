"""Structured Logging — JSON formatter and idempotent setup.

Tests cover:
    - Base fields always present; extra fields only when set
    - Exceptions rendered into the `exception` field
    - setup_logging replaces its own handler instead of stacking
"""

import json
import logging
import sys

from crm.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("crm.test", logging.INFO, __file__, 1, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "crm.test"
    assert payload["message"] == "hello"
    assert "request_id" not in payload


def test_json_formatter_extra_fields():
    payload = json.loads(JSONFormatter().format(
        _record(request_id="r1", resource="category", status_code=201),
    ))
    assert payload["request_id"] == "r1"
    assert payload["resource"] == "category"
    assert payload["status_code"] == 201


def test_json_formatter_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord(
            "crm.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info(),
        )
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in payload["exception"]


def test_setup_logging_does_not_stack_handlers():
    setup_logging("INFO", "json")
    setup_logging("DEBUG", "text")
    named = [h for h in logging.root.handlers if h.get_name() == "crm"]
    assert len(named) == 1
    assert logging.root.level == logging.DEBUG
    assert not isinstance(named[0].formatter, JSONFormatter)
