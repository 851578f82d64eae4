"""Tests for log formatting."""

import json
import logging

from admin_setup.core import AppError, ConfigurationError, ErrorCode, get_logger, run_context
from admin_setup.core.logging import ConsoleFormatter, StructuredFormatter


def make_record(data=None) -> logging.LogRecord:
    record = logging.LogRecord("admin_setup.test", logging.INFO, __file__, 1, "hello", None, None)
    if data is not None:
        record.data = data
    return record


def test_structured_formatter_includes_run_context():
    token = run_context.set({"run_id": "abc123", "command": "setup-admin-user"})
    try:
        payload = json.loads(StructuredFormatter().format(make_record({"account_id": 1})))
    finally:
        run_context.reset(token)

    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["run_id"] == "abc123"
    assert payload["command"] == "setup-admin-user"
    assert payload["data"] == {"account_id": 1}


def test_console_formatter_without_context():
    line = ConsoleFormatter().format(make_record())

    assert "| - |" in line
    assert line.endswith("hello")


def test_console_formatter_writes_plain_text():
    token = run_context.set({"run_id": "0123456789abcdef", "command": "setup-admin-user"})
    try:
        line = ConsoleFormatter().format(make_record({"account_id": 7}))
    finally:
        run_context.reset(token)

    assert "\033[" not in line
    assert line.split(" | ")[1:] == ["INFO    ", "01234567", "admin_setup.test", "hello", "{'account_id': 7}"]


def test_get_logger_passes_data_through(caplog):
    logger = get_logger("admin_setup.test")

    with caplog.at_level(logging.INFO, logger="admin_setup.test"):
        logger.info("bootstrap", data={"intent": "no_op"})

    assert caplog.records[-1].data == {"intent": "no_op"}


def test_error_report_dict():
    err = ConfigurationError("missing", details={"missing": ["ADMIN_EMAIL"]})

    assert isinstance(err, AppError)
    assert err.to_report().to_dict() == {
        "error": {
            "code": ErrorCode.CONFIGURATION_ERROR.value,
            "message": "missing",
            "details": {"missing": ["ADMIN_EMAIL"]},
        }
    }
