"""Tests for structured log output and request correlation."""

import json
import logging

from aqar_backend.core.logging import RequestIdFilter, get_logger, set_request_id
from aqar_backend.core.logging.structured_logger import SERVICE_NAME, build_formatter


def make_record(message: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="aqar_backend.modules.records.services",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


def test_json_records_carry_request_id_and_service():
    set_request_id("req-42")
    record = make_record("Saving 3 item(s) to units")
    RequestIdFilter().filter(record)

    payload = json.loads(build_formatter(use_json_format=True).format(record))

    assert payload["message"] == "Saving 3 item(s) to units"
    assert payload["request_id"] == "req-42"
    assert payload["level"] == "INFO"
    assert payload["service"] == SERVICE_NAME


def test_text_format_includes_request_id():
    set_request_id("req-7")
    record = make_record("Deleted exp-1 from expenses")
    RequestIdFilter().filter(record)

    line = build_formatter(use_json_format=False).format(record)

    assert "req-7" in line
    assert "Deleted exp-1 from expenses" in line


def test_get_logger_namespaces_under_the_package():
    assert get_logger("scripts.seed").name == "aqar_backend.scripts.seed"
    assert get_logger("aqar_backend.main").name == "aqar_backend.main"
    assert get_logger().name == "aqar_backend"
