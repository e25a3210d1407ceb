"""
Tests for the JSON log formatter.
"""

import json
import logging

from app.core.logging_config import CustomJsonFormatter


def format_record(level, message="Created application 1"):
    formatter = CustomJsonFormatter(
        '%(timestamp)s %(level)s %(logger)s %(module)s %(funcName)s %(message)s'
    )
    record = logging.LogRecord(
        name="app.api.endpoints.applications",
        level=level,
        pathname="applications.py",
        lineno=42,
        msg=message,
        args=(),
        exc_info=None,
        func="submit_application",
    )
    return json.loads(formatter.format(record))


def test_info_record_fields():
    entry = format_record(logging.INFO)

    assert entry["message"] == "Created application 1"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "app.api.endpoints.applications"
    assert entry["funcName"] == "submit_application"
    assert entry["timestamp"]
    assert "line" not in entry


def test_warning_record_includes_source_location():
    entry = format_record(logging.WARNING, "Error deleting file")

    assert entry["line"] == 42
    assert entry["pathname"] == "applications.py"
