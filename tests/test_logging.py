"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
import warnings

from dbsession.shared.infrastructure.logging import CustomJsonFormatter, redact_url, setup_logging


def _format(**extra) -> dict:
    formatter = CustomJsonFormatter("%(name)s %(levelname)s %(message)s", environment="staging")
    record = logging.makeLogRecord(
        {"name": "dbsession", "levelname": "DEBUG", "levelno": logging.DEBUG, "msg": "Connection refused", **extra}
    )
    return json.loads(formatter.format(record))


def test_formatter_passes_event_tag_through() -> None:
    payload = _format(event="exception")

    assert payload["message"] == "Connection refused"
    assert payload["event"] == "exception"
    assert payload["environment"] == "staging"
    assert payload["timestamp"]


def test_formatter_redacts_sensitive_fields() -> None:
    payload = _format(password="hunter2", url="mysql+pymysql://app:hunter2@db/app")

    assert payload["password"] == "***REDACTED***"
    assert payload["url"] == "mysql+pymysql://app:***@db/app"


def test_redact_url_leaves_passwordless_urls() -> None:
    assert redact_url("sqlite:///tmp/app.db") == "sqlite:///tmp/app.db"


def test_setup_logging_installs_json_handler() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("DEBUG", "production")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_formatter_builds_on_current_json_module() -> None:
    from pythonjsonlogger.json import JsonFormatter

    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        payload = _format(event="exception")

    assert issubclass(CustomJsonFormatter, JsonFormatter)
    assert payload["event"] == "exception"
