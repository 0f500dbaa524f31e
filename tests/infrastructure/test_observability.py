"""JSON log formatter — base fields, extras and exceptions."""

import json
import logging

from projects_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", **extra):
    record = logging.LogRecord(
        "projects_api.test", logging.WARNING, __file__, 1, msg, None, None,
    )
    record.__dict__.update(extra)
    return record


def test_formats_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "projects_api.test"
    assert log["message"] == "hello"
    assert "timestamp" in log


def test_includes_known_extras_only_when_present():
    log = json.loads(JSONFormatter().format(
        _record(project_title="alpha", error_code="RESOURCE_NOT_FOUND", unrelated="x"),
    ))
    assert log["project_title"] == "alpha"
    assert log["error_code"] == "RESOURCE_NOT_FOUND"
    assert "unrelated" not in log
    assert "operation" not in log


def test_setup_logging_replaces_its_own_handler():
    first = setup_logging("DEBUG", "json")
    second = setup_logging("INFO", "text")
    try:
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert logging.root.level == logging.INFO
    finally:
        logging.root.removeHandler(second)
