"""Structured Logging — JSON formatter fields and setup."""

import json
import logging

from instance_api.infrastructure import observability
from instance_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "instance_api.test", logging.INFO, __file__, 1, "pulled %s", ("x",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_extra_fields():
    line = JSONFormatter().format(
        _record(instance_id="482913", operation="pull", outcome="pulled"),
    )
    log = json.loads(line)
    assert log["message"] == "pulled x"
    assert log["level"] == "INFO"
    assert log["instance_id"] == "482913"
    assert log["operation"] == "pull"
    assert log["outcome"] == "pulled"
    assert "password" not in log


def test_json_formatter_skips_unknown_extras():
    log = json.loads(JSONFormatter().format(_record(password="secret")))
    assert "password" not in log


def test_setup_logging_replaces_handler():
    level = logging.root.level
    setup_logging("DEBUG", "json")
    first = observability._handler
    setup_logging("WARNING", "text")
    try:
        assert first not in logging.root.handlers
        assert observability._handler in logging.root.handlers
        assert logging.root.level == logging.WARNING
    finally:
        logging.root.removeHandler(observability._handler)
        observability._handler = None
        logging.root.setLevel(level)
