"""Tests for pubresolve.log."""

import json
import logging

from pubresolve.log import LOGGER_NAME, JsonFormatter, configure_logging


def _record(msg="hello %s", args=("world",), **extra):
    record = logging.LogRecord(
        name="pubresolve.resolve.plan",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_basic_fields():
    data = json.loads(JsonFormatter().format(_record()))
    assert data["message"] == "hello world"
    assert data["level"] == "INFO"
    assert data["logger"] == "pubresolve.resolve.plan"
    assert "timestamp" in data


def test_json_formatter_includes_extras():
    data = json.loads(JsonFormatter().format(_record(service="netlify", target_id="abc")))
    assert data["service"] == "netlify"
    assert data["target_id"] == "abc"
    assert "lineno" not in data


def test_configure_logging_sets_level():
    logger = configure_logging("warn", "text")
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.WARNING


def test_configure_logging_does_not_stack_handlers():
    configure_logging("info", "text")
    logger = configure_logging("debug", "json")
    ours = [h for h in logger.handlers if getattr(h, "_pubresolve", False)]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JsonFormatter)
