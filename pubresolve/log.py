"""Logging setup driven by ``log_level`` / ``log_format`` from config."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

LOGGER_NAME = "pubresolve"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Attributes every LogRecord has; anything else came in through ``extra=``.
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render log records as one compact JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data.update(
            {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}
        )
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, default=str)


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Logger:
    """Install a single stderr handler on the package logger.

    Calling it again replaces the previous handler rather than stacking.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_LEVELS.get(level, logging.INFO))

    for handler in list(logger.handlers):
        if getattr(handler, "_pubresolve", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    handler._pubresolve = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
