# src/firsthome/adapters/logging_utils.py
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import config

# attributes every LogRecord has; anything else came in through `extra`
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line: event name plus whatever fields were attached."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "env": config.ENV,
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def fields(**kv: Any) -> dict[str, Any]:
    """`extra=` mapping for structured fields: logger.info("event", extra=fields(count=3))."""
    return {k: v for k, v in kv.items() if v is not None}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(config.LOG_LEVEL.upper())
        logger.propagate = False
    return logger
