import json
import logging

from firsthome.adapters.logging_utils import JsonLogFormatter, fields


def _record(msg, **extra):
    logger = logging.getLogger("firsthome.test")
    return logger.makeRecord("firsthome.test", logging.INFO, __file__, 1, msg, None, None, extra=extra)


def test_formatter_emits_event_and_attached_fields():
    line = JsonLogFormatter().format(_record("matches_found", **fields(source="catalog", count=2, error=None)))
    payload = json.loads(line)

    assert payload["event"] == "matches_found"
    assert payload["level"] == "INFO"
    assert payload["source"] == "catalog"
    assert payload["count"] == 2
    assert "error" not in payload
    assert "lineno" not in payload
