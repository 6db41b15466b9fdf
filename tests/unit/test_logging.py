from __future__ import annotations

import datetime as dt
import json
import logging

from budget_update.utils.logging import JsonFormatter, _json_formatter, configure_logging

EXPECTED_ROWS = 12
EXPECTED_LINE = 7


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_extra_fields() -> None:
    record = _record()
    record.rows = EXPECTED_ROWS
    record.destination_id = "sheet-jan"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["rows"] == EXPECTED_ROWS
    assert payload["destination_id"] == "sheet-jan"
    assert "pathname" not in payload


def test_json_formatter_supports_nested_extra_field() -> None:
    record = _record()
    record.extra = {"line": EXPECTED_LINE}

    payload = json.loads(_json_formatter(record))

    assert payload["line"] == EXPECTED_LINE
    assert "extra" not in payload


def test_json_formatter_stringifies_dates() -> None:
    record = _record()
    record.start = dt.date(2018, 1, 1)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["start"] == "2018-01-01"


def test_configure_logging_sets_root_level_and_formatter() -> None:
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        configure_logging(level="debug", json_logs=True)
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
