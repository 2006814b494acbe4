from __future__ import annotations

import json
import logging

from message_store.utils.logging import JsonFormatter, _json_formatter

EXPECTED_ROWS = 10


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


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.rows = EXPECTED_ROWS
    record.table = "temp"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["rows"] == EXPECTED_ROWS
    assert payload["table"] == "temp"


def test_json_formatter_omits_standard_record_attributes() -> None:
    payload = json.loads(_json_formatter(_record()))

    assert set(payload) == {"level", "logger", "message"}


def test_json_formatter_includes_exception_text() -> None:
    try:
        raise ValueError("bad record")
    except ValueError:
        import sys

        record = logging.LogRecord(
            name="test.logger",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="failed",
            args=(),
            exc_info=sys.exc_info(),
        )

    payload = json.loads(JsonFormatter().format(record))

    assert "ValueError: bad record" in payload["exc_info"]


def test_json_formatter_has_no_special_case_for_a_field_named_extra() -> None:
    record = _record()
    record.extra = {"rows": EXPECTED_ROWS}

    payload = json.loads(_json_formatter(record))

    assert payload["extra"] == {"rows": EXPECTED_ROWS}
    assert "rows" not in payload
