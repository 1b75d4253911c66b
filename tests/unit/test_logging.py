from __future__ import annotations

import json
import logging

from fixedcol.utils.logging import ConsoleFormatter, JsonFormatter, _json_formatter, configure_logging, get_logger

EXPECTED_ROWS = 3


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
    record.backend = "postgres"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["rows"] == EXPECTED_ROWS
    assert payload["backend"] == "postgres"
    assert "lineno" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"column_type": "BYTEA"}

    payload = json.loads(_json_formatter(record))

    assert payload["column_type"] == "BYTEA"


def test_json_formatter_stringifies_unknown_types() -> None:
    record = _record()
    record.value = b"\x00"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["value"] == "b'\\x00'"


def test_configure_logging_sets_root_level() -> None:
    configure_logging(level="DEBUG", json_logs=True)
    root = get_logger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    configure_logging(level="INFO")
    assert get_logger().level == logging.INFO


def test_console_formatter_appends_extra_fields() -> None:
    record = _record("identifier decode failed")
    record.backend = "mysql"
    record.column_type = "BINARY(20)"

    line = ConsoleFormatter().format(record)

    assert "| INFO | test.logger | identifier decode failed" in line
    assert line.endswith("backend=mysql column_type=BINARY(20)")


def test_console_formatter_without_extra_fields() -> None:
    line = ConsoleFormatter().format(_record())
    assert line.endswith("| test.logger | hello")


def test_driver_loggers_stay_quiet_unless_debug() -> None:
    configure_logging(level="INFO")
    assert logging.getLogger("psycopg").level == logging.WARNING
    configure_logging(level="debug")
    assert logging.getLogger("psycopg").level == logging.DEBUG
    assert get_logger().level == logging.DEBUG
    configure_logging(level="INFO")


def test_configure_logging_respects_existing_handlers_without_force() -> None:
    configure_logging(level="WARNING")
    configure_logging(level="DEBUG", force=False)
    assert get_logger().level == logging.WARNING
    configure_logging(level="INFO")
