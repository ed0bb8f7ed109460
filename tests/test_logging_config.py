from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("services.sanitizer", logging.INFO, __file__, 1, "Sanitized", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    message = formatter.format(_record(reading_count=3, dropped_count=1, unrelated="x"))

    assert message == "Sanitized | reading_count=3 dropped_count=1"


def test_formatter_skips_missing_and_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["window", "variable"])

    assert formatter.format(_record(window=None)) == "Sanitized"
    assert formatter.format(_record(variable="co2")) == "Sanitized | variable=co2"
