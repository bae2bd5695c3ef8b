"""Tests for correlation id propagation into log records."""

import logging

from astra.observability.correlation import (
    CorrelationIdFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from astra.observability.log_utils import safe_log_value


def _record() -> logging.LogRecord:
    return logging.LogRecord("astra.test", logging.INFO, __file__, 1, "msg", None, None)


def test_set_correlation_id_keeps_given_value() -> None:
    assert set_correlation_id("req-1") == "req-1"
    assert get_correlation_id() == "req-1"
    clear_correlation_id()


def test_set_correlation_id_generates_when_missing() -> None:
    generated = set_correlation_id()
    assert generated
    assert get_correlation_id() == generated
    clear_correlation_id()


def test_filter_injects_current_id() -> None:
    set_correlation_id("req-2")
    record = _record()

    assert CorrelationIdFilter().filter(record) is True
    assert record.correlation_id == "req-2"
    clear_correlation_id()


def test_safe_log_value_truncates_long_values() -> None:
    value = safe_log_value("x" * 600, max_length=500)

    assert value.startswith("x" * 500)
    assert "truncated, 600 total" in value
