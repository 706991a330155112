from __future__ import annotations

import json
import logging

from estate.core.logging import (
    CorrelationFilter,
    _JsonFormatter,
    correlation_scope,
    get_correlation_context,
)


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_correlation_filter_injects_fields() -> None:
    correlation_filter = CorrelationFilter()
    record = _record()

    with correlation_scope(redemption_id="r-1", offer_kind="sale", lister="0xabc"):
        assert correlation_filter.filter(record) is True

    assert record.redemption_id == "r-1"
    assert record.offer_kind == "sale"
    assert record.lister == "0xabc"


def test_correlation_scope_nested_inherits_and_restores() -> None:
    baseline = get_correlation_context()

    with correlation_scope(redemption_id="outer", offer_kind="sale"):
        outer = get_correlation_context()
        with correlation_scope(redemption_id="inner"):
            inner = get_correlation_context()
            assert inner.redemption_id == "inner"
            assert inner.offer_kind == "sale"
        assert get_correlation_context() == outer

    assert get_correlation_context() == baseline


def test_json_formatter_emits_correlation_fields() -> None:
    record = _record("redeemed")
    with correlation_scope(redemption_id="r-2", offer_kind="rent"):
        CorrelationFilter().filter(record)

    payload = json.loads(_JsonFormatter().format(record))

    assert payload["message"] == "redeemed"
    assert payload["redemption_id"] == "r-2"
    assert payload["offer_kind"] == "rent"
    assert payload["lister"] is None
