"""Log setup that tags every record with the redemption it belongs to.

``SettlementExecutor`` opens a ``correlation_scope`` per redemption, so the
lines of one attempt (and of any attempt a recipient triggers while it is in
flight) can be grouped by ``redemption_id`` afterwards.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass, replace
from datetime import UTC, datetime

from opentelemetry import trace

from estate.config import LoggingConfig

_FIELDS = ("redemption_id", "offer_kind", "lister")
_TEXT_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s "
    + " ".join(f"{field}=%({field})s" for field in _FIELDS)
    + " trace_id=%(otel_trace_id)s %(message)s"
)


@dataclass(frozen=True, slots=True)
class CorrelationContext:
    redemption_id: str | None = None
    offer_kind: str | None = None
    lister: str | None = None


_CURRENT: contextvars.ContextVar[CorrelationContext] = contextvars.ContextVar(
    "estate_correlation",
    default=CorrelationContext(),
)


def get_correlation_context() -> CorrelationContext:
    return _CURRENT.get()


class CorrelationFilter(logging.Filter):
    """Copy the active correlation fields and OTel trace id onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field, value in asdict(_CURRENT.get()).items():
            setattr(record, field, value)
        span_context = trace.get_current_span().get_span_context()
        record.otel_trace_id = format(span_context.trace_id, "032x") if span_context.trace_id else ""
        return True


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object | None] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _FIELDS:
            payload[field] = getattr(record, field, None)
        payload["trace_id"] = getattr(record, "otel_trace_id", None)
        if record.exc_info is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def setup_logging(config: LoggingConfig) -> None:
    """Replace root handlers with one stdout handler carrying correlation fields."""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.addFilter(CorrelationFilter())
    handler.setFormatter(_JsonFormatter() if config.json_output else logging.Formatter(_TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(config.level)


@contextmanager
def correlation_scope(
    *,
    redemption_id: str | None = None,
    offer_kind: str | None = None,
    lister: str | None = None,
) -> Iterator[None]:
    """Override the given fields for the duration of the block.

    Fields left as ``None`` keep the enclosing scope's value.
    """
    overrides = {
        field: value
        for field, value in zip(_FIELDS, (redemption_id, offer_kind, lister), strict=True)
        if value is not None
    }
    token = _CURRENT.set(replace(_CURRENT.get(), **overrides))
    try:
        yield
    finally:
        _CURRENT.reset(token)


__all__ = [
    "CorrelationContext",
    "CorrelationFilter",
    "correlation_scope",
    "get_correlation_context",
    "setup_logging",
]
