"""Prometheus metrics for offer redemption.

All metric objects are module-level singletons registered with the default
``prometheus_client`` registry.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import Counter, Gauge, Histogram, generate_latest

REDEMPTIONS_TOTAL = Counter(
    "estate_redemptions_total",
    "Redemption attempts by offer kind and outcome",
    ["kind", "outcome"],
)
REDEMPTION_DURATION_SECONDS = Histogram(
    "estate_redemption_duration_seconds",
    "Redemption processing duration in seconds",
    ["kind"],
)
SETTLED_VALUE_TOTAL = Counter(
    "estate_settled_value_total",
    "Value forwarded to listers, in the smallest currency unit",
    ["kind"],
)
REFUNDED_VALUE_TOTAL = Counter(
    "estate_refunded_value_total",
    "Overpayment returned to callers, in the smallest currency unit",
    ["kind"],
)
CONSUMED_SIGNATURES = Gauge(
    "estate_consumed_signatures",
    "Signatures marked consumed by committed redemptions",
)
metrics_generate_latest = generate_latest

_enabled = True


def set_metrics_enabled(enabled: bool) -> None:
    """Turn recording on or off process-wide; the metric objects stay registered."""
    global _enabled  # noqa: PLW0603
    _enabled = enabled


def metrics_enabled() -> bool:
    return _enabled


def record_settlement(kind: str, settled: int, refunded: int) -> None:
    if not _enabled:
        return
    if settled:
        SETTLED_VALUE_TOTAL.labels(kind=kind).inc(settled)
    if refunded:
        REFUNDED_VALUE_TOTAL.labels(kind=kind).inc(refunded)


def record_consumed_signatures(delta: int) -> None:
    if _enabled:
        CONSUMED_SIGNATURES.inc(delta)


@contextmanager
def observe_redemption(kind: str) -> Iterator[None]:
    """Count the attempt under its outcome and observe its duration.

    The outcome label is ``ok`` or the class name of the error that ended the
    attempt.
    """
    if not _enabled:
        yield
        return

    start = time.monotonic()
    outcome = "ok"
    try:
        yield
    except Exception as exc:
        outcome = type(exc).__name__
        raise
    finally:
        REDEMPTIONS_TOTAL.labels(kind=kind, outcome=outcome).inc()
        REDEMPTION_DURATION_SECONDS.labels(kind=kind).observe(time.monotonic() - start)


__all__ = [
    "CONSUMED_SIGNATURES",
    "REDEMPTIONS_TOTAL",
    "REDEMPTION_DURATION_SECONDS",
    "REFUNDED_VALUE_TOTAL",
    "SETTLED_VALUE_TOTAL",
    "metrics_enabled",
    "metrics_generate_latest",
    "observe_redemption",
    "record_consumed_signatures",
    "record_settlement",
    "set_metrics_enabled",
]
