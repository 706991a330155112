"""Span export for redemptions.

Each redemption opens a span named ``estate.redeem.<kind>``. Spans leave the
process only when ``telemetry.endpoint`` is configured; otherwise the global
provider stays OpenTelemetry's default no-op one.
"""

from __future__ import annotations

import logging

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from estate.config import TelemetryConfig

logger = logging.getLogger(__name__)


def init_tracing(config: TelemetryConfig, *, service_name: str = "estate") -> TracerProvider | None:
    """Install an OTLP-exporting provider, or return ``None`` without an endpoint."""
    if not config.endpoint:
        logger.info("span export disabled: no telemetry endpoint")
        return None

    provider = TracerProvider(
        resource=Resource.create(
            {"service.name": service_name, "deployment.environment": config.env},
        )
    )
    try:
        # Shipped in the ``otlp`` extra.
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=config.endpoint, insecure=True))
        )
    except ImportError:
        logger.warning("OTLP exporter unavailable; spans for %s are not exported", config.endpoint)
    else:
        logger.info("exporting spans to %s (env=%s)", config.endpoint, config.env)

    trace.set_tracer_provider(provider)
    return provider


def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)


__all__ = ["get_tracer", "init_tracing"]
