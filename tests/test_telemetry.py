"""Tests for estate.core.telemetry."""

from __future__ import annotations

from unittest.mock import patch

from opentelemetry.sdk.trace import TracerProvider

from estate.config import TelemetryConfig
from estate.core.telemetry import get_tracer, init_tracing


class TestInitTracing:
    def test_no_endpoint_installs_nothing(self) -> None:
        assert init_tracing(TelemetryConfig()) is None

    def test_empty_endpoint_installs_nothing(self) -> None:
        assert init_tracing(TelemetryConfig(endpoint="")) is None

    def test_resource_carries_service_and_env(self) -> None:
        with patch("estate.core.telemetry.BatchSpanProcessor"):
            provider = init_tracing(
                TelemetryConfig(endpoint="localhost:4317", env="test"),
                service_name="estate-test",
            )

        assert isinstance(provider, TracerProvider)
        attributes = provider.resource.attributes
        assert attributes["service.name"] == "estate-test"
        assert attributes["deployment.environment"] == "test"
        provider.shutdown()

    def test_missing_exporter_still_returns_provider(self) -> None:
        with patch(
            "estate.core.telemetry.BatchSpanProcessor",
            side_effect=ImportError("no grpc"),
        ):
            provider = init_tracing(TelemetryConfig(endpoint="localhost:4317"))

        assert isinstance(provider, TracerProvider)
        provider.shutdown()


def test_get_tracer_returns_tracer() -> None:
    assert get_tracer("estate.test") is not None
