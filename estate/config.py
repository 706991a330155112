from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from estate.models.domain import SigningDomain
from estate.models.types import ZERO_ADDRESS, Address


class DomainConfig(BaseModel):
    """Signing-domain inputs plus the registry's display metadata.

    ``verifying_contract`` is the address of this marketplace instance; it also
    holds attached payments while a redemption settles.
    """

    name: str = "Test Estate Contract"
    symbol: str = "TEC"
    version: str = "1.0.0"
    chain_id: int = Field(default=31337, ge=0)
    verifying_contract: Address = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

    def signing_domain(self) -> SigningDomain:
        return SigningDomain(
            name=self.name,
            version=self.version,
            chain_id=self.chain_id,
            verifying_contract=self.verifying_contract,
        )


class RoyaltyConfig(BaseModel):
    receiver: Address = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
    fraction_bps: int = Field(default=500, ge=0, le=10_000)

    @field_validator("receiver")
    @classmethod
    def _reject_zero_receiver(cls, value: str) -> str:
        if value == ZERO_ADDRESS:
            raise ValueError("royalty.receiver must not be the zero address")
        return value


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class TelemetryConfig(BaseModel):
    """OpenTelemetry tracing configuration."""

    endpoint: str | None = None
    env: str = "dev"


class ObservabilityConfig(BaseModel):
    metrics_enabled: bool = True


class EstateSettings(BaseSettings):
    owner: Address = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
    domain: DomainConfig = Field(default_factory=DomainConfig)
    royalty: RoyaltyConfig = Field(default_factory=RoyaltyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = SettingsConfigDict(
        env_prefix="ESTATE_",
        env_nested_delimiter="__",
        extra="ignore",
    )


def _coerce_env_value(value: str) -> object:
    parsed = yaml.safe_load(value)
    return value if parsed is None else parsed


def _set_nested(mapping: dict[str, object], path: list[str], value: object) -> None:
    current = mapping
    for key in path[:-1]:
        existing = current.get(key)
        if not isinstance(existing, dict):
            existing = {}
            current[key] = existing
        current = existing
    current[path[-1]] = value


def _apply_env_overrides(data: dict[str, object]) -> dict[str, object]:
    merged = dict(data)
    prefix = "ESTATE_"
    for key, raw_value in os.environ.items():
        if not key.startswith(prefix):
            continue
        path = key[len(prefix) :].lower().split("__")
        _set_nested(merged, path, _coerce_env_value(raw_value))
    return merged


def load_config(path: str | Path = "config/estate.yaml") -> EstateSettings:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")

    loaded = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(loaded, dict):
        raise ValueError("config file must contain a top-level mapping")

    raw = loaded.get("estate", loaded)
    if not isinstance(raw, dict):
        raise ValueError("estate config section must be a mapping")

    merged = _apply_env_overrides(raw)
    return EstateSettings.model_validate(merged)


__all__ = [
    "DomainConfig",
    "EstateSettings",
    "LoggingConfig",
    "ObservabilityConfig",
    "RoyaltyConfig",
    "TelemetryConfig",
    "load_config",
]
