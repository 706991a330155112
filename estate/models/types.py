"""Annotated scalar types shared by offers, records and the signing domain."""

from __future__ import annotations

from typing import Annotated

from eth_utils import is_address, to_checksum_address
from pydantic import AfterValidator, Field, PlainSerializer, PlainValidator

UINT64_MAX = 2**64 - 1
UINT256_MAX = 2**256 - 1
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def _checksum(value: str) -> str:
    if not is_address(value):
        raise ValueError(f"not an address: {value!r}")
    return to_checksum_address(value)


def _validate_signature_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        raw = value[2:] if value.startswith(("0x", "0X")) else value
        try:
            return bytes.fromhex(raw)
        except ValueError as exc:
            raise ValueError("invalid hex signature") from exc
    raise TypeError("signature must be provided as bytes or a hex string")


def _serialize_signature_bytes(value: bytes) -> str:
    return "0x" + value.hex()


Address = Annotated[str, AfterValidator(_checksum)]
Uint64 = Annotated[int, Field(strict=True, ge=0, le=UINT64_MAX)]
Uint256 = Annotated[int, Field(strict=True, ge=0, le=UINT256_MAX)]
SignatureBytes = Annotated[
    bytes,
    PlainValidator(_validate_signature_bytes),
    PlainSerializer(_serialize_signature_bytes, return_type=str, when_used="json"),
]


__all__ = [
    "Address",
    "SignatureBytes",
    "UINT256_MAX",
    "UINT64_MAX",
    "Uint256",
    "Uint64",
    "ZERO_ADDRESS",
]
