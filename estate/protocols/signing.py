from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ReplayGuard(Protocol):
    def consume(self, signature: bytes) -> None: ...

    def is_consumed(self, signature: bytes) -> bool: ...

    def release(self, signature: bytes) -> None: ...


@runtime_checkable
class SignatureVerifier(Protocol):
    def verify(self, signer: str, digest: bytes, signature: bytes) -> bool: ...


@runtime_checkable
class Erc1271Account(Protocol):
    def is_valid_signature(self, digest: bytes, signature: bytes) -> bytes: ...


@runtime_checkable
class ContractAccounts(Protocol):
    def get(self, address: str) -> Erc1271Account | None: ...


__all__ = ["ContractAccounts", "Erc1271Account", "ReplayGuard", "SignatureVerifier"]
