from __future__ import annotations

from dataclasses import dataclass, field

from estate.signing.verifier import ERC1271_MAGIC_VALUE, recover_signer


STARTING_BALANCE = 10**18


@dataclass(slots=True)
class FixedClock:
    """Deterministic unix-seconds clock."""

    now: int = 1_700_000_000

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@dataclass(slots=True)
class OwnerControlledWallet:
    """Contract account that accepts signatures made by its owner key."""

    owner: str
    calls: list[bytes] = field(default_factory=list)

    def is_valid_signature(self, digest: bytes, signature: bytes) -> bytes:
        self.calls.append(digest)
        if recover_signer(digest, signature) == self.owner:
            return ERC1271_MAGIC_VALUE
        return b"\xff\xff\xff\xff"


class RevertingWallet:
    def is_valid_signature(self, digest: bytes, signature: bytes) -> bytes:
        del digest, signature
        raise RuntimeError("execution reverted")
