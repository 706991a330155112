"""In-memory consumed-signature set."""

from __future__ import annotations


class InMemoryReplayGuard:
    """Raw signature bytes mapped to a consumed flag.

    The set only grows during normal operation. ``release`` exists for the
    settlement journal, which undoes a consumption when the redemption that
    made it is rolled back.
    """

    def __init__(self) -> None:
        self._consumed: dict[bytes, bool] = {}

    def consume(self, signature: bytes) -> None:
        self._consumed[bytes(signature)] = True

    def is_consumed(self, signature: bytes) -> bool:
        return self._consumed.get(bytes(signature), False)

    def release(self, signature: bytes) -> None:
        self._consumed.pop(bytes(signature), None)

    def __len__(self) -> int:
        return len(self._consumed)


__all__ = ["InMemoryReplayGuard"]
