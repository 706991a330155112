from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PauseGate(Protocol):
    @property
    def paused(self) -> bool: ...

    def pause(self, caller: str) -> None: ...

    def unpause(self, caller: str) -> None: ...


__all__ = ["PauseGate"]
