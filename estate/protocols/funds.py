from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class ValueTransfer(Protocol):
    """Moves native value between accounts.

    ``transfer`` is the only call that may hand control to code owned by the
    recipient; implementations raise ``TransferFailed`` when the recipient
    rejects the payment. ``snapshot`` and ``restore`` capture every balance,
    including ones recipient code changed, so a failed redemption can put the
    whole book back.
    """

    def balance_of(self, account: str) -> int: ...

    def debit(self, account: str, amount: int) -> None: ...

    def credit(self, account: str, amount: int) -> None: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None: ...

    def snapshot(self) -> Mapping[str, int]: ...

    def restore(self, snapshot: Mapping[str, int]) -> None: ...


__all__ = ["ValueTransfer"]
