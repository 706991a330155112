"""Native-value balances with recipient receive hooks.

A receive hook stands in for code owned by a payment recipient. It runs after
the recipient has been credited and may call back into the marketplace; if it
raises, balances go back to where they stood before the transfer (including
anything the hook moved) and ``TransferFailed`` is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from eth_utils import to_checksum_address

from estate.errors import InsufficientBalance, TransferFailed

logger = logging.getLogger(__name__)

ReceiveHook = Callable[[str, int], None]


class BalanceLedger:
    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self._balances: dict[str, int] = {}
        self._hooks: dict[str, ReceiveHook] = {}
        for account, amount in (initial or {}).items():
            self.credit(account, amount)

    def balance_of(self, account: str) -> int:
        return self._balances.get(to_checksum_address(account), 0)

    def credit(self, account: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("credit amount must be non-negative")
        account = to_checksum_address(account)
        self._balances[account] = self._balances.get(account, 0) + amount

    def debit(self, account: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("debit amount must be non-negative")
        account = to_checksum_address(account)
        available = self._balances.get(account, 0)
        if available < amount:
            raise InsufficientBalance(f"{account} holds {available}, needs {amount}")
        self._balances[account] = available - amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        sender = to_checksum_address(sender)
        recipient = to_checksum_address(recipient)
        hook = self._hooks.get(recipient)
        before = self.snapshot() if hook is not None else None
        self.debit(sender, amount)
        self.credit(recipient, amount)

        if hook is None:
            return
        try:
            hook(sender, amount)
        except Exception as exc:
            logger.info("recipient %s rejected payment of %d", recipient, amount)
            self.restore(before)
            raise TransferFailed(f"transfer of {amount} to {recipient} failed") from exc

    def snapshot(self) -> Mapping[str, int]:
        return dict(self._balances)

    def restore(self, snapshot: Mapping[str, int]) -> None:
        self._balances = dict(snapshot)

    def set_receive_hook(self, account: str, hook: ReceiveHook | None) -> None:
        account = to_checksum_address(account)
        if hook is None:
            self._hooks.pop(account, None)
        else:
            self._hooks[account] = hook


__all__ = ["BalanceLedger", "ReceiveHook"]
