"""Registry of addresses that validate signatures through their own code."""

from __future__ import annotations

from eth_utils import to_checksum_address

from estate.protocols.signing import Erc1271Account


class ContractAccountRegistry:
    def __init__(self) -> None:
        self._accounts: dict[str, Erc1271Account] = {}

    def register(self, address: str, account: Erc1271Account) -> None:
        self._accounts[to_checksum_address(address)] = account

    def unregister(self, address: str) -> None:
        self._accounts.pop(to_checksum_address(address), None)

    def get(self, address: str) -> Erc1271Account | None:
        return self._accounts.get(to_checksum_address(address))


__all__ = ["ContractAccountRegistry"]
