"""In-memory asset ownership ledger with content references and enumeration."""

from __future__ import annotations

import logging

from eth_utils import to_checksum_address

from estate.errors import UnknownAsset
from estate.models.types import ZERO_ADDRESS

logger = logging.getLogger(__name__)


class AssetRegistry:
    def __init__(self, name: str = "Test Estate Contract", symbol: str = "TEC") -> None:
        self.name = name
        self.symbol = symbol
        self._owners: dict[int, str] = {}
        self._content_refs: dict[int, str] = {}
        self._balances: dict[str, int] = {}
        # Insertion-ordered, so index lookups follow mint order.
        self._all_assets: dict[int, None] = {}

    def mint(self, asset_id: int, owner: str) -> None:
        owner = to_checksum_address(owner)
        if owner == ZERO_ADDRESS:
            raise ValueError("cannot mint to the zero address")
        if asset_id in self._owners:
            raise ValueError(f"asset {asset_id} already minted")
        self._owners[asset_id] = owner
        self._balances[owner] = self._balances.get(owner, 0) + 1
        self._all_assets[asset_id] = None
        logger.debug("minted asset %d to %s", asset_id, owner)

    def burn(self, asset_id: int) -> None:
        owner = self.owner_of(asset_id)
        del self._owners[asset_id]
        self._content_refs.pop(asset_id, None)
        self._all_assets.pop(asset_id, None)
        self._balances[owner] -= 1

    def owner_of(self, asset_id: int) -> str:
        owner = self._owners.get(asset_id)
        if owner is None:
            raise UnknownAsset(f"invalid asset id {asset_id}")
        return owner

    def exists(self, asset_id: int) -> bool:
        return asset_id in self._owners

    def transfer(self, asset_id: int, from_address: str, to_address: str) -> None:
        from_address = to_checksum_address(from_address)
        to_address = to_checksum_address(to_address)
        if self.owner_of(asset_id) != from_address:
            raise ValueError(f"{from_address} does not own asset {asset_id}")
        if to_address == ZERO_ADDRESS:
            raise ValueError("cannot transfer to the zero address")
        self._owners[asset_id] = to_address
        self._balances[from_address] -= 1
        self._balances[to_address] = self._balances.get(to_address, 0) + 1

    def set_content_ref(self, asset_id: int, content_ref: str) -> None:
        self.owner_of(asset_id)
        self._content_refs[asset_id] = content_ref

    def content_ref(self, asset_id: int) -> str:
        self.owner_of(asset_id)
        return self._content_refs.get(asset_id, "")

    def balance_of(self, owner: str) -> int:
        return self._balances.get(to_checksum_address(owner), 0)

    def total_supply(self) -> int:
        return len(self._all_assets)

    def asset_by_index(self, index: int) -> int:
        if not 0 <= index < len(self._all_assets):
            raise IndexError(f"asset index {index} out of bounds")
        return list(self._all_assets)[index]


__all__ = ["AssetRegistry"]
