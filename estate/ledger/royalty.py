"""Royalty book in the ERC-2981 shape: receiver plus fraction of a sale price."""

from __future__ import annotations

from eth_utils import to_checksum_address

from estate.models.types import ZERO_ADDRESS

FEE_DENOMINATOR = 10_000


class RoyaltyBook:
    def __init__(self, default_receiver: str, default_fraction_bps: int = 500) -> None:
        self._default: tuple[str, int] = self._validated(default_receiver, default_fraction_bps)
        self._per_asset: dict[int, tuple[str, int]] = {}

    def royalty_info(self, asset_id: int, sale_price: int) -> tuple[str, int]:
        receiver, fraction = self._per_asset.get(asset_id, self._default)
        return receiver, sale_price * fraction // FEE_DENOMINATOR

    def set_default_royalty(self, receiver: str, fraction_bps: int) -> None:
        self._default = self._validated(receiver, fraction_bps)

    def set_asset_royalty(self, asset_id: int, receiver: str, fraction_bps: int) -> None:
        self._per_asset[asset_id] = self._validated(receiver, fraction_bps)

    def reset_asset_royalty(self, asset_id: int) -> None:
        self._per_asset.pop(asset_id, None)

    @staticmethod
    def _validated(receiver: str, fraction_bps: int) -> tuple[str, int]:
        if not 0 <= fraction_bps <= FEE_DENOMINATOR:
            raise ValueError("royalty fee will exceed sale price")
        receiver = to_checksum_address(receiver)
        if receiver == ZERO_ADDRESS:
            raise ValueError("invalid royalty receiver")
        return receiver, fraction_bps


__all__ = ["FEE_DENOMINATOR", "RoyaltyBook"]
