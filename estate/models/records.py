from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from estate.models.types import Address, Uint64, Uint256


class SaleRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: ClassVar[str] = "NFTSale"

    lister: Address
    counterparty: Address
    price: Uint256
    asset_id: Uint256
    content_ref: str


class RentRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: ClassVar[str] = "NFTRent"

    lister: Address
    counterparty: Address
    total_price: Uint256
    asset_id: Uint256
    content_ref: str
    expires_at: Uint64


RedemptionRecord = SaleRecord | RentRecord


__all__ = ["RedemptionRecord", "RentRecord", "SaleRecord"]
