from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from estate.models.types import Address, SignatureBytes, Uint64, Uint256


class OfferKind(StrEnum):
    sale = "sale"
    rent_with_mint = "rent_with_mint"
    rent = "rent"


class _OfferBase(BaseModel):
    """Fields every signed offer carries.

    Offers are never stored; the redeeming caller supplies the fields again and
    the signature is checked against the digest rebuilt from them.
    """

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[OfferKind]

    lister: Address
    nonce: Uint256
    signature: SignatureBytes = b""


class SaleOffer(_OfferBase):
    kind: ClassVar[OfferKind] = OfferKind.sale

    price: Uint256
    content_ref: str = ""


class _RentTerms(_OfferBase):
    price_per_unit: Uint256
    time_unit: Uint64
    min_duration: Uint64
    max_duration: Uint64


class RentWithMintOffer(_RentTerms):
    kind: ClassVar[OfferKind] = OfferKind.rent_with_mint

    content_ref: str = ""


class RentOffer(_RentTerms):
    kind: ClassVar[OfferKind] = OfferKind.rent

    token_id: Uint256


Offer = SaleOffer | RentWithMintOffer | RentOffer


__all__ = ["Offer", "OfferKind", "RentOffer", "RentWithMintOffer", "SaleOffer"]
