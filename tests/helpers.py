from __future__ import annotations

from eth_account.signers.local import LocalAccount

from estate.models.domain import SigningDomain
from estate.models.offers import RentOffer, RentWithMintOffer, SaleOffer
from estate.signing.signer import sign_offer


def sign_sale(
    domain: SigningDomain,
    lister: LocalAccount,
    *,
    price: int,
    content_ref: str,
    nonce: int,
) -> bytes:
    offer = SaleOffer(lister=lister.address, price=price, content_ref=content_ref, nonce=nonce)
    return sign_offer(offer, lister.key, domain)


def sign_rent_with_mint(
    domain: SigningDomain,
    lister: LocalAccount,
    *,
    price_per_unit: int,
    time_unit: int,
    min_duration: int,
    max_duration: int,
    content_ref: str,
    nonce: int,
) -> bytes:
    offer = RentWithMintOffer(
        lister=lister.address,
        price_per_unit=price_per_unit,
        time_unit=time_unit,
        min_duration=min_duration,
        max_duration=max_duration,
        content_ref=content_ref,
        nonce=nonce,
    )
    return sign_offer(offer, lister.key, domain)


def sign_rent(
    domain: SigningDomain,
    lister: LocalAccount,
    *,
    token_id: int,
    price_per_unit: int,
    time_unit: int,
    min_duration: int,
    max_duration: int,
    nonce: int,
) -> bytes:
    offer = RentOffer(
        lister=lister.address,
        token_id=token_id,
        price_per_unit=price_per_unit,
        time_unit=time_unit,
        min_duration=min_duration,
        max_duration=max_duration,
        nonce=nonce,
    )
    return sign_offer(offer, lister.key, domain)
