"""Lister-side offer signing with ``eth_account`` typed-data support."""

from __future__ import annotations

from eth_account import Account
from eth_account.messages import encode_typed_data

from estate.models.domain import SigningDomain
from estate.models.offers import Offer
from estate.signing.encoder import TypedOfferEncoder


def sign_offer(offer: Offer, private_key: str | bytes, domain: SigningDomain) -> bytes:
    """Return the 65-byte signature a wallet would produce for ``offer``."""
    typed_data = TypedOfferEncoder(domain).typed_data(offer)
    signable = encode_typed_data(full_message=typed_data)
    signed = Account.sign_message(signable, private_key=private_key)
    return bytes(signed.signature)


def signed_offer(offer: Offer, private_key: str | bytes, domain: SigningDomain) -> Offer:
    """Copy of ``offer`` carrying its signature."""
    signature = sign_offer(offer, private_key, domain)
    return offer.model_copy(update={"signature": signature})


__all__ = ["sign_offer", "signed_offer"]
