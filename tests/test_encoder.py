from __future__ import annotations

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_account.signers.local import LocalAccount
from eth_utils import keccak

from estate.models.domain import SigningDomain
from estate.models.offers import RentOffer, RentWithMintOffer, SaleOffer
from estate.signing.encoder import DOMAIN_TYPEHASH, SCHEMAS, TypedOfferEncoder, domain_separator


def _sale(lister: LocalAccount, content_ref: str = "ipfs://x") -> SaleOffer:
    return SaleOffer(lister=lister.address, price=1000, content_ref=content_ref, nonce=5)


def test_type_strings_match_the_signed_schemas() -> None:
    type_strings = {kind.value: schema.type_string for kind, schema in SCHEMAS.items()}

    assert type_strings == {
        "sale": "NFTForSale(address lister,uint256 price,string uri,uint256 nonce)",
        "rent_with_mint": (
            "NFTForRentWithMint(address lister,uint256 pricePerUnit,uint64 timeUnit,"
            "uint64 minDuration,uint64 maxDuration,string uri,uint256 nonce)"
        ),
        "rent": (
            "NFTForRent(address lister,uint256 tokenId,uint256 pricePerUnit,uint64 timeUnit,"
            "uint64 minDuration,uint64 maxDuration,uint256 nonce)"
        ),
    }
    assert DOMAIN_TYPEHASH == keccak(
        text="EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
    )


def test_digest_matches_wallet_typed_data_hash(domain: SigningDomain, lister: LocalAccount) -> None:
    encoder = TypedOfferEncoder(domain)
    offers = [
        _sale(lister),
        RentWithMintOffer(
            lister=lister.address,
            price_per_unit=100,
            time_unit=3,
            min_duration=1,
            max_duration=30,
            content_ref="ipfs://rent",
            nonce=7,
        ),
        RentOffer(
            lister=lister.address,
            token_id=4,
            price_per_unit=100,
            time_unit=3,
            min_duration=1,
            max_duration=30,
            nonce=8,
        ),
    ]

    for offer in offers:
        signable = encode_typed_data(full_message=encoder.typed_data(offer))
        signed = Account.sign_message(signable, private_key=lister.key)
        assert signed.message_hash == encoder.digest(offer)


def test_kinds_never_collide_on_identical_values(domain: SigningDomain, lister: LocalAccount) -> None:
    encoder = TypedOfferEncoder(domain)
    rent_with_mint = RentWithMintOffer(
        lister=lister.address,
        price_per_unit=1,
        time_unit=1,
        min_duration=1,
        max_duration=1,
        content_ref="",
        nonce=1,
    )
    rent = RentOffer(
        lister=lister.address,
        token_id=0,
        price_per_unit=1,
        time_unit=1,
        min_duration=1,
        max_duration=1,
        nonce=1,
    )
    sale = SaleOffer(lister=lister.address, price=1, content_ref="", nonce=1)

    digests = {encoder.digest(rent_with_mint), encoder.digest(rent), encoder.digest(sale)}
    assert len(digests) == 3


def test_empty_content_ref_hashes_deterministically(domain: SigningDomain, lister: LocalAccount) -> None:
    encoder = TypedOfferEncoder(domain)

    first = encoder.digest(_sale(lister, content_ref=""))
    second = encoder.digest(_sale(lister, content_ref=""))

    assert first == second
    assert first != encoder.digest(_sale(lister, content_ref="ipfs://x"))


def test_every_domain_input_changes_the_separator(domain: SigningDomain) -> None:
    baseline = domain_separator(domain)
    variants = [
        domain.model_copy(update={"name": "Other Market"}),
        domain.model_copy(update={"version": "2.0.0"}),
        domain.model_copy(update={"chain_id": domain.chain_id + 1}),
        domain.model_copy(update={"verifying_contract": "0xe7f1725e7734ce288f8367e1bb143e90bb3f0512"}),
    ]

    separators = {domain_separator(variant) for variant in variants}

    assert baseline not in separators
    assert len(separators) == len(variants)


def test_same_offer_digest_differs_across_domains(domain: SigningDomain, lister: LocalAccount) -> None:
    offer = _sale(lister)
    other_chain = domain.model_copy(update={"chain_id": 1})

    assert TypedOfferEncoder(domain).digest(offer) != TypedOfferEncoder(other_chain).digest(offer)
    assert TypedOfferEncoder(domain).struct_hash(offer) == TypedOfferEncoder(other_chain).struct_hash(offer)


def test_signature_does_not_affect_digest(domain: SigningDomain, lister: LocalAccount) -> None:
    encoder = TypedOfferEncoder(domain)
    offer = _sale(lister)

    assert encoder.digest(offer) == encoder.digest(offer.model_copy(update={"signature": b"\x01" * 65}))
