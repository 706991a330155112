"""EIP-712 encoding of marketplace offers.

Each offer kind has its own primary type so identical field values never
produce the same digest across kinds. Strings are hashed to ``bytes32`` before
ABI encoding, and the struct hash is folded with the domain separator as
``keccak256(0x1901 || separator || structHash)``.
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_abi import encode
from eth_utils import keccak

from estate.models.domain import SigningDomain
from estate.models.offers import Offer, OfferKind

DOMAIN_TYPE = "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
DOMAIN_TYPEHASH = keccak(text=DOMAIN_TYPE)

_DOMAIN_FIELDS: list[dict[str, str]] = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]


@dataclass(frozen=True, slots=True)
class OfferSchema:
    primary_type: str
    # (typed-data field name, solidity type, offer attribute)
    fields: tuple[tuple[str, str, str], ...]

    @property
    def type_string(self) -> str:
        members = ",".join(f"{sol_type} {name}" for name, sol_type, _ in self.fields)
        return f"{self.primary_type}({members})"

    @property
    def type_hash(self) -> bytes:
        return keccak(text=self.type_string)

    def typed_fields(self) -> list[dict[str, str]]:
        return [{"name": name, "type": sol_type} for name, sol_type, _ in self.fields]


_RENT_TERMS: tuple[tuple[str, str, str], ...] = (
    ("pricePerUnit", "uint256", "price_per_unit"),
    ("timeUnit", "uint64", "time_unit"),
    ("minDuration", "uint64", "min_duration"),
    ("maxDuration", "uint64", "max_duration"),
)

SCHEMAS: dict[OfferKind, OfferSchema] = {
    OfferKind.sale: OfferSchema(
        primary_type="NFTForSale",
        fields=(
            ("lister", "address", "lister"),
            ("price", "uint256", "price"),
            ("uri", "string", "content_ref"),
            ("nonce", "uint256", "nonce"),
        ),
    ),
    OfferKind.rent_with_mint: OfferSchema(
        primary_type="NFTForRentWithMint",
        fields=(
            ("lister", "address", "lister"),
            *_RENT_TERMS,
            ("uri", "string", "content_ref"),
            ("nonce", "uint256", "nonce"),
        ),
    ),
    OfferKind.rent: OfferSchema(
        primary_type="NFTForRent",
        fields=(
            ("lister", "address", "lister"),
            ("tokenId", "uint256", "token_id"),
            *_RENT_TERMS,
            ("nonce", "uint256", "nonce"),
        ),
    ),
}


def domain_separator(domain: SigningDomain) -> bytes:
    return keccak(
        encode(
            ["bytes32", "bytes32", "bytes32", "uint256", "address"],
            [
                DOMAIN_TYPEHASH,
                keccak(text=domain.name),
                keccak(text=domain.version),
                domain.chain_id,
                domain.verifying_contract,
            ],
        )
    )


class TypedOfferEncoder:
    """Builds domain-bound digests for offers of every kind."""

    def __init__(self, domain: SigningDomain) -> None:
        self._domain = domain
        self._separator = domain_separator(domain)

    @property
    def domain(self) -> SigningDomain:
        return self._domain

    @property
    def domain_separator(self) -> bytes:
        return self._separator

    def struct_hash(self, offer: Offer) -> bytes:
        schema = SCHEMAS[offer.kind]
        abi_types: list[str] = ["bytes32"]
        values: list[object] = [schema.type_hash]
        for _, sol_type, attribute in schema.fields:
            value = getattr(offer, attribute)
            if sol_type == "string":
                abi_types.append("bytes32")
                values.append(keccak(text=value))
            else:
                abi_types.append(sol_type)
                values.append(value)
        return keccak(encode(abi_types, values))

    def digest(self, offer: Offer) -> bytes:
        return keccak(b"\x19\x01" + self._separator + self.struct_hash(offer))

    def typed_data(self, offer: Offer) -> dict[str, object]:
        """Full EIP-712 payload, as wallets and ``eth_account`` expect it."""
        schema = SCHEMAS[offer.kind]
        return {
            "types": {
                "EIP712Domain": _DOMAIN_FIELDS,
                schema.primary_type: schema.typed_fields(),
            },
            "primaryType": schema.primary_type,
            "domain": self._domain.as_typed_data(),
            "message": {name: getattr(offer, attribute) for name, _, attribute in schema.fields},
        }


__all__ = ["DOMAIN_TYPE", "DOMAIN_TYPEHASH", "OfferSchema", "SCHEMAS", "TypedOfferEncoder", "domain_separator"]
