from __future__ import annotations

import keyring
from eth_account import Account
from eth_account.signers.local import LocalAccount

from estate.models.domain import SigningDomain
from estate.models.offers import Offer
from estate.signing.signer import sign_offer

_PRIVATE_KEY_LABEL = "secp256k1:private"
_ADDRESS_LABEL = "secp256k1:address"


class EstateKeyManager:
    """Stores lister signing keys in the OS keyring and signs offers with them."""

    def __init__(self, service_name: str = "estate") -> None:
        self._service_name = service_name

    def generate_keypair(self, owner_id: str) -> str:
        account: LocalAccount = Account.create()
        self._set_secret(owner_id, _PRIVATE_KEY_LABEL, account.key.hex())
        self._set_secret(owner_id, _ADDRESS_LABEL, account.address)
        return account.address

    def import_key(self, owner_id: str, private_key_hex: str) -> str:
        try:
            account: LocalAccount = Account.from_key(private_key_hex)
        except Exception as exc:
            raise ValueError("private key has invalid format") from exc
        self._set_secret(owner_id, _PRIVATE_KEY_LABEL, account.key.hex())
        self._set_secret(owner_id, _ADDRESS_LABEL, account.address)
        return account.address

    def address(self, owner_id: str) -> str:
        address = self._get_secret(owner_id, _ADDRESS_LABEL)
        if address is not None:
            return address
        return self._load_account(owner_id).address

    def sign_offer(self, owner_id: str, offer: Offer, domain: SigningDomain) -> Offer:
        """Sign ``offer`` as ``owner_id``; the lister field must match the stored key."""
        account = self._load_account(owner_id)
        if offer.lister != account.address:
            raise ValueError(f"offer lister {offer.lister} does not match key for '{owner_id}'")
        signature = sign_offer(offer, account.key, domain)
        return offer.model_copy(update={"signature": signature})

    def _load_account(self, owner_id: str) -> LocalAccount:
        encoded_private_key = self._get_secret(owner_id, _PRIVATE_KEY_LABEL)
        if encoded_private_key is None:
            raise KeyError(f"no private key found for owner '{owner_id}'")

        try:
            return Account.from_key(encoded_private_key)
        except Exception as exc:
            raise ValueError("stored private key has invalid format") from exc

    def _credential_name(self, owner_id: str, label: str) -> str:
        return f"{owner_id}:{label}"

    def _set_secret(self, owner_id: str, label: str, value: str) -> None:
        keyring.set_password(
            self._service_name,
            self._credential_name(owner_id, label),
            value,
        )

    def _get_secret(self, owner_id: str, label: str) -> str | None:
        return keyring.get_password(
            self._service_name,
            self._credential_name(owner_id, label),
        )


__all__ = ["EstateKeyManager"]
