from __future__ import annotations

import pytest
from eth_account import Account

from estate.core.key_manager import EstateKeyManager
from estate.models.domain import SigningDomain
from estate.models.offers import SaleOffer
from estate.signing import InMemoryReplayGuard, OfferSignatureVerifier, TypedOfferEncoder


class _InMemoryKeyring:
    def __init__(self) -> None:
        self.values: dict[tuple[str, str], str] = {}

    def set_password(self, service_name: str, username: str, password: str) -> None:
        self.values[(service_name, username)] = password

    def get_password(self, service_name: str, username: str) -> str | None:
        return self.values.get((service_name, username))


@pytest.fixture
def fake_keyring(monkeypatch: pytest.MonkeyPatch) -> _InMemoryKeyring:
    backend = _InMemoryKeyring()
    monkeypatch.setattr("estate.core.key_manager.keyring.set_password", backend.set_password)
    monkeypatch.setattr("estate.core.key_manager.keyring.get_password", backend.get_password)
    return backend


@pytest.fixture
def manager(fake_keyring: _InMemoryKeyring) -> EstateKeyManager:
    del fake_keyring
    return EstateKeyManager(service_name="estate-test")


def test_generate_keypair_stores_key_and_address(
    manager: EstateKeyManager,
    fake_keyring: _InMemoryKeyring,
) -> None:
    address = manager.generate_keypair("lister")

    assert ("estate-test", "lister:secp256k1:private") in fake_keyring.values
    assert fake_keyring.values[("estate-test", "lister:secp256k1:address")] == address
    assert manager.address("lister") == address


def test_signed_offer_verifies(manager: EstateKeyManager, domain: SigningDomain) -> None:
    address = manager.generate_keypair("lister")
    offer = SaleOffer(lister=address, price=5, content_ref="ipfs://k", nonce=9)

    signed = manager.sign_offer("lister", offer, domain)

    digest = TypedOfferEncoder(domain).digest(signed)
    verifier = OfferSignatureVerifier(InMemoryReplayGuard())
    assert verifier.verify(address, digest, signed.signature) is True


def test_import_key_derives_address(manager: EstateKeyManager) -> None:
    account = Account.create()

    assert manager.import_key("imported", account.key.hex()) == account.address


def test_sign_offer_rejects_foreign_lister(manager: EstateKeyManager, domain: SigningDomain) -> None:
    manager.generate_keypair("lister")
    offer = SaleOffer(lister=Account.create().address, price=5, nonce=1)

    with pytest.raises(ValueError, match="does not match"):
        manager.sign_offer("lister", offer, domain)


def test_missing_key_raises(manager: EstateKeyManager) -> None:
    with pytest.raises(KeyError, match="no private key"):
        manager.address("nobody")
