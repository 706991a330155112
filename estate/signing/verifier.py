"""Signature checks for offer digests.

A signer is accepted either through secp256k1 recovery (externally owned
accounts) or, for addresses registered as contract accounts, through the
account's own ERC-1271 ``is_valid_signature`` entry point.
"""

from __future__ import annotations

import logging

from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_keys.exceptions import ValidationError as EthKeysValidationError
from eth_utils import is_address, to_checksum_address

from estate.protocols.signing import ContractAccounts, ReplayGuard

logger = logging.getLogger(__name__)

ERC1271_MAGIC_VALUE = bytes.fromhex("1626ba7e")
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_SECP256K1_HALF_N = SECP256K1_N // 2


def recover_signer(digest: bytes, signature: bytes) -> str | None:
    """Recover the checksummed signer of ``digest``, or ``None`` when malformed.

    Only the 65-byte ``r || s || v`` form with ``v`` in {27, 28} and a
    lower-half ``s`` is accepted, so each offer has exactly one valid
    signature encoding per key.
    """
    if len(digest) != 32 or len(signature) != 65:
        return None

    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    v = signature[64]
    if v not in (27, 28):
        return None
    if r == 0 or s == 0 or s > _SECP256K1_HALF_N:
        return None

    try:
        public_key = keys.Signature(vrs=(v - 27, r, s)).recover_public_key_from_msg_hash(digest)
    except (BadSignature, EthKeysValidationError, ValueError):
        return None
    return public_key.to_checksum_address()


class OfferSignatureVerifier:
    """Decides whether a signature authorizes a digest for a claimed signer."""

    def __init__(
        self,
        replay_guard: ReplayGuard,
        contract_accounts: ContractAccounts | None = None,
    ) -> None:
        self._replay_guard = replay_guard
        self._contract_accounts = contract_accounts

    def verify(self, signer: str, digest: bytes, signature: bytes) -> bool:
        if self._replay_guard.is_consumed(signature):
            return False
        return self.is_valid_signature_now(signer, digest, signature)

    def is_valid_signature_now(self, signer: str, digest: bytes, signature: bytes) -> bool:
        if not is_address(signer):
            return False
        signer = to_checksum_address(signer)

        recovered = recover_signer(digest, signature)
        if recovered is not None and recovered == signer:
            return True
        return self._check_contract_account(signer, digest, signature)

    def _check_contract_account(self, signer: str, digest: bytes, signature: bytes) -> bool:
        if self._contract_accounts is None:
            return False
        account = self._contract_accounts.get(signer)
        if account is None:
            return False

        try:
            result = account.is_valid_signature(digest, signature)
        except Exception:
            # A reverting validator is a rejection, not a failed redemption.
            logger.warning("contract account %s raised during signature check", signer, exc_info=True)
            return False
        return bytes(result) == ERC1271_MAGIC_VALUE


__all__ = ["ERC1271_MAGIC_VALUE", "OfferSignatureVerifier", "SECP256K1_N", "recover_signer"]
