from estate.signing.encoder import TypedOfferEncoder, domain_separator
from estate.signing.replay_guard import InMemoryReplayGuard
from estate.signing.signer import sign_offer, signed_offer
from estate.signing.verifier import OfferSignatureVerifier, recover_signer

__all__ = [
    "InMemoryReplayGuard",
    "OfferSignatureVerifier",
    "TypedOfferEncoder",
    "domain_separator",
    "recover_signer",
    "sign_offer",
    "signed_offer",
]
