from estate.protocols.access import PauseGate
from estate.protocols.funds import ValueTransfer
from estate.protocols.ledgers import OwnershipLedger, RoyaltyRegistry, UsageRightLedger
from estate.protocols.records import RecordSink
from estate.protocols.signing import (
    ContractAccounts,
    Erc1271Account,
    ReplayGuard,
    SignatureVerifier,
)

__all__ = [
    "ContractAccounts",
    "Erc1271Account",
    "OwnershipLedger",
    "PauseGate",
    "RecordSink",
    "ReplayGuard",
    "RoyaltyRegistry",
    "SignatureVerifier",
    "UsageRightLedger",
    "ValueTransfer",
]
