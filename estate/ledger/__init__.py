from estate.ledger.accounts import ContractAccountRegistry
from estate.ledger.funds import BalanceLedger
from estate.ledger.pause import PauseSwitch
from estate.ledger.records import RecordLog
from estate.ledger.registry import AssetRegistry
from estate.ledger.royalty import RoyaltyBook
from estate.ledger.usage import UsageRightLedger

__all__ = [
    "AssetRegistry",
    "BalanceLedger",
    "ContractAccountRegistry",
    "PauseSwitch",
    "RecordLog",
    "RoyaltyBook",
    "UsageRightLedger",
]
