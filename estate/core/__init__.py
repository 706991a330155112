"""Core module: journal, key storage and the observability plumbing."""

from estate.core.journal import SettlementJournal
from estate.core.key_manager import EstateKeyManager

__all__ = ["EstateKeyManager", "SettlementJournal"]
