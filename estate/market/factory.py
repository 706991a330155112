"""Wire a marketplace instance from settings.

Builds the signing domain, the in-memory ledgers and the settlement executor
in dependency order. Callers that already own a ledger (a shared balance book,
a clock driven by a test) pass it in and the rest is created around it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from estate.config import EstateSettings
from estate.core.journal import SettlementJournal
from estate.core.logging import setup_logging
from estate.core.metrics import set_metrics_enabled
from estate.core.telemetry import init_tracing
from estate.ledger import (
    AssetRegistry,
    BalanceLedger,
    ContractAccountRegistry,
    PauseSwitch,
    RecordLog,
    RoyaltyBook,
    UsageRightLedger,
)
from estate.market.settlement import SettlementExecutor
from estate.signing import InMemoryReplayGuard, OfferSignatureVerifier, TypedOfferEncoder

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Marketplace:
    executor: SettlementExecutor
    encoder: TypedOfferEncoder
    replay_guard: InMemoryReplayGuard
    registry: AssetRegistry
    usage: UsageRightLedger
    funds: BalanceLedger
    pause: PauseSwitch
    royalties: RoyaltyBook
    contract_accounts: ContractAccountRegistry
    records: RecordLog


def configure_observability(settings: EstateSettings) -> None:
    """Install logging, metrics and tracing for a process hosting marketplaces."""
    setup_logging(settings.logging)
    set_metrics_enabled(settings.observability.metrics_enabled)
    init_tracing(settings.telemetry)


def create_marketplace(
    settings: EstateSettings | None = None,
    *,
    funds: BalanceLedger | None = None,
    clock: Callable[[], int] | None = None,
) -> Marketplace:
    settings = settings if settings is not None else EstateSettings()
    domain = settings.domain.signing_domain()

    encoder = TypedOfferEncoder(domain)
    replay_guard = InMemoryReplayGuard()
    contract_accounts = ContractAccountRegistry()
    verifier = OfferSignatureVerifier(replay_guard, contract_accounts)
    registry = AssetRegistry(name=settings.domain.name, symbol=settings.domain.symbol)
    usage = UsageRightLedger()
    funds = funds if funds is not None else BalanceLedger()
    pause = PauseSwitch(owner=settings.owner)
    royalties = RoyaltyBook(
        default_receiver=settings.royalty.receiver,
        default_fraction_bps=settings.royalty.fraction_bps,
    )
    records = RecordLog()

    executor_kwargs: dict[str, object] = {}
    if clock is not None:
        executor_kwargs["clock"] = clock
    executor = SettlementExecutor(
        encoder=encoder,
        verifier=verifier,
        replay_guard=replay_guard,
        registry=registry,
        usage=usage,
        funds=funds,
        pause_gate=pause,
        records=records,
        journal=SettlementJournal(),
        **executor_kwargs,
    )
    logger.info(
        "marketplace %s v%s ready on chain %d at %s",
        domain.name,
        domain.version,
        domain.chain_id,
        domain.verifying_contract,
    )
    return Marketplace(
        executor=executor,
        encoder=encoder,
        replay_guard=replay_guard,
        registry=registry,
        usage=usage,
        funds=funds,
        pause=pause,
        royalties=royalties,
        contract_accounts=contract_accounts,
        records=records,
    )


__all__ = ["Marketplace", "configure_observability", "create_marketplace"]
