"""Offer redemption: sale, rent-with-mint and rent of an existing asset.

Each redemption runs inside one journal transaction and follows the same
order: validate, mutate marketplace state, consume the signature, then move
funds out (lister payment, then caller refund), then emit the record. The
outbound transfers are the only points where recipient code runs, so the
signature is already consumed by the time any of it can call back in.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from pydantic import TypeAdapter

from estate.core.journal import SettlementJournal
from estate.core.logging import correlation_scope
from estate.core.metrics import observe_redemption, record_consumed_signatures, record_settlement
from estate.core.telemetry import get_tracer
from estate.errors import (
    AlreadyRented,
    DurationOverflow,
    InsufficientPayment,
    InvalidCounterparty,
    InvalidDuration,
    InvalidOrUsedSignature,
    MarketplacePaused,
    NotAssetOwner,
    PriceOverflow,
)
from estate.models.offers import Offer, RentOffer, RentWithMintOffer, SaleOffer
from estate.models.records import RentRecord, SaleRecord
from estate.models.types import (
    UINT64_MAX,
    UINT256_MAX,
    ZERO_ADDRESS,
    Address,
    SignatureBytes,
    Uint64,
    Uint256,
)
from estate.protocols import (
    OwnershipLedger,
    PauseGate,
    RecordSink,
    ReplayGuard,
    SignatureVerifier,
    UsageRightLedger,
    ValueTransfer,
)
from estate.signing.encoder import TypedOfferEncoder

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

_ADDRESS = TypeAdapter(Address)
_UINT64 = TypeAdapter(Uint64)
_UINT256 = TypeAdapter(Uint256)
_SIGNATURE = TypeAdapter(SignatureBytes)


def _unix_now() -> int:
    return int(time.time())


@dataclass(slots=True)
class _Attempt:
    redemption_id: str
    caller: str
    value: int
    now: int
    settled: int = 0
    refunded: int = 0


class SettlementExecutor:
    """Redeems signed offers against injected ledgers.

    The executor exclusively owns the asset identifier counter and is the only
    writer of the replay guard; both are plain instance state so isolated
    instances never share either.
    """

    def __init__(
        self,
        *,
        encoder: TypedOfferEncoder,
        verifier: SignatureVerifier,
        replay_guard: ReplayGuard,
        registry: OwnershipLedger,
        usage: UsageRightLedger,
        funds: ValueTransfer,
        pause_gate: PauseGate,
        records: RecordSink,
        clock: Callable[[], int] = _unix_now,
        journal: SettlementJournal | None = None,
    ) -> None:
        self._encoder = encoder
        self._verifier = verifier
        self._replay_guard = replay_guard
        self._registry = registry
        self._usage = usage
        self._funds = funds
        self._pause_gate = pause_gate
        self._records = records
        self._clock = clock
        self._journal = journal if journal is not None else SettlementJournal()
        self._next_asset_id = 0

    @property
    def address(self) -> str:
        """Account that holds attached value while a redemption settles."""
        return self._encoder.domain.verifying_contract

    @property
    def domain_separator(self) -> bytes:
        return self._encoder.domain_separator

    def is_signature_consumed(self, signature: bytes | str) -> bool:
        return self._replay_guard.is_consumed(_SIGNATURE.validate_python(signature))

    def current_asset_count(self) -> int:
        return self._next_asset_id

    def offer_digest(self, offer: Offer) -> bytes:
        return self._encoder.digest(offer)

    def sale(
        self,
        to: str,
        lister: str,
        price: int,
        content_ref: str,
        nonce: int,
        signature: bytes | str,
        *,
        caller: str,
        value: int,
    ) -> SaleRecord:
        offer = SaleOffer(
            lister=lister,
            price=price,
            content_ref=content_ref,
            nonce=nonce,
            signature=signature,
        )
        to = _ADDRESS.validate_python(to)

        with self._redemption(offer, caller=caller, value=value) as attempt:
            self._require_counterparty(offer.lister, to)
            self._require_signature(offer)
            self._require_payment(offer.price, attempt.value)

            asset_id = self._mint(to, offer.content_ref)
            self._consume(offer.signature)
            self._settle(attempt, offer.lister, offer.price)

            record = SaleRecord(
                lister=offer.lister,
                counterparty=to,
                price=offer.price,
                asset_id=asset_id,
                content_ref=offer.content_ref,
            )
            self._emit(record)
            logger.info("asset %d sold to %s for %d", asset_id, to, offer.price)
            return record

    def rent_with_mint(
        self,
        to: str,
        lister: str,
        price_per_unit: int,
        time_unit: int,
        min_duration: int,
        max_duration: int,
        rent_duration: int,
        content_ref: str,
        nonce: int,
        signature: bytes | str,
        *,
        caller: str,
        value: int,
    ) -> RentRecord:
        offer = RentWithMintOffer(
            lister=lister,
            price_per_unit=price_per_unit,
            time_unit=time_unit,
            min_duration=min_duration,
            max_duration=max_duration,
            content_ref=content_ref,
            nonce=nonce,
            signature=signature,
        )
        to = _ADDRESS.validate_python(to)
        rent_duration = _UINT64.validate_python(rent_duration)

        with self._redemption(offer, caller=caller, value=value) as attempt:
            self._require_counterparty(offer.lister, to)
            self._require_duration(offer, rent_duration)
            self._require_signature(offer)
            total_price = self._total_price(offer, rent_duration)
            self._require_payment(total_price, attempt.value)
            expires_at = self._expiry(attempt.now, rent_duration)

            # Ownership stays with the lister; the renter only gets the usage right.
            asset_id = self._mint(offer.lister, offer.content_ref)
            self._grant_usage(asset_id, to, expires_at)
            self._consume(offer.signature)
            self._settle(attempt, offer.lister, total_price)

            record = RentRecord(
                lister=offer.lister,
                counterparty=to,
                total_price=total_price,
                asset_id=asset_id,
                content_ref=offer.content_ref,
                expires_at=expires_at,
            )
            self._emit(record)
            logger.info(
                "asset %d minted to %s and rented to %s until %d for %d",
                asset_id,
                offer.lister,
                to,
                expires_at,
                total_price,
            )
            return record

    def rent(
        self,
        to: str,
        lister: str,
        token_id: int,
        price_per_unit: int,
        time_unit: int,
        min_duration: int,
        max_duration: int,
        rent_duration: int,
        nonce: int,
        signature: bytes | str,
        *,
        caller: str,
        value: int,
    ) -> RentRecord:
        offer = RentOffer(
            lister=lister,
            token_id=token_id,
            price_per_unit=price_per_unit,
            time_unit=time_unit,
            min_duration=min_duration,
            max_duration=max_duration,
            nonce=nonce,
            signature=signature,
        )
        to = _ADDRESS.validate_python(to)
        rent_duration = _UINT64.validate_python(rent_duration)

        with self._redemption(offer, caller=caller, value=value) as attempt:
            self._require_counterparty(offer.lister, to)
            self._require_duration(offer, rent_duration)
            if self._registry.owner_of(offer.token_id) != offer.lister:
                raise NotAssetOwner()
            if self._usage.user_of(offer.token_id, attempt.now) is not None:
                raise AlreadyRented()
            self._require_signature(offer)
            total_price = self._total_price(offer, rent_duration)
            self._require_payment(total_price, attempt.value)
            expires_at = self._expiry(attempt.now, rent_duration)

            self._grant_usage(offer.token_id, to, expires_at)
            self._consume(offer.signature)
            self._settle(attempt, offer.lister, total_price)

            record = RentRecord(
                lister=offer.lister,
                counterparty=to,
                total_price=total_price,
                asset_id=offer.token_id,
                content_ref=self._registry.content_ref(offer.token_id),
                expires_at=expires_at,
            )
            self._emit(record)
            logger.info(
                "asset %d rented to %s until %d for %d",
                offer.token_id,
                to,
                expires_at,
                total_price,
            )
            return record

    @contextmanager
    def _redemption(self, offer: Offer, *, caller: str, value: int) -> Iterator[_Attempt]:
        attempt = _Attempt(
            redemption_id=uuid.uuid4().hex,
            caller=_ADDRESS.validate_python(caller),
            value=_UINT256.validate_python(value),
            now=self._clock(),
        )
        kind = offer.kind.value

        with (
            correlation_scope(redemption_id=attempt.redemption_id, offer_kind=kind, lister=offer.lister),
            tracer.start_as_current_span(f"estate.redeem.{kind}") as span,
            observe_redemption(kind),
        ):
            span.set_attribute("estate.redemption_id", attempt.redemption_id)
            span.set_attribute("estate.lister", offer.lister)
            span.set_attribute("estate.nested", self._journal.depth > 0)
            if self._pause_gate.paused:
                raise MarketplacePaused()

            try:
                with self._journal.transaction():
                    self._checkpoint_funds()
                    self._take_payment(attempt)
                    yield attempt
            except Exception as exc:
                logger.info("redemption rejected: %s", exc)
                raise

            record_settlement(kind, attempt.settled, attempt.refunded)

    def _require_counterparty(self, lister: str, to: str) -> None:
        if lister == to or to == ZERO_ADDRESS:
            raise InvalidCounterparty()

    def _require_duration(self, offer: RentWithMintOffer | RentOffer, rent_duration: int) -> None:
        if offer.time_unit == 0:
            raise InvalidDuration("Invalid duration: time unit is zero")
        if not offer.min_duration <= rent_duration <= offer.max_duration:
            raise InvalidDuration(
                f"Invalid duration: {rent_duration} outside "
                f"[{offer.min_duration}, {offer.max_duration}]"
            )

    def _require_signature(self, offer: Offer) -> None:
        digest = self._encoder.digest(offer)
        if not self._verifier.verify(offer.lister, digest, offer.signature):
            raise InvalidOrUsedSignature()

    def _require_payment(self, required: int, attached: int) -> None:
        if attached < required:
            raise InsufficientPayment(required=required, attached=attached)

    def _total_price(self, offer: RentWithMintOffer | RentOffer, rent_duration: int) -> int:
        gross = offer.price_per_unit * rent_duration
        if gross > UINT256_MAX:
            raise PriceOverflow()
        # Integer division; any remainder stays with the renter.
        return gross // offer.time_unit

    def _expiry(self, now: int, rent_duration: int) -> int:
        expires_at = now + rent_duration
        if expires_at > UINT64_MAX:
            raise DurationOverflow()
        return expires_at

    def _checkpoint_funds(self) -> None:
        # Restored last on unwind, so it also reverts balance changes made by
        # recipient code during payouts.
        balances = self._funds.snapshot()
        self._journal.record("restore balances", lambda: self._funds.restore(balances))

    def _take_payment(self, attempt: _Attempt) -> None:
        if attempt.value == 0:
            return
        self._funds.debit(attempt.caller, attempt.value)
        self._funds.credit(self.address, attempt.value)

    def _mint(self, owner: str, content_ref: str) -> int:
        asset_id = self._next_asset_id
        self._registry.mint(asset_id, owner)
        self._journal.record(f"mint asset {asset_id}", lambda: self._registry.burn(asset_id))
        self._registry.set_content_ref(asset_id, content_ref)
        self._next_asset_id = asset_id + 1
        self._journal.record(f"advance counter past {asset_id}", lambda: self._rewind_counter(asset_id))
        return asset_id

    def _rewind_counter(self, asset_id: int) -> None:
        self._next_asset_id = asset_id

    def _grant_usage(self, asset_id: int, user: str, expires_at: int) -> None:
        previous_user, previous_expiry = self._usage.user_entry(asset_id)
        self._usage.set_user(asset_id, user, expires_at)
        self._journal.record(
            f"grant usage of asset {asset_id}",
            lambda: self._usage.set_user(asset_id, previous_user, previous_expiry),
        )

    def _consume(self, signature: bytes) -> None:
        self._replay_guard.consume(signature)
        record_consumed_signatures(1)
        self._journal.record("consume signature", lambda: self._release(signature))

    def _release(self, signature: bytes) -> None:
        self._replay_guard.release(signature)
        record_consumed_signatures(-1)

    def _settle(self, attempt: _Attempt, lister: str, price: int) -> None:
        refund = attempt.value - price
        if price:
            self._pay_out(lister, price)
            attempt.settled = price
        if refund:
            self._pay_out(attempt.caller, refund)
            attempt.refunded = refund

    def _pay_out(self, recipient: str, amount: int) -> None:
        self._funds.transfer(self.address, recipient, amount)

    def _emit(self, record: SaleRecord | RentRecord) -> None:
        self._records.emit(record)
        self._journal.record(f"emit {record.event}", lambda: self._records.retract(record))


__all__ = ["SettlementExecutor"]
