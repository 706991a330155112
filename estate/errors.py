"""Error taxonomy for offer redemption and the in-memory collaborators.

Every ``RedemptionError`` is terminal for the attempt that raised it: the
settlement executor unwinds all journaled state before the error reaches the
caller, so a raised error always means "no observable effect".
"""

from __future__ import annotations


class EstateError(Exception):
    """Base class for every error raised by the estate package."""


class RedemptionError(EstateError):
    """A redemption attempt was rejected and fully rolled back."""

    message = "redemption rejected"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidCounterparty(RedemptionError):
    message = "Invalid address"


class InvalidOrUsedSignature(RedemptionError):
    # Covers both "never valid" and "already consumed" on purpose.
    message = "Invalid/Used signature"


class InsufficientPayment(RedemptionError):
    message = "Insufficient fund"

    def __init__(self, required: int, attached: int) -> None:
        super().__init__(f"{self.message}: required {required}, attached {attached}")
        self.required = required
        self.attached = attached


class InvalidDuration(RedemptionError):
    message = "Invalid duration"


class AlreadyRented(RedemptionError):
    message = "Already rented"


class DurationOverflow(RedemptionError):
    message = "Rental expiry overflows uint64"


class PriceOverflow(RedemptionError):
    message = "Total price overflows uint256"


class TransferFailed(RedemptionError):
    message = "Transfer failed"


class MarketplacePaused(RedemptionError):
    message = "Pausable: paused"


class NotAssetOwner(RedemptionError):
    message = "Lister does not own the asset"


class NotOwner(EstateError):
    """Caller is not the administrator of an owner-only switch."""


class UnknownAsset(EstateError):
    """The asset identifier has never been minted or was burned."""


class InsufficientBalance(EstateError):
    """A debit exceeded the account's available balance."""


class RollbackIncomplete(EstateError):
    """One or more reverse actions raised while undoing a failed transaction."""

    def __init__(self, descriptions: list[str]) -> None:
        self.descriptions = descriptions
        super().__init__("could not reverse: " + ", ".join(descriptions))


__all__ = [
    "AlreadyRented",
    "DurationOverflow",
    "EstateError",
    "InsufficientBalance",
    "InsufficientPayment",
    "InvalidCounterparty",
    "InvalidDuration",
    "InvalidOrUsedSignature",
    "MarketplacePaused",
    "NotAssetOwner",
    "NotOwner",
    "PriceOverflow",
    "RedemptionError",
    "RollbackIncomplete",
    "TransferFailed",
    "UnknownAsset",
]
