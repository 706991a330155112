from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class OwnershipLedger(Protocol):
    def mint(self, asset_id: int, owner: str) -> None: ...

    def burn(self, asset_id: int) -> None: ...

    def owner_of(self, asset_id: int) -> str: ...

    def transfer(self, asset_id: int, from_address: str, to_address: str) -> None: ...

    def set_content_ref(self, asset_id: int, content_ref: str) -> None: ...

    def content_ref(self, asset_id: int) -> str: ...

    def exists(self, asset_id: int) -> bool: ...


@runtime_checkable
class UsageRightLedger(Protocol):
    def set_user(self, asset_id: int, user: str | None, expires_at: int) -> None: ...

    def user_of(self, asset_id: int, now: int) -> str | None: ...

    def user_expires(self, asset_id: int) -> int: ...

    def user_entry(self, asset_id: int) -> tuple[str | None, int]: ...


@runtime_checkable
class RoyaltyRegistry(Protocol):
    def royalty_info(self, asset_id: int, sale_price: int) -> tuple[str, int]: ...


__all__ = ["OwnershipLedger", "RoyaltyRegistry", "UsageRightLedger"]
