"""Time-boxed usage rights, one holder per asset."""

from __future__ import annotations

from eth_utils import to_checksum_address


class UsageRightLedger:
    def __init__(self) -> None:
        self._users: dict[int, tuple[str | None, int]] = {}

    def set_user(self, asset_id: int, user: str | None, expires_at: int) -> None:
        holder = to_checksum_address(user) if user is not None else None
        self._users[asset_id] = (holder, expires_at)

    def user_of(self, asset_id: int, now: int) -> str | None:
        holder, expires_at = self._users.get(asset_id, (None, 0))
        if holder is None or expires_at < now:
            return None
        return holder

    def user_expires(self, asset_id: int) -> int:
        return self._users.get(asset_id, (None, 0))[1]

    def user_entry(self, asset_id: int) -> tuple[str | None, int]:
        """Raw ``(holder, expires_at)``, including expired holders."""
        return self._users.get(asset_id, (None, 0))


__all__ = ["UsageRightLedger"]
