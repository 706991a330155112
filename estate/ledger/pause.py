"""Owner-administered pause switch."""

from __future__ import annotations

import logging

from eth_utils import to_checksum_address

from estate.errors import NotOwner
from estate.models.types import ZERO_ADDRESS

logger = logging.getLogger(__name__)


class PauseSwitch:
    def __init__(self, owner: str) -> None:
        self._owner = to_checksum_address(owner)
        self._paused = False

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def paused(self) -> bool:
        return self._paused

    def pause(self, caller: str) -> None:
        self._require_owner(caller)
        self._paused = True
        logger.info("marketplace paused by %s", self._owner)

    def unpause(self, caller: str) -> None:
        self._require_owner(caller)
        self._paused = False
        logger.info("marketplace unpaused by %s", self._owner)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self._require_owner(caller)
        new_owner = to_checksum_address(new_owner)
        if new_owner == ZERO_ADDRESS:
            raise ValueError("new owner is the zero address")
        self._owner = new_owner

    def _require_owner(self, caller: str) -> None:
        if to_checksum_address(caller) != self._owner:
            raise NotOwner(f"{caller} is not the owner")


__all__ = ["PauseSwitch"]
