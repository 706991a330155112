from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from estate.models.types import Address, Uint256


class SigningDomain(BaseModel):
    """The four inputs bound into every offer digest."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    chain_id: Uint256
    verifying_contract: Address

    def as_typed_data(self) -> dict[str, object]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
        }


__all__ = ["SigningDomain"]
