"""Celo core contracts registry proxy."""

from __future__ import annotations

from savingsube.chain import ChainClient
from savingsube.constants import CELO_REGISTRY
from savingsube.contracts.base import ContractProxy


class CeloRegistry(ContractProxy):
    """Resolves core contract names (e.g. "GoldToken") to addresses."""

    def __init__(self, client: ChainClient, address: str = CELO_REGISTRY):
        super().__init__(client, address)

    def address_for(self, name: str) -> str:
        """Address registered under name; reverts on-chain if unknown."""
        return self._call_single("getAddressForStringOrDie(string)", [name], output_type="address")

    def gold_token(self) -> str:
        """Address of the CELO ERC20 (GoldToken)."""
        return self.address_for("GoldToken")
