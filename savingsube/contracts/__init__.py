"""Proxies for the on-chain collaborators."""

from savingsube.contracts.base import ContractProxy
from savingsube.contracts.erc20 import ERC20Token
from savingsube.contracts.pair import PairReserves, UbePair
from savingsube.contracts.registry import CeloRegistry
from savingsube.contracts.router import UbeRouter, ube_deadline
from savingsube.contracts.savings import SavingsCELO
from savingsube.contracts.wrapper import SavingsCELOWithUbe

__all__ = [
    "ContractProxy",
    "ERC20Token",
    "SavingsCELO",
    "UbePair",
    "PairReserves",
    "UbeRouter",
    "ube_deadline",
    "CeloRegistry",
    "SavingsCELOWithUbe",
]
