"""Data models for pools, positions and chain events."""

from savingsube.models.events import DeployedAddress, DepositedEvent
from savingsube.models.liquidity import LiquidityPosition, ReservePair
from savingsube.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    # Types
    "Address",
    "Uint256",
    "is_valid_address",
    "normalize_address",
    # Pool values
    "ReservePair",
    "LiquidityPosition",
    # Chain data
    "DepositedEvent",
    "DeployedAddress",
]
