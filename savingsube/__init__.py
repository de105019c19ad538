"""Client toolkit for the SavingsCELO + Ubeswap liquidity wrapper."""

from savingsube.chain import Web3ChainClient
from savingsube.kit import SavingsCELOWithUbeKit, new_savings_celo_with_ube_kit
from savingsube.math import (
    liquidity_position_value,
    max_loss_from_price_change,
    min_celo_to_add_liquidity,
    reserve_ratio,
)

__version__ = "0.1.0"
__all__ = [
    "SavingsCELOWithUbeKit",
    "new_savings_celo_with_ube_kit",
    "Web3ChainClient",
    "reserve_ratio",
    "liquidity_position_value",
    "min_celo_to_add_liquidity",
    "max_loss_from_price_change",
    "__version__",
]
