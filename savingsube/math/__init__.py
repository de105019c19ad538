"""Pool math for the CELO/sCELO liquidity wrapper.

- reserve ratio and its contract encoding
- LP position valuation, minimum complementary deposit
- impermanent-loss estimate
"""

from savingsube.math.liquidity import (
    liquidity_position_value,
    max_loss_from_price_change,
    min_celo_to_add_liquidity,
)
from savingsube.math.reserves import (
    NEUTRAL_RATIO,
    UNBOUNDED_RATIO,
    is_unbounded,
    ratio_to_contract_units,
    reserve_ratio,
)

__all__ = [
    "NEUTRAL_RATIO",
    "UNBOUNDED_RATIO",
    "is_unbounded",
    "ratio_to_contract_units",
    "reserve_ratio",
    "liquidity_position_value",
    "max_loss_from_price_change",
    "min_celo_to_add_liquidity",
]
