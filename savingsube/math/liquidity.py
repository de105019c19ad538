"""Liquidity math for the CELO/sCELO pool.

Position valuation and minimum deposits use integer arithmetic so results
agree exactly with the pair contract. The impermanent-loss estimate is a
Decimal closed form.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from savingsube.errors import NoEstablishedPriceError, NoLiquidityError, UnboundedRatioError
from savingsube.math.decimal_utils import (
    DECIMAL_HIGH_PREC_CONTEXT,
    DecimalLike,
    decimal_sqrt,
    to_decimal,
)
from savingsube.math.integer import mul_div_ceil, mul_div_floor
from savingsube.models.liquidity import LiquidityPosition, ReservePair


def liquidity_position_value(
    liquidity: int,
    total_supply: int,
    reserves: ReservePair,
) -> LiquidityPosition:
    """Value an LP token balance in terms of each reserve.

    Each side is floor(liquidity * reserve / total_supply), the same
    truncation the pair applies when burning liquidity.

    Raises:
        NoLiquidityError: If total_supply is zero
        ValueError: If liquidity or total_supply is negative
    """
    if liquidity < 0 or total_supply < 0:
        raise ValueError(f"Negative LP amounts: liquidity={liquidity}, total_supply={total_supply}")
    if total_supply == 0:
        raise NoLiquidityError("Pool has no LP token supply")

    return LiquidityPosition(
        liquidity=liquidity,
        total_supply=total_supply,
        balance_celo=mul_div_floor(liquidity, reserves.reserve_celo, total_supply),
        balance_scelo=mul_div_floor(liquidity, reserves.reserve_scelo, total_supply),
    )


def min_celo_to_add_liquidity(amount_scelo: int, reserves: ReservePair) -> int:
    """Minimum CELO needed to pair with amount_scelo at the current pool ratio.

    Rounded up: supplying less CELO than this is rejected by the wrapper's
    ratio guard, supplying more is accepted.

    Raises:
        NoEstablishedPriceError: If the sCELO reserve is zero
        ValueError: If amount_scelo is negative
    """
    if amount_scelo < 0:
        raise ValueError(f"amount_scelo cannot be negative: {amount_scelo}")
    if reserves.reserve_scelo == 0:
        raise NoEstablishedPriceError("Pool has no sCELO reserve, price is not established")
    return mul_div_ceil(amount_scelo, reserves.reserve_celo, reserves.reserve_scelo)


def max_loss_from_price_change(reserve_ratio: DecimalLike) -> Decimal:
    """Maximum impermanent loss when providing liquidity at reserve_ratio.

    Liquidity starts at (r0, R * r0) and ends at (sqrt(R) * r0, sqrt(R) * r0)
    once arbitrage brings the pool back to 1:1. The loss relative to holding
    is

        (R + 1 - 2 * sqrt(R)) / (R + 1)  ==  (sqrt(R) - 1)^2 / (R + 1)

    The squared form avoids cancellation for R close to 1.

        ratio = 1.01 => 0.000012376
        ratio = 1.05 => 0.000297486
        ratio = 1.10 => 0.00113443

    Raises:
        UnboundedRatioError: If reserve_ratio is the unbounded sentinel
        ValueError: If reserve_ratio is below 1
    """
    r = to_decimal(reserve_ratio)
    if r.is_infinite():
        raise UnboundedRatioError("Loss is undefined for an unbounded reserve ratio")
    if r < 1:
        raise ValueError(f"Reserve ratio must be >= 1, got {r}")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        root_gap = decimal_sqrt(r) - 1
        return (root_gap * root_gap) / (r + 1)


__all__ = [
    "liquidity_position_value",
    "min_celo_to_add_liquidity",
    "max_loss_from_price_change",
]
