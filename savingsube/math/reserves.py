"""Reserve ratio of the Ubeswap CELO/sCELO pool.

The ratio measures how far the pool has drifted from a 1:1 value balance.
sCELO reserves are first converted to CELO terms through SavingsCELO's
exchange rate, then the larger of ratio and reciprocal is taken, so the
result does not depend on which side is ahead:

    ratio = max(celo / scelo_as_celo, scelo_as_celo / celo)  >= 1
"""

from __future__ import annotations

import decimal
from collections.abc import Callable
from decimal import ROUND_DOWN, Decimal

from savingsube.constants import RATIO_SCALE
from savingsube.errors import UnboundedRatioError
from savingsube.math.decimal_utils import (
    DECIMAL_HIGH_PREC_CONTEXT,
    DecimalLike,
    decimal_div,
    to_decimal,
)
from savingsube.models.liquidity import ReservePair

# Ratio of a pool holding only one of the two assets
UNBOUNDED_RATIO = Decimal("Infinity")

# Ratio of a perfectly balanced (or empty) pool
NEUTRAL_RATIO = Decimal(1)


def reserve_ratio(reserves: ReservePair, shares_to_base: Callable[[int], int]) -> Decimal:
    """Compute the reserve ratio of the pool.

    Args:
        reserves: Current pool reserves
        shares_to_base: sCELO -> CELO conversion (SavingsCELO ``savingsToCELO``).
            Monotonic but not necessarily linear.

    Returns:
        Ratio >= 1. ``NEUTRAL_RATIO`` for an empty pool, ``UNBOUNDED_RATIO``
        when exactly one side is zero.
    """
    if reserves.is_empty:
        return NEUTRAL_RATIO

    scelo_as_celo = shares_to_base(reserves.reserve_scelo)
    if scelo_as_celo < 0:
        raise ValueError(f"Exchange rate returned a negative amount: {scelo_as_celo}")
    if reserves.reserve_celo == 0 or scelo_as_celo == 0:
        return UNBOUNDED_RATIO

    celo = reserves.reserve_celo
    return max(decimal_div(celo, scelo_as_celo), decimal_div(scelo_as_celo, celo))


def is_unbounded(ratio: DecimalLike) -> bool:
    """True if ratio is the one-sided pool sentinel."""
    return to_decimal(ratio).is_infinite()


def ratio_to_contract_units(ratio: DecimalLike) -> int:
    """Scale a reserve ratio to the wrapper's 1e18 fixed-point argument.

    Digits past the 18th decimal are truncated, which only tightens the
    on-chain guard.

    Raises:
        UnboundedRatioError: If ratio is the unbounded sentinel
        ValueError: If ratio is below 1
    """
    r = to_decimal(ratio)
    if r.is_infinite():
        raise UnboundedRatioError("Cannot pass an unbounded reserve ratio to the contract")
    if r < 1:
        raise ValueError(f"Reserve ratio must be >= 1, got {r}")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return int((r * RATIO_SCALE).to_integral_value(rounding=ROUND_DOWN))


__all__ = [
    "UNBOUNDED_RATIO",
    "NEUTRAL_RATIO",
    "reserve_ratio",
    "is_unbounded",
    "ratio_to_contract_units",
]
