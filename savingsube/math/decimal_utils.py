"""High-precision Decimal utilities for ratio and loss calculations.

All Decimal math on token amounts must run under the high-precision context
to avoid rounding artifacts with very large values (up to 10^77 for uint256).
"""

from __future__ import annotations

import decimal
from decimal import Decimal

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

DecimalLike = Decimal | int | float | str


def to_decimal(value: DecimalLike) -> Decimal:
    """Convert a number to Decimal without binary float artifacts.

    Floats go through ``str`` so that ``1.05`` becomes ``Decimal("1.05")``
    rather than its exact binary expansion.

    Raises:
        ValueError: If the value is not a finite or infinite number (NaN)
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError("Cannot convert bool to Decimal")
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(value)
        except decimal.InvalidOperation as err:
            raise ValueError(f"Not a decimal number: {value!r}") from err
    if result.is_nan():
        raise ValueError("NaN is not a valid amount or ratio")
    return result


def decimal_div(a: DecimalLike, b: DecimalLike) -> Decimal:
    """Divide with high precision.

    Raises:
        ZeroDivisionError: If b is zero
    """
    divisor = to_decimal(b)
    if divisor == 0:
        raise ZeroDivisionError(f"Decimal division by zero: {a} / 0")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return to_decimal(a) / divisor


def decimal_sqrt(value: DecimalLike) -> Decimal:
    """Square root with high precision.

    Raises:
        ValueError: If value is negative
    """
    d = to_decimal(value)
    if d < 0:
        raise ValueError(f"Square root of negative value: {d}")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return d.sqrt()


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "DecimalLike",
    "to_decimal",
    "decimal_div",
    "decimal_sqrt",
]
