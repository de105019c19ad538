"""Integer mul-div helpers matching on-chain uint256 arithmetic.

Results must match the contracts bit-for-bit, so nothing here touches
floats. Zero divisors raise instead of returning a fallback.
"""

from __future__ import annotations

from savingsube.errors import Uint256OverflowError
from savingsube.models.types import UINT256_MAX


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """Compute floor(a * b / denominator) for non-negative ints.

    Raises:
        ZeroDivisionError: If denominator is zero
    """
    if denominator == 0:
        raise ZeroDivisionError(f"Division by zero: {a} * {b} // 0")
    return (a * b) // denominator


def mul_div_ceil(a: int, b: int, denominator: int) -> int:
    """Compute ceil(a * b / denominator) for non-negative ints.

    Equivalent to: (a * b + denominator - 1) // denominator

    Raises:
        ZeroDivisionError: If denominator is zero
    """
    if denominator == 0:
        raise ZeroDivisionError(f"Ceiling division by zero: {a} * {b}")
    return (a * b + denominator - 1) // denominator


def to_uint256(value: int) -> int:
    """Validate that value fits in a uint256 and return it.

    Raises:
        Uint256OverflowError: If value is negative or exceeds 2^256-1
    """
    if value < 0:
        raise Uint256OverflowError(f"Negative value cannot be uint256: {value}")
    if value > UINT256_MAX:
        raise Uint256OverflowError(f"Value exceeds uint256 max: {value}")
    return value


__all__ = ["mul_div_floor", "mul_div_ceil", "to_uint256"]
