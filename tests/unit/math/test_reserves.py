"""Tests for the pool reserve ratio."""

from decimal import Decimal

import pytest

from savingsube.errors import UnboundedRatioError
from savingsube.math.reserves import (
    NEUTRAL_RATIO,
    UNBOUNDED_RATIO,
    is_unbounded,
    ratio_to_contract_units,
    reserve_ratio,
)
from savingsube.models.liquidity import ReservePair
from tests.helpers.constants import ONE, SCELO_PER_CELO


def savings_to_celo(amount: int) -> int:
    return amount // SCELO_PER_CELO


class TestReserveRatio:
    """Reserve ratio with sCELO valued in CELO."""

    def test_balanced_pool(self):
        """Equal value on both sides gives exactly 1."""
        reserves = ReservePair(ONE, ONE * SCELO_PER_CELO)
        assert reserve_ratio(reserves, savings_to_celo) == 1

    def test_celo_heavy(self):
        """1.25 CELO against 1 CELO worth of sCELO."""
        reserves = ReservePair(ONE * 5 // 4, ONE * SCELO_PER_CELO)
        assert reserve_ratio(reserves, savings_to_celo) == Decimal("1.25")

    def test_symmetric(self):
        """Swapping which side is ahead gives the same ratio."""
        celo_heavy = ReservePair(ONE * 5 // 4, ONE * SCELO_PER_CELO)
        scelo_heavy = ReservePair(ONE, ONE * SCELO_PER_CELO * 5 // 4)
        assert reserve_ratio(celo_heavy, savings_to_celo) == reserve_ratio(
            scelo_heavy, savings_to_celo
        )

    def test_uses_exchange_rate(self):
        """Raw reserves are never compared without conversion."""
        reserves = ReservePair(ONE, ONE * SCELO_PER_CELO)
        assert reserve_ratio(reserves, lambda s: s) == SCELO_PER_CELO

    def test_empty_pool_is_neutral(self):
        """Empty pool has ratio 1."""
        assert reserve_ratio(ReservePair(0, 0), savings_to_celo) == NEUTRAL_RATIO

    def test_empty_pool_skips_conversion(self):
        """No exchange-rate read is needed for an empty pool."""

        def fail(amount: int) -> int:
            raise AssertionError("should not be called")

        assert reserve_ratio(ReservePair(0, 0), fail) == 1

    def test_one_sided_celo_is_unbounded(self):
        """CELO only gives the unbounded sentinel."""
        ratio = reserve_ratio(ReservePair(ONE, 0), savings_to_celo)
        assert ratio == UNBOUNDED_RATIO
        assert is_unbounded(ratio)

    def test_one_sided_scelo_is_unbounded(self):
        """sCELO only gives the unbounded sentinel."""
        assert is_unbounded(reserve_ratio(ReservePair(0, ONE), savings_to_celo))

    def test_scelo_worth_zero_celo_is_unbounded(self):
        """sCELO dust that converts to 0 CELO counts as an empty side."""
        reserves = ReservePair(ONE, SCELO_PER_CELO - 1)
        assert is_unbounded(reserve_ratio(reserves, savings_to_celo))

    def test_negative_conversion_rejected(self):
        """Negative converted amount raises ValueError."""
        with pytest.raises(ValueError):
            reserve_ratio(ReservePair(ONE, ONE), lambda s: -1)

    def test_ratio_at_least_one(self):
        """Ratio is never below 1."""
        for celo, scelo in [(1, 65536), (3, 65536 * 7), (10**30, 65536 * 3), (5, 65536 * 5)]:
            assert reserve_ratio(ReservePair(celo, scelo), savings_to_celo) >= 1


class TestRatioToContractUnits:
    """Ratio scaled to the wrapper's 1e18 argument."""

    def test_scaled_by_1e18(self):
        """1.01 becomes 1.01e18."""
        assert ratio_to_contract_units(Decimal("1.01")) == 1010000000000000000

    def test_float_input(self):
        """Float ratios are converted through str, without binary noise."""
        assert ratio_to_contract_units(1.05) == 1050000000000000000

    def test_truncates_beyond_18_decimals(self):
        """Digits past 1e-18 are dropped."""
        assert ratio_to_contract_units("1.0000000000000000019") == 10**18 + 1

    def test_neutral(self):
        """Ratio 1 becomes 1e18."""
        assert ratio_to_contract_units(NEUTRAL_RATIO) == 10**18

    def test_unbounded_rejected(self):
        """Unbounded ratio raises UnboundedRatioError."""
        with pytest.raises(UnboundedRatioError):
            ratio_to_contract_units(UNBOUNDED_RATIO)

    def test_below_one_rejected(self):
        """Ratio below 1 raises ValueError."""
        with pytest.raises(ValueError):
            ratio_to_contract_units("0.99")
