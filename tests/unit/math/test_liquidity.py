"""Tests for LP valuation, minimum deposits and impermanent-loss bounds."""

import decimal
from decimal import Decimal

import pytest

from savingsube.errors import NoEstablishedPriceError, NoLiquidityError, UnboundedRatioError
from savingsube.math.decimal_utils import DECIMAL_HIGH_PREC_CONTEXT
from savingsube.math.liquidity import (
    liquidity_position_value,
    max_loss_from_price_change,
    min_celo_to_add_liquidity,
)
from savingsube.math.reserves import UNBOUNDED_RATIO
from savingsube.models.liquidity import ReservePair
from tests.helpers.constants import ONE, SCELO_PER_CELO


class TestLiquidityPositionValue:
    """LP holding valued in each reserve."""

    def test_full_supply_owns_reserves(self):
        """Holding the whole supply claims both reserves."""
        reserves = ReservePair(1000, 2000)
        position = liquidity_position_value(100, 100, reserves)
        assert position.balance_celo == 1000
        assert position.balance_scelo == 2000

    def test_zero_liquidity(self):
        """No LP tokens claim nothing."""
        position = liquidity_position_value(0, 100, ReservePair(1000, 2000))
        assert position.balance_celo == 0
        assert position.balance_scelo == 0

    def test_rounds_down(self):
        """1/3 of 10 and 11 floor to 3."""
        position = liquidity_position_value(1, 3, ReservePair(10, 11))
        assert (position.balance_celo, position.balance_scelo) == (3, 3)

    def test_carries_amounts(self):
        """A quarter of the supply claims a quarter of each reserve."""
        position = liquidity_position_value(25, 100, ReservePair(400, 800))
        assert position.liquidity == 25
        assert position.total_supply == 100
        assert (position.balance_celo, position.balance_scelo) == (100, 200)

    def test_zero_supply(self):
        """Zero LP supply raises NoLiquidityError."""
        with pytest.raises(NoLiquidityError):
            liquidity_position_value(0, 0, ReservePair(0, 0))

    def test_negative_rejected(self):
        """Negative liquidity raises ValueError."""
        with pytest.raises(ValueError):
            liquidity_position_value(-1, 100, ReservePair(1, 1))


class TestMinCeloToAddLiquidity:
    """CELO needed to match an sCELO amount."""

    def test_one_scelo_at_initial_rate(self):
        """1 sCELO is worth 1/65536 CELO in a pool at the initial rate."""
        reserves = ReservePair(ONE, ONE * SCELO_PER_CELO)
        assert min_celo_to_add_liquidity(ONE, reserves) == 15258789062500

    def test_rounds_up(self):
        """3 * 10 / 7 = 4.29 rounds up to 5."""
        assert min_celo_to_add_liquidity(3, ReservePair(10, 7)) == 5

    def test_dust_needs_one_unit(self):
        """Any non-zero sCELO needs at least 1 wei of CELO."""
        reserves = ReservePair(ONE, ONE * SCELO_PER_CELO)
        assert min_celo_to_add_liquidity(1, reserves) == 1

    def test_zero_amount(self):
        """Zero sCELO needs zero CELO."""
        assert min_celo_to_add_liquidity(0, ReservePair(10, 7)) == 0

    def test_no_scelo_reserve(self):
        """No sCELO reserve raises NoEstablishedPriceError."""
        with pytest.raises(NoEstablishedPriceError):
            min_celo_to_add_liquidity(ONE, ReservePair(ONE, 0))

    def test_negative_rejected(self):
        """Negative amount raises ValueError."""
        with pytest.raises(ValueError):
            min_celo_to_add_liquidity(-1, ReservePair(10, 7))


class TestMaxLossFromPriceChange:
    """Impermanent-loss bound (sqrt(R) - 1)^2 / (R + 1)."""

    def test_balanced_pool_has_no_loss(self):
        """R = 1 loses nothing."""
        assert max_loss_from_price_change(1) == 0

    @pytest.mark.parametrize(
        ("ratio", "expected"),
        [
            ("1.01", Decimal("0.000012376")),
            ("1.05", Decimal("0.000297486")),
            ("1.10", Decimal("0.00113443")),
        ],
    )
    def test_known_values(self, ratio, expected):
        """Reference losses for 1.01, 1.05 and 1.10."""
        loss = max_loss_from_price_change(Decimal(ratio))
        assert abs(loss - expected) < Decimal("1e-8")

    def test_no_cancellation_near_one(self):
        """R = 1 + 1e-40 still gives (delta / 2)^2 / 2, not zero."""
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            delta = Decimal("1e-40")
            ratio = Decimal(1) + delta
            expected = (delta / 2) ** 2 / 2
            loss = max_loss_from_price_change(ratio)
            assert loss > 0
            assert abs(loss - expected) / expected < Decimal("1e-10")

    def test_accepts_float(self):
        """Float 1.05 means exactly 1.05."""
        assert abs(max_loss_from_price_change(1.05) - Decimal("0.000297486")) < Decimal("1e-8")

    def test_monotonic(self):
        """Loss grows with the ratio and stays in (0, 1)."""
        ratios = [Decimal("1.001"), Decimal("1.01"), Decimal("1.1"), Decimal(2), Decimal(100)]
        losses = [max_loss_from_price_change(r) for r in ratios]
        assert losses == sorted(losses)
        assert all(0 < loss < 1 for loss in losses)

    def test_unbounded_rejected(self):
        """Unbounded ratio raises UnboundedRatioError."""
        with pytest.raises(UnboundedRatioError):
            max_loss_from_price_change(UNBOUNDED_RATIO)

    def test_below_one_rejected(self):
        """R < 1 raises ValueError."""
        with pytest.raises(ValueError):
            max_loss_from_price_change(Decimal("0.5"))
