"""Tests for SavingsCELOWithUbeKit reads and transaction builders."""

from decimal import Decimal

import pytest

from savingsube.contracts.encoding import encode_call
from savingsube.errors import NoEstablishedPriceError, NoLiquidityError, UnboundedRatioError
from savingsube.kit import new_savings_celo_with_ube_kit
from savingsube.math.liquidity import max_loss_from_price_change
from savingsube.math.reserves import is_unbounded
from savingsube.models.liquidity import ReservePair
from tests.helpers.constants import (
    ALICE,
    BOB,
    CELO,
    ONE,
    PAIR,
    REGISTRY,
    ROUTER,
    SAVINGS,
    SCELO_PER_CELO,
    WRAPPER,
)


class TestNewKit:
    """Kit construction from the wrapper address."""

    def test_discovers_collaborators(self, kit):
        """Router, pair and SavingsCELO come from the wrapper."""
        assert kit.contract.address == WRAPPER
        assert kit.router.address == ROUTER
        assert kit.pair.address == PAIR
        assert kit.savings.address == SAVINGS

    def test_celo_from_registry(self, kit, world):
        """CELO address is looked up in the registry."""
        assert kit.celo_token.address == CELO
        assert any(to == REGISTRY for to, _ in world.chain.calls)

    def test_explicit_celo_skips_registry(self, world):
        """Given a CELO address, the registry is not called."""
        kit = new_savings_celo_with_ube_kit(world.chain, WRAPPER, celo_token_address=CELO)
        assert kit.celo_token.address == CELO
        assert all(to != REGISTRY for to, _ in world.chain.calls)


class TestReads:
    """Reads combined with pool math."""

    def test_reserves(self, kit, world):
        """Reserves come from ubeGetReserves."""
        world.seed_pool(2 * ONE, 3 * ONE)
        assert kit.reserves() == ReservePair(2 * ONE, 3 * ONE)

    def test_reserve_ratio(self, kit, world):
        """1.25 CELO per CELO of sCELO gives 1.25."""
        world.seed_pool(ONE * 5 // 4, ONE * SCELO_PER_CELO)
        assert kit.reserve_ratio() == Decimal("1.25")

    def test_reserve_ratio_empty_pool(self, kit):
        """Empty pool gives 1."""
        assert kit.reserve_ratio() == 1

    def test_reserve_ratio_one_sided(self, kit, world):
        """One-sided pool gives the unbounded sentinel."""
        world.seed_pool(ONE, 0)
        assert is_unbounded(kit.reserve_ratio())

    def test_liquidity_balance_of(self, kit, world):
        """Sole LP owns both reserves."""
        world.seed_pool(ONE, ONE * SCELO_PER_CELO, owner=BOB)
        position = kit.liquidity_balance_of(BOB)
        assert position.liquidity == position.total_supply
        assert position.balance_celo == ONE
        assert position.balance_scelo == ONE * SCELO_PER_CELO

    def test_liquidity_balance_of_non_holder(self, kit, world):
        """Non-holder owns nothing."""
        world.seed_pool(ONE, ONE * SCELO_PER_CELO, owner=BOB)
        position = kit.liquidity_balance_of(ALICE)
        assert (position.liquidity, position.balance_celo, position.balance_scelo) == (0, 0, 0)

    def test_liquidity_balance_of_empty_pool(self, kit):
        """No LP supply raises NoLiquidityError."""
        with pytest.raises(NoLiquidityError):
            kit.liquidity_balance_of(ALICE)

    def test_min_celo_to_add_liquidity(self, kit, world):
        """1 sCELO at the initial rate needs 1e18 / 65536 wei."""
        world.seed_pool(ONE, ONE * SCELO_PER_CELO)
        assert kit.min_celo_to_add_liquidity(ONE) == 15258789062500

    def test_min_celo_without_price(self, kit):
        """Empty pool raises NoEstablishedPriceError."""
        with pytest.raises(NoEstablishedPriceError):
            kit.min_celo_to_add_liquidity(ONE)

    def test_max_loss_at_current_ratio(self, kit, world):
        """Loss bound at the pool's current ratio."""
        world.seed_pool(ONE * 105 // 100, ONE * SCELO_PER_CELO)
        assert kit.max_loss_at_current_ratio() == max_loss_from_price_change(Decimal("1.05"))

    def test_max_loss_one_sided(self, kit, world):
        """One-sided pool raises UnboundedRatioError."""
        world.seed_pool(0, ONE)
        with pytest.raises(UnboundedRatioError):
            kit.max_loss_at_current_ratio()


class TestTransactionBuilders:
    """Transactions built by the kit."""

    def test_deposit(self, kit):
        """deposit() to the wrapper with CELO value."""
        tx = kit.deposit(ONE)
        assert (tx.to, tx.value, tx.data) == (WRAPPER, ONE, "0xd0e30db0")

    def test_add_liquidity_scales_ratio(self, kit):
        """Max ratio is passed in 1e18 units."""
        tx = kit.add_liquidity(1, 2, Decimal("1.01"))
        expected = encode_call(
            "addLiquidity(uint256,uint256,uint256)", [1, 2, 1010000000000000000]
        )
        assert tx.data == expected

    def test_approve_add_liquidity_fresh(self, kit):
        """No allowances: increase both, CELO first."""
        txs = kit.approve_add_liquidity(ALICE, 100, 200)
        assert [tx.to for tx in txs] == [CELO, SAVINGS]
        assert txs[0].data == encode_call("increaseAllowance(address,uint256)", [WRAPPER, 100])
        assert txs[1].data == encode_call("increaseAllowance(address,uint256)", [WRAPPER, 200])

    def test_approve_add_liquidity_partial(self, kit, world):
        """Only the missing delta is requested."""
        world.celo.allowances[(ALICE, WRAPPER)] = 50
        world.savings.allowances[(ALICE, WRAPPER)] = 500
        (tx,) = kit.approve_add_liquidity(ALICE, 100, 200)
        assert tx.to == CELO
        assert tx.data == encode_call("increaseAllowance(address,uint256)", [WRAPPER, 50])

    def test_approve_add_liquidity_sufficient(self, kit, world):
        """Existing allowances: nothing to send."""
        world.celo.allowances[(ALICE, WRAPPER)] = 100
        world.savings.allowances[(ALICE, WRAPPER)] = 200
        assert kit.approve_add_liquidity(ALICE, 100, 200) == []

    def test_approve_add_liquidity_is_idempotent_once_sent(self, kit, world):
        """Once mined, the same request plans nothing."""
        for tx in kit.approve_add_liquidity(ALICE, 100, 200):
            world.chain.send_transaction(tx, ALICE)
        assert kit.approve_add_liquidity(ALICE, 100, 200) == []

    def test_approve_remove_liquidity(self, kit):
        """ULP approve for the router."""
        (tx,) = kit.approve_remove_liquidity(ALICE, 40)
        assert tx.to == PAIR
        assert tx.data == encode_call("approve(address,uint256)", [ROUTER, 40])

    def test_remove_liquidity(self, kit):
        """removeLiquidity for CELO/sCELO on the router."""
        tx = kit.remove_liquidity(10, 1, 2, ALICE, deadline=99)
        expected = encode_call(
            "removeLiquidity(address,address,uint256,uint256,uint256,address,uint256)",
            [CELO, SAVINGS, 10, 1, 2, ALICE, 99],
        )
        assert (tx.to, tx.data) == (ROUTER, expected)
