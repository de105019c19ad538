"""High-level client for the SavingsCELOWithUbeV1 wrapper.

Bundles the wrapper with its collaborators (SavingsCELO, Ubeswap pair and
router, CELO token) and combines their reads with the pool math.

Usage:
    from savingsube import Web3ChainClient, new_savings_celo_with_ube_kit

    client = Web3ChainClient("https://forno.celo.org")
    kit = new_savings_celo_with_ube_kit(client, wrapper_address)
    ratio = kit.reserve_ratio()
    txs = kit.approve_add_liquidity(owner, amount_celo, amount_scelo)
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from savingsube.allowance import plan_add_liquidity_approvals, plan_remove_liquidity_approval
from savingsube.chain import ChainClient, TransactionReceipt, TransactionRequest
from savingsube.contracts.erc20 import ERC20Token
from savingsube.contracts.pair import UbePair
from savingsube.contracts.registry import CeloRegistry
from savingsube.contracts.router import UbeRouter
from savingsube.contracts.savings import SavingsCELO
from savingsube.contracts.wrapper import SavingsCELOWithUbe
from savingsube.math.decimal_utils import DecimalLike
from savingsube.math.liquidity import (
    liquidity_position_value,
    max_loss_from_price_change,
    min_celo_to_add_liquidity,
)
from savingsube.math.reserves import ratio_to_contract_units, reserve_ratio
from savingsube.models.events import DepositedEvent
from savingsube.models.liquidity import LiquidityPosition, ReservePair

logger = structlog.get_logger()


def new_savings_celo_with_ube_kit(
    client: ChainClient,
    contract_address: str,
    celo_token_address: str | None = None,
) -> SavingsCELOWithUbeKit:
    """Build a kit by discovering collaborator addresses from the wrapper.

    Args:
        client: Chain access
        contract_address: Deployed SavingsCELOWithUbeV1 address
        celo_token_address: CELO ERC20 address; looked up in the Celo
            registry when omitted
    """
    contract = SavingsCELOWithUbe(client, contract_address)
    router_address = contract.ube_router()
    pair_address = contract.ube_pair()
    savings_address = contract.savings_celo()
    if celo_token_address is None:
        celo_token_address = CeloRegistry(client).gold_token()

    logger.debug(
        "kit_created",
        contract=contract.address,
        router=router_address,
        pair=pair_address,
        savings=savings_address,
        celo=celo_token_address,
    )
    return SavingsCELOWithUbeKit(
        client,
        contract,
        SavingsCELO(client, savings_address),
        UbeRouter(client, router_address),
        UbePair(client, pair_address),
        ERC20Token(client, celo_token_address),
    )


class SavingsCELOWithUbeKit:
    """Reads and transaction builders for the wrapper and its pool.

    Reserves always come from the wrapper's ``ubeGetReserves`` view, which
    returns them already ordered as (CELO, sCELO).
    """

    def __init__(
        self,
        client: ChainClient,
        contract: SavingsCELOWithUbe,
        savings: SavingsCELO,
        router: UbeRouter,
        pair: UbePair,
        celo_token: ERC20Token,
    ):
        self.client = client
        self.contract = contract
        self.savings = savings
        self.router = router
        self.pair = pair
        self.celo_token = celo_token

    # --- Reads ---

    def reserves(self) -> ReservePair:
        return self.contract.ube_get_reserves()

    def reserve_ratio(self) -> Decimal:
        """Current reserve ratio, valuing sCELO via SavingsCELO's rate."""
        return reserve_ratio(self.reserves(), self.savings.savings_to_celo)

    def liquidity_balance_of(self, address: str) -> LiquidityPosition:
        """LP holding of address and the CELO/sCELO it redeems for.

        Raises:
            NoLiquidityError: If the pair has no LP supply
        """
        liquidity = self.pair.balance_of(address)
        total_supply = self.pair.total_supply()
        return liquidity_position_value(liquidity, total_supply, self.reserves())

    def min_celo_to_add_liquidity(self, amount_scelo: int) -> int:
        """Minimum CELO to complement amount_scelo sCELO when adding liquidity.

        Raises:
            NoEstablishedPriceError: If the pool has no sCELO reserve
        """
        return min_celo_to_add_liquidity(amount_scelo, self.reserves())

    def max_loss_at_current_ratio(self) -> Decimal:
        """Impermanent-loss bound for liquidity added at today's ratio."""
        return max_loss_from_price_change(self.reserve_ratio())

    # --- Transaction builders ---

    def deposit(self, celo_amount: int = 0) -> TransactionRequest:
        return self.contract.deposit(celo_amount)

    def add_liquidity(
        self,
        amount_celo: int,
        amount_scelo: int,
        max_reserve_ratio: DecimalLike,
    ) -> TransactionRequest:
        """Add liquidity through the wrapper.

        The wrapper reverts if the pool's reserve ratio after the operation
        would exceed max_reserve_ratio.
        """
        return self.contract.add_liquidity(
            amount_celo,
            amount_scelo,
            ratio_to_contract_units(max_reserve_ratio),
        )

    def approve_add_liquidity(
        self,
        owner: str,
        amount_celo: int,
        amount_scelo: int,
        infinite: bool = False,
    ) -> list[TransactionRequest]:
        """Approval transactions owner must send before add_liquidity.

        Returns an empty list when existing allowances already cover the
        amounts. Send in order, waiting for each.
        """
        spender = self.contract.address
        actions = plan_add_liquidity_approvals(
            celo_token=self.celo_token.address,
            savings_token=self.savings.address,
            spender=spender,
            celo_allowance=self.celo_token.allowance(owner, spender),
            scelo_allowance=self.savings.allowance(owner, spender),
            amount_celo=amount_celo,
            amount_scelo=amount_scelo,
            infinite=infinite,
        )
        return [action.to_transaction(self.client) for action in actions]

    def approve_remove_liquidity(
        self,
        owner: str,
        amount_ulp: int,
        infinite: bool = False,
    ) -> list[TransactionRequest]:
        """Approval for the router to pull amount_ulp LP tokens from owner."""
        actions = plan_remove_liquidity_approval(
            pair_token=self.pair.address,
            router=self.router.address,
            ulp_allowance=self.pair.allowance(owner, self.router.address),
            amount_ulp=amount_ulp,
            infinite=infinite,
        )
        return [action.to_transaction(self.client) for action in actions]

    def remove_liquidity(
        self,
        amount_ulp: int,
        min_amount_celo: int,
        min_amount_scelo: int,
        to: str,
        deadline: int | None = None,
    ) -> TransactionRequest:
        """Burn LP tokens through the router for CELO and sCELO."""
        return self.router.remove_liquidity(
            self.celo_token.address,
            self.savings.address,
            amount_ulp,
            min_amount_celo,
            min_amount_scelo,
            to,
            deadline,
        )

    def parse_deposited(self, receipt: TransactionReceipt) -> DepositedEvent:
        return self.contract.parse_deposited(receipt)
