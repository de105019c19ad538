"""Multi-transaction flows from a single sender.

Every step waits for the previous receipt (see ``chain.send_all``), since
later steps depend on state written by earlier ones (minted sCELO,
allowances).
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from savingsube.allowance import AllowanceRequest, plan_approvals
from savingsube.chain import ChainClient, TransactionReceipt, send_all
from savingsube.contracts.erc20 import ERC20Token
from savingsube.contracts.router import UbeRouter, ube_deadline
from savingsube.contracts.savings import SavingsCELO
from savingsube.kit import SavingsCELOWithUbeKit
from savingsube.math.decimal_utils import DecimalLike
from savingsube.models.events import DepositedEvent
from savingsube.models.liquidity import LiquidityPosition

logger = structlog.get_logger()


def deposit(kit: SavingsCELOWithUbeKit, sender: str, celo_amount: int) -> DepositedEvent:
    """Deposit CELO through the wrapper and return the Deposited event."""
    (receipt,) = send_all(kit.client, [kit.deposit(celo_amount)], sender)
    event = kit.parse_deposited(receipt)
    logger.info(
        "deposited",
        sender=sender,
        celo_amount=event.celo_amount,
        savings_amount=event.savings_amount,
        direct=event.direct,
    )
    return event


def ensure_savings_balance(
    savings: SavingsCELO,
    sender: str,
    amount_scelo: int,
) -> TransactionReceipt | None:
    """Mint sCELO via SavingsCELO if sender holds less than amount_scelo.

    Deposits ``savingsToCELO(shortfall) + 1`` CELO; the extra unit covers
    rounding in the conversion.
    """
    shortfall = amount_scelo - savings.balance_of(sender)
    if shortfall <= 0:
        return None
    to_deposit = savings.savings_to_celo(shortfall) + 1
    logger.info("minting_scelo", sender=sender, shortfall=shortfall, celo=to_deposit)
    (receipt,) = send_all(savings.client, [savings.deposit(to_deposit)], sender)
    return receipt


def add_liquidity(
    kit: SavingsCELOWithUbeKit,
    sender: str,
    amount_celo: int,
    amount_scelo: int,
    max_reserve_ratio: DecimalLike,
    infinite: bool = False,
) -> LiquidityPosition:
    """Add liquidity through the wrapper, minting and approving as needed.

    Returns:
        sender's LP position after the operation
    """
    ensure_savings_balance(kit.savings, sender, amount_scelo)
    approvals = kit.approve_add_liquidity(sender, amount_celo, amount_scelo, infinite)
    send_all(kit.client, approvals, sender)
    send_all(
        kit.client,
        [kit.add_liquidity(amount_celo, amount_scelo, max_reserve_ratio)],
        sender,
    )

    position = kit.liquidity_balance_of(sender)
    logger.info(
        "liquidity_added",
        sender=sender,
        balance_celo=position.balance_celo,
        balance_scelo=position.balance_scelo,
        reserve_ratio=str(kit.reserve_ratio()),
    )
    return position


def remove_liquidity(
    kit: SavingsCELOWithUbeKit,
    sender: str,
    amount_ulp: int,
    min_amount_celo: int = 0,
    min_amount_scelo: int = 0,
    infinite: bool = False,
) -> TransactionReceipt:
    """Approve the router if needed, then burn amount_ulp LP tokens."""
    send_all(kit.client, kit.approve_remove_liquidity(sender, amount_ulp, infinite), sender)
    (receipt,) = send_all(
        kit.client,
        [kit.remove_liquidity(amount_ulp, min_amount_celo, min_amount_scelo, sender)],
        sender,
    )
    logger.info("liquidity_removed", sender=sender, amount_ulp=amount_ulp)
    return receipt


def swap_exact_tokens_for_tokens(
    client: ChainClient,
    router: UbeRouter,
    sender: str,
    amount_in: int,
    path: Sequence[str],
    amount_out_min: int = 0,
) -> TransactionReceipt:
    """Increase the router's allowance on path[0] if needed, then swap."""
    token_in = ERC20Token(client, path[0])
    approvals = plan_approvals(
        [
            AllowanceRequest(
                token_in.address,
                router.address,
                token_in.allowance(sender, router.address),
                amount_in,
            )
        ]
    )
    send_all(client, [a.to_transaction(client) for a in approvals], sender)
    (receipt,) = send_all(
        client,
        [
            router.swap_exact_tokens_for_tokens(
                amount_in, amount_out_min, path, sender, ube_deadline()
            )
        ],
        sender,
    )
    logger.info("swapped", sender=sender, amount_in=amount_in, path=list(path))
    return receipt


def initialize_ube_pool(
    client: ChainClient,
    sender: str,
    router: UbeRouter,
    savings: SavingsCELO,
    celo_token: ERC20Token,
    initial_amount: int,
) -> TransactionReceipt:
    """Seed an empty CELO/sCELO pool from initial_amount CELO.

    Half is deposited into SavingsCELO, and both halves are added to the
    pool at exactly the deposited amounts.
    """
    initial_celo = initial_amount // 2
    logger.info("initializing_ube_pool", sender=sender, initial_celo=initial_celo)
    send_all(client, [savings.deposit(initial_celo)], sender)
    initial_scelo = savings.balance_of(sender)

    approvals = plan_approvals(
        [
            AllowanceRequest(
                celo_token.address,
                router.address,
                celo_token.allowance(sender, router.address),
                initial_celo,
            ),
            AllowanceRequest(
                savings.address,
                router.address,
                savings.allowance(sender, router.address),
                initial_scelo,
            ),
        ]
    )
    send_all(client, [a.to_transaction(client) for a in approvals], sender)

    logger.info("adding_liquidity", celo=initial_celo, scelo=initial_scelo)
    (receipt,) = send_all(
        client,
        [
            router.add_liquidity(
                celo_token.address,
                savings.address,
                initial_celo,
                initial_scelo,
                initial_celo,
                initial_scelo,
                sender,
                ube_deadline(),
            )
        ],
        sender,
    )
    return receipt


__all__ = [
    "deposit",
    "ensure_savings_balance",
    "add_liquidity",
    "remove_liquidity",
    "swap_exact_tokens_for_tokens",
    "initialize_ube_pool",
]
