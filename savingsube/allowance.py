"""Approval planning for liquidity operations.

Given current and required allowances, decide which approval transactions
must be mined before a liquidity call. Nothing is sent here: the plan is a
list of ApprovalAction, and sending it in order is the caller's job (see
``chain.send_all``). Allowance writes must be mined before the dependent
liquidity call can observe them, so order matters.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

import structlog

from savingsube.chain import ChainClient, TransactionRequest
from savingsube.constants import INFINITE_ALLOWANCE
from savingsube.contracts.erc20 import ERC20Token
from savingsube.models.types import normalize_address

logger = structlog.get_logger()


class ApprovalMethod(str, Enum):
    """How a token grants allowance."""

    # increaseAllowance(spender, delta), used for CELO and sCELO
    INCREASE_ALLOWANCE = "increase_allowance"
    # approve(spender, amount), used for the ULP pair token
    APPROVE = "approve"


@dataclass(frozen=True)
class Allowance:
    """An amount a spender may draw: either exact or unbounded.

    Use ``Allowance.exact(n)`` or ``Allowance.unbounded()``.
    """

    amount: int | None

    def __post_init__(self) -> None:
        if self.amount is not None and self.amount < 0:
            raise ValueError(f"Allowance cannot be negative: {self.amount}")

    @classmethod
    def exact(cls, amount: int) -> Allowance:
        return cls(amount)

    @classmethod
    def unbounded(cls) -> Allowance:
        return cls(None)

    @property
    def is_unbounded(self) -> bool:
        return self.amount is None

    def to_uint256(self) -> int:
        """On-chain amount; unbounded maps to INFINITE_ALLOWANCE."""
        return INFINITE_ALLOWANCE if self.amount is None else self.amount

    def __str__(self) -> str:
        return "unbounded" if self.amount is None else str(self.amount)


@dataclass(frozen=True)
class AllowanceRequest:
    """Required allowance of one token for one spender.

    Attributes:
        token: Token contract address
        spender: Address that will pull the tokens
        current_allowance: Allowance currently granted on-chain
        required_amount: Amount the upcoming operation will pull
        infinite: Grant an unbounded allowance instead of the exact shortfall
        method: increaseAllowance (delta) or approve (absolute)
    """

    token: str
    spender: str
    current_allowance: int
    required_amount: int
    infinite: bool = False
    method: ApprovalMethod = ApprovalMethod.INCREASE_ALLOWANCE

    @property
    def is_satisfied(self) -> bool:
        return self.current_allowance >= self.required_amount


@dataclass(frozen=True)
class ApprovalAction:
    """One approval transaction to send."""

    token: str
    spender: str
    method: ApprovalMethod
    allowance: Allowance

    def to_transaction(self, client: ChainClient) -> TransactionRequest:
        token = ERC20Token(client, self.token)
        amount = self.allowance.to_uint256()
        if self.method is ApprovalMethod.APPROVE:
            return token.approve(self.spender, amount)
        return token.increase_allowance(self.spender, amount)


def plan_approval(request: AllowanceRequest) -> ApprovalAction | None:
    """Approval needed for a single request, or None if already satisfied.

    For increaseAllowance the granted amount is the shortfall
    ``required - current``. For approve it is ``required`` itself. An
    infinite request grants ``Allowance.unbounded()`` either way.
    """
    if request.is_satisfied:
        return None

    if request.infinite:
        allowance = Allowance.unbounded()
    elif request.method is ApprovalMethod.INCREASE_ALLOWANCE:
        allowance = Allowance.exact(request.required_amount - request.current_allowance)
    else:
        allowance = Allowance.exact(request.required_amount)

    return ApprovalAction(
        token=normalize_address(request.token),
        spender=normalize_address(request.spender),
        method=request.method,
        allowance=allowance,
    )


def plan_approvals(requests: Iterable[AllowanceRequest]) -> list[ApprovalAction]:
    """Plan approvals for several requests, preserving their order."""
    actions = []
    for request in requests:
        action = plan_approval(request)
        if action is None:
            logger.debug(
                "allowance_sufficient",
                token=request.token,
                current=request.current_allowance,
                required=request.required_amount,
            )
            continue
        logger.debug(
            "approval_planned",
            token=action.token,
            spender=action.spender,
            method=action.method.value,
            allowance=str(action.allowance),
        )
        actions.append(action)
    return actions


def plan_add_liquidity_approvals(
    celo_token: str,
    savings_token: str,
    spender: str,
    celo_allowance: int,
    scelo_allowance: int,
    amount_celo: int,
    amount_scelo: int,
    infinite: bool = False,
) -> list[ApprovalAction]:
    """Approvals for an add-liquidity call: CELO first, then sCELO."""
    return plan_approvals(
        [
            AllowanceRequest(celo_token, spender, celo_allowance, amount_celo, infinite),
            AllowanceRequest(savings_token, spender, scelo_allowance, amount_scelo, infinite),
        ]
    )


def plan_remove_liquidity_approval(
    pair_token: str,
    router: str,
    ulp_allowance: int,
    amount_ulp: int,
    infinite: bool = False,
) -> list[ApprovalAction]:
    """Approval for the router to pull ULP tokens in removeLiquidity."""
    return plan_approvals(
        [
            AllowanceRequest(
                pair_token,
                router,
                ulp_allowance,
                amount_ulp,
                infinite,
                method=ApprovalMethod.APPROVE,
            )
        ]
    )


__all__ = [
    "ApprovalMethod",
    "Allowance",
    "AllowanceRequest",
    "ApprovalAction",
    "plan_approval",
    "plan_approvals",
    "plan_add_liquidity_approvals",
    "plan_remove_liquidity_approval",
]
