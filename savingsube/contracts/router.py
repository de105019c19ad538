"""Ubeswap router (UniswapV2Router02) proxy."""

from __future__ import annotations

import time
from collections.abc import Sequence

from savingsube.chain import TransactionRequest
from savingsube.constants import DEADLINE_OFFSET_SECONDS
from savingsube.contracts.base import ContractProxy
from savingsube.math.integer import to_uint256


def ube_deadline(now: float | None = None) -> int:
    """Router deadline: current Unix time plus DEADLINE_OFFSET_SECONDS."""
    if now is None:
        now = time.time()
    return int(now) + DEADLINE_OFFSET_SECONDS


class UbeRouter(ContractProxy):
    """Liquidity and swap entry points of the router."""

    def add_liquidity(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int | None = None,
    ) -> TransactionRequest:
        return self._transaction(
            "addLiquidity(address,address,uint256,uint256,uint256,uint256,address,uint256)",
            [
                token_a,
                token_b,
                to_uint256(amount_a_desired),
                to_uint256(amount_b_desired),
                to_uint256(amount_a_min),
                to_uint256(amount_b_min),
                to,
                ube_deadline() if deadline is None else deadline,
            ],
        )

    def remove_liquidity(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int | None = None,
    ) -> TransactionRequest:
        return self._transaction(
            "removeLiquidity(address,address,uint256,uint256,uint256,address,uint256)",
            [
                token_a,
                token_b,
                to_uint256(liquidity),
                to_uint256(amount_a_min),
                to_uint256(amount_b_min),
                to,
                ube_deadline() if deadline is None else deadline,
            ],
        )

    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int | None = None,
    ) -> TransactionRequest:
        if len(path) < 2:
            raise ValueError(f"Swap path needs at least two tokens, got {len(path)}")
        return self._transaction(
            "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)",
            [
                to_uint256(amount_in),
                to_uint256(amount_out_min),
                list(path),
                to,
                ube_deadline() if deadline is None else deadline,
            ],
        )
