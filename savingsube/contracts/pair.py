"""Ubeswap (UniswapV2) pair proxy. The pair is also the ULP token."""

from __future__ import annotations

from dataclasses import dataclass

from savingsube.contracts.erc20 import ERC20Token


@dataclass(frozen=True)
class PairReserves:
    """Raw getReserves() result, in token0/token1 order."""

    reserve0: int
    reserve1: int
    block_timestamp_last: int


class UbePair(ERC20Token):
    """LP token plus the pair views."""

    def get_reserves(self) -> PairReserves:
        reserve0, reserve1, timestamp = self._call(
            "getReserves()", output_types=("uint112", "uint112", "uint32")
        )
        return PairReserves(reserve0, reserve1, timestamp)

    def token0(self) -> str:
        return self._call_single("token0()", output_type="address")

    def token1(self) -> str:
        return self._call_single("token1()", output_type="address")
