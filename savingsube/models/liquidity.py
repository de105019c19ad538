"""Value types for pool reserves and LP positions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReservePair:
    """Ubeswap CELO/sCELO reserves in smallest token units.

    Both reserves at zero means the pool has not been initialized.
    """

    reserve_celo: int
    reserve_scelo: int

    def __post_init__(self) -> None:
        if self.reserve_celo < 0 or self.reserve_scelo < 0:
            raise ValueError(
                f"Reserves cannot be negative: ({self.reserve_celo}, {self.reserve_scelo})"
            )

    @property
    def is_empty(self) -> bool:
        """True if the pool holds no liquidity on either side."""
        return self.reserve_celo == 0 and self.reserve_scelo == 0


@dataclass(frozen=True)
class LiquidityPosition:
    """An LP token holding and the share of each reserve it redeems for.

    Attributes:
        liquidity: LP (ULP) tokens held
        total_supply: Total LP token supply of the pair
        balance_celo: CELO claim, floor(liquidity * reserve_celo / total_supply)
        balance_scelo: sCELO claim, floor(liquidity * reserve_scelo / total_supply)
    """

    liquidity: int
    total_supply: int
    balance_celo: int
    balance_scelo: int
