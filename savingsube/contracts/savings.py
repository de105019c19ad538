"""SavingsCELO proxy.

SavingsCELO is an ERC20 (sCELO) that mints shares for deposited CELO. The
CELO <-> sCELO conversions are views on the contract and accrue over time,
so they are never assumed to be exact inverses.
"""

from __future__ import annotations

from savingsube.chain import TransactionRequest
from savingsube.contracts.erc20 import ERC20Token
from savingsube.math.integer import to_uint256


class SavingsCELO(ERC20Token):
    """sCELO token with its deposit and conversion methods."""

    def celo_to_savings(self, celo_amount: int) -> int:
        """sCELO minted today for celo_amount CELO."""
        return self._call_single("celoToSavings(uint256)", [to_uint256(celo_amount)])

    def savings_to_celo(self, savings_amount: int) -> int:
        """CELO value of savings_amount sCELO."""
        return self._call_single("savingsToCELO(uint256)", [to_uint256(savings_amount)])

    def deposit(self, celo_amount: int = 0) -> TransactionRequest:
        """Deposit CELO (sent as value) for sCELO."""
        return self._transaction("deposit()", value=to_uint256(celo_amount))
