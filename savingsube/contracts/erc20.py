"""ERC20 token proxy (CELO GoldToken, sCELO, ULP all share this surface)."""

from __future__ import annotations

from savingsube.chain import TransactionRequest
from savingsube.contracts.base import ContractProxy
from savingsube.math.integer import to_uint256


class ERC20Token(ContractProxy):
    """Standard ERC20 reads plus the approval writes used here."""

    def balance_of(self, owner: str) -> int:
        return self._call_single("balanceOf(address)", [owner])

    def total_supply(self) -> int:
        return self._call_single("totalSupply()")

    def allowance(self, owner: str, spender: str) -> int:
        return self._call_single("allowance(address,address)", [owner, spender])

    def approve(self, spender: str, amount: int) -> TransactionRequest:
        """Set spender's allowance to amount."""
        return self._transaction("approve(address,uint256)", [spender, to_uint256(amount)])

    def increase_allowance(self, spender: str, amount: int) -> TransactionRequest:
        """Raise spender's allowance by amount (OpenZeppelin extension)."""
        return self._transaction(
            "increaseAllowance(address,uint256)", [spender, to_uint256(amount)]
        )

    def transfer(self, to: str, amount: int) -> TransactionRequest:
        return self._transaction("transfer(address,uint256)", [to, to_uint256(amount)])
