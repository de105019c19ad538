"""SavingsCELOWithUbeV1 wrapper contract proxy."""

from __future__ import annotations

from savingsube.chain import TransactionReceipt, TransactionRequest
from savingsube.contracts.base import ContractProxy
from savingsube.contracts.encoding import decode_result, event_topic
from savingsube.errors import EventNotFoundError
from savingsube.math.integer import to_uint256
from savingsube.models.events import DepositedEvent
from savingsube.models.liquidity import ReservePair
from savingsube.models.types import normalize_address

DEPOSITED_EVENT = "Deposited(address,uint256,uint256,bool)"
DEPOSITED_TOPIC = event_topic(DEPOSITED_EVENT)


class SavingsCELOWithUbe(ContractProxy):
    """Routes CELO deposits to SavingsCELO or the Ubeswap pool, whichever
    yields more sCELO, and adds liquidity behind a reserve-ratio guard."""

    def ube_get_reserves(self) -> ReservePair:
        """Pool reserves already ordered as (CELO, sCELO)."""
        reserve_celo, reserve_scelo = self._call(
            "ubeGetReserves()", output_types=("uint256", "uint256")
        )
        return ReservePair(reserve_celo=reserve_celo, reserve_scelo=reserve_scelo)

    def ube_router(self) -> str:
        return self._call_single("ubeRouter()", output_type="address")

    def ube_pair(self) -> str:
        return self._call_single("ubePair()", output_type="address")

    def savings_celo(self) -> str:
        return self._call_single("savingsCELO()", output_type="address")

    def deposit(self, celo_amount: int = 0) -> TransactionRequest:
        return self._transaction("deposit()", value=to_uint256(celo_amount))

    def add_liquidity(
        self,
        amount_celo: int,
        amount_scelo: int,
        max_reserve_ratio_scaled: int,
    ) -> TransactionRequest:
        """addLiquidity with the ratio guard already in 1e18 fixed point."""
        return self._transaction(
            "addLiquidity(uint256,uint256,uint256)",
            [
                to_uint256(amount_celo),
                to_uint256(amount_scelo),
                to_uint256(max_reserve_ratio_scaled),
            ],
        )

    def parse_deposited(self, receipt: TransactionReceipt) -> DepositedEvent:
        """Decode the last Deposited event this contract emitted in receipt.

        Raises:
            EventNotFoundError: If the receipt has no such event
        """
        for log in reversed(receipt.logs):
            if log.address != self.address or len(log.topics) < 2:
                continue
            if log.topics[0] != DEPOSITED_TOPIC:
                continue
            celo_amount, savings_amount, direct = decode_result(
                ("uint256", "uint256", "bool"), log.data
            )
            return DepositedEvent(
                sender=normalize_address(log.topics[1][-20:].hex()),
                celo_amount=celo_amount,
                savings_amount=savings_amount,
                direct=direct,
            )
        raise EventNotFoundError(f"No Deposited event from {self.address} in {receipt.tx_hash}")
