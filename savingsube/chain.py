"""Blockchain access: read calls and sequential transaction submission.

``ChainClient`` is the seam between this package and the node. The web3
implementation talks to a real RPC endpoint. Tests plug in an in-memory
client that speaks the same ABI.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog

from savingsube.errors import TransactionFailedError
from savingsube.models.types import normalize_address

logger = structlog.get_logger()


@dataclass(frozen=True)
class TransactionRequest:
    """An unsigned transaction: target, calldata and attached CELO value.

    ``to`` is None for contract creation.
    """

    to: str | None
    data: str
    value: int = 0
    description: str = ""


@dataclass(frozen=True)
class LogEntry:
    """A single event log from a receipt."""

    address: str
    topics: tuple[bytes, ...]
    data: bytes


@dataclass(frozen=True)
class TransactionReceipt:
    """The parts of a mined receipt this package uses."""

    tx_hash: str
    status: int
    contract_address: str | None = None
    logs: tuple[LogEntry, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.status == 1


class ChainClient(Protocol):
    """Protocol for node access.

    ``send_transaction`` must block until the transaction is mined, which
    gives per-sender ordering for free when calls are made one after another.
    """

    def call(self, to: str, data: str) -> bytes:
        """Execute a read-only call and return the raw return data."""
        ...

    def send_transaction(self, tx: TransactionRequest, sender: str) -> TransactionReceipt:
        """Submit tx from sender and wait for its receipt."""
        ...

    def accounts(self) -> list[str]:
        """Accounts managed by the node (devchain only)."""
        ...


def send_all(
    client: ChainClient,
    txs: Iterable[TransactionRequest],
    sender: str,
) -> list[TransactionReceipt]:
    """Send transactions one by one, each waiting for the previous receipt.

    Raises:
        TransactionFailedError: On the first reverted transaction; later
            transactions are not sent.
    """
    receipts = []
    for tx in txs:
        receipt = client.send_transaction(tx, sender)
        if not receipt.succeeded:
            raise TransactionFailedError(
                f"Transaction {receipt.tx_hash} reverted ({tx.description or 'unnamed'})"
            )
        receipts.append(receipt)
    return receipts


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value[2:] if value.startswith("0x") else value)
    return bytes(value)


class Web3ChainClient:
    """ChainClient backed by a web3 HTTP provider.

    With a private key, transactions are signed locally. Without one they
    are sent unsigned and the node signs with its own unlocked account
    (devchain).
    """

    def __init__(
        self,
        rpc_url: str,
        private_key: str | None = None,
        receipt_timeout: float = 120.0,
    ):
        """Initialize client.

        Args:
            rpc_url: HTTP RPC URL (e.g., "https://forno.celo.org")
            private_key: Hex private key for local signing, or None
            receipt_timeout: Seconds to wait for each receipt
        """
        from web3 import Web3

        self.w3 = Web3(Web3.HTTPProvider(rpc_url))
        self.receipt_timeout = receipt_timeout
        self._account = self.w3.eth.account.from_key(private_key) if private_key else None

    def accounts(self) -> list[str]:
        if self._account is not None:
            return [normalize_address(self._account.address)]
        return [normalize_address(a) for a in self.w3.eth.accounts]

    def call(self, to: str, data: str) -> bytes:
        from web3 import Web3

        result = self.w3.eth.call({"to": Web3.to_checksum_address(to), "data": data})
        return bytes(result)

    def send_transaction(self, tx: TransactionRequest, sender: str) -> TransactionReceipt:
        from web3 import Web3

        params: dict[str, Any] = {
            "from": Web3.to_checksum_address(sender),
            "data": tx.data,
            "value": tx.value,
        }
        if tx.to is not None:
            params["to"] = Web3.to_checksum_address(tx.to)

        logger.debug("sending_transaction", to=tx.to, value=tx.value, description=tx.description)
        if self._account is not None:
            if normalize_address(self._account.address) != normalize_address(sender):
                raise ValueError(f"No signing key for sender {sender}")
            params["nonce"] = self.w3.eth.get_transaction_count(params["from"])
            params["chainId"] = self.w3.eth.chain_id
            params["gasPrice"] = self.w3.eth.gas_price
            params["gas"] = self.w3.eth.estimate_gas(params)
            signed = self._account.sign_transaction(params)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            tx_hash = self.w3.eth.send_transaction(params)

        raw = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        receipt = TransactionReceipt(
            tx_hash="0x" + bytes(raw["transactionHash"]).hex(),
            status=int(raw["status"]),
            contract_address=(
                normalize_address(raw["contractAddress"]) if raw.get("contractAddress") else None
            ),
            logs=tuple(
                LogEntry(
                    address=normalize_address(log["address"]),
                    topics=tuple(_to_bytes(t) for t in log["topics"]),
                    data=_to_bytes(log["data"]),
                )
                for log in raw["logs"]
            ),
        )
        logger.info(
            "transaction_mined",
            tx_hash=receipt.tx_hash,
            status=receipt.status,
            description=tx.description,
        )
        return receipt


__all__ = [
    "ChainClient",
    "TransactionRequest",
    "TransactionReceipt",
    "LogEntry",
    "Web3ChainClient",
    "send_all",
]
