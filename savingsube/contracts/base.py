"""Base class for thin contract proxies."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from savingsube.chain import ChainClient, TransactionRequest
from savingsube.contracts.encoding import decode_result, encode_call
from savingsube.models.types import normalize_address


class ContractProxy:
    """A contract at a fixed address, reached through a ChainClient.

    Views are executed immediately. State-changing methods only build a
    TransactionRequest; sending it is up to the caller.
    """

    def __init__(self, client: ChainClient, address: str):
        self.client = client
        self.address = normalize_address(address, validate=True)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"

    def _call(
        self,
        signature: str,
        args: Sequence[Any] = (),
        output_types: Sequence[str] = ("uint256",),
    ) -> tuple[Any, ...]:
        raw = self.client.call(self.address, encode_call(signature, args))
        return decode_result(output_types, raw)

    def _call_single(
        self,
        signature: str,
        args: Sequence[Any] = (),
        output_type: str = "uint256",
    ) -> Any:
        return self._call(signature, args, (output_type,))[0]

    def _transaction(
        self,
        signature: str,
        args: Sequence[Any] = (),
        value: int = 0,
    ) -> TransactionRequest:
        return TransactionRequest(
            to=self.address,
            data=encode_call(signature, args),
            value=value,
            description=f"{type(self).__name__}.{signature.split('(')[0]}",
        )
