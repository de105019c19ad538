"""ABI encoding helpers for contract calls.

Calls are identified by their canonical Solidity signature, e.g.
``"addLiquidity(uint256,uint256,uint256)"``. The 4-byte selector and the
argument types are both derived from it, so signature and arguments can
never drift apart.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from eth_abi import decode, encode  # type: ignore[attr-defined]
from eth_utils import function_signature_to_4byte_selector, keccak

from savingsube.models.types import normalize_address


def function_selector(signature: str) -> bytes:
    """4-byte selector for a canonical function signature."""
    return function_signature_to_4byte_selector(signature)


def event_topic(signature: str) -> bytes:
    """topic0 for a canonical event signature."""
    return keccak(text=signature)


def parse_argument_types(signature: str) -> list[str]:
    """Extract the argument types from a canonical signature.

    Only flat argument lists are supported (no tuple arguments), which
    covers every call made by this package.

    Raises:
        ValueError: If the signature is malformed
    """
    open_idx = signature.find("(")
    if open_idx <= 0 or not signature.endswith(")"):
        raise ValueError(f"Malformed signature: {signature!r}")
    inner = signature[open_idx + 1 : -1].strip()
    if not inner:
        return []
    types = [t.strip() for t in inner.split(",")]
    if any(not t or " " in t or "(" in t for t in types):
        raise ValueError(f"Malformed signature: {signature!r}")
    return types


def _address_bytes(address: str) -> bytes:
    return bytes.fromhex(normalize_address(address, validate=True)[2:])


def _prepare(abi_type: str, value: Any) -> Any:
    """Convert Python values into what eth_abi expects for abi_type."""
    if abi_type == "address":
        return _address_bytes(value)
    if abi_type == "address[]":
        return [_address_bytes(v) for v in value]
    return value


def encode_arguments(types: Sequence[str], args: Sequence[Any]) -> bytes:
    """ABI-encode args for the given types.

    Raises:
        ValueError: If the number of args does not match the types
    """
    if len(types) != len(args):
        raise ValueError(f"Expected {len(types)} arguments, got {len(args)}")
    return encode(list(types), [_prepare(t, v) for t, v in zip(types, args, strict=True)])


def encode_call(signature: str, args: Sequence[Any] = ()) -> str:
    """Encode a full call (selector + arguments) as 0x-prefixed hex."""
    types = parse_argument_types(signature)
    calldata = function_selector(signature) + encode_arguments(types, args)
    return "0x" + calldata.hex()


def _normalize_output(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return normalize_address(value)
    if abi_type == "address[]":
        return [normalize_address(v) for v in value]
    return value


def decode_result(output_types: Sequence[str], data: bytes) -> tuple[Any, ...]:
    """Decode return data, lowercasing any addresses."""
    values = decode(list(output_types), data)
    return tuple(_normalize_output(t, v) for t, v in zip(output_types, values, strict=True))


def encode_deployment(bytecode: str, constructor_types: Sequence[str], args: Sequence[Any]) -> str:
    """Append ABI-encoded constructor arguments to contract bytecode."""
    code = bytecode[2:] if bytecode.startswith("0x") else bytecode
    if not code:
        raise ValueError("Empty contract bytecode")
    return "0x" + code + encode_arguments(constructor_types, args).hex()


__all__ = [
    "function_selector",
    "event_topic",
    "parse_argument_types",
    "encode_arguments",
    "encode_call",
    "decode_result",
    "encode_deployment",
]
