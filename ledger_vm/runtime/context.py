"""
ledger_vm.runtime.context - caller identity for the current invocation.

`CallEnv` is injected by the host for every call so the ledger can read who
is calling in a deterministic way. It contains only pure data.

- Addresses are raw 20-byte values.
- Hex strings (with or without "0x") are accepted by helpers and normalized
  to bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ledger_vm.errors import ContextError

ADDRESS_BYTES = 20
ZERO_ADDRESS = b"\x00" * ADDRESS_BYTES

AddressLike = Union[bytes, bytearray, memoryview, str]


def _strip_0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_address(value: AddressLike) -> bytes:
    """
    Coerce `value` to a 20-byte address.
    - str is read as hex (with or without '0x') and must be 40 digits.
    - bytes-like must already be 20 bytes.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        b = bytes(value)
    elif isinstance(value, str):
        h = _strip_0x(value.strip())
        if len(h) != ADDRESS_BYTES * 2:
            raise ContextError("address hex must be 40 digits", context={"value": value})
        try:
            b = bytes.fromhex(h)
        except ValueError as e:
            raise ContextError("invalid address hex", context={"value": value}) from e
    else:
        raise ContextError(f"cannot convert type {type(value).__name__} to address")
    if len(b) != ADDRESS_BYTES:
        raise ContextError("address must be 20 bytes", context={"len": len(b)})
    return b


def to_hex(b: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as 0x-prefixed lowercase hex."""
    return "0x" + bytes(b).hex()


@dataclass(frozen=True)
class CallEnv:
    """
    Per-call environment.

    Fields
    ------
    sender: the caller of the current invocation.
    ledger: the ledger's own address; used as the emitter of its logs.
    """

    sender: bytes
    ledger: bytes = ZERO_ADDRESS

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", to_address(self.sender))
        object.__setattr__(self, "ledger", to_address(self.ledger))


__all__ = [
    "ADDRESS_BYTES",
    "ZERO_ADDRESS",
    "AddressLike",
    "to_address",
    "to_hex",
    "CallEnv",
]
