# -*- coding: utf-8 -*-
"""
ledger_token
============

Accounting core of a fixed-supply fungible token: balances, allowances and
the validate-then-write transfer engine, all stored as 32-byte slots in a
host-provided key-value store.

Layout
------
- keys        : slot key derivation (fixed slots, balance keys, allowance keys)
- safe_uint   : checked U256 arithmetic (faults, never wraps)
- balances    : BalanceLedger (get / credit / debit)
- allowances  : AllowanceLedger (get / set / decrease)
- events      : exact topic/data bytes for Transfer and Approval
- ledger      : TokenLedger (construct, transfer, transfer_from, approve,
                balance_of, total_supply, allowance) and TokenInterface

Conventions
-----------
Addresses are raw 20-byte `bytes`. Amounts are Python ints in
[0, 2**256-1]. Hex rendering is a host/UI concern (see ledger_vm.runtime.context).

This package-level module only holds shared constants and input guards; the
submodules import them from here, so they are defined before the re-exports
at the bottom.
"""

from __future__ import annotations

from typing import Final

from ledger_vm.errors import InvalidAddress, InvalidAmount
from ledger_vm.runtime.context import ADDRESS_BYTES
from ledger_vm.runtime.storage_api import U256_MAX

EVT_TRANSFER: Final[bytes] = b"Transfer(address,address,uint256)"
EVT_APPROVAL: Final[bytes] = b"Approval(address,address,uint256)"


def require_address(addr: bytes) -> bytes:
    """Return `addr` as immutable bytes; it must be exactly 20 bytes."""
    if not isinstance(addr, (bytes, bytearray)) or len(addr) != ADDRESS_BYTES:
        raise InvalidAddress(
            "address must be 20 bytes",
            context={"py_type": type(addr).__name__, "len": len(addr) if isinstance(addr, (bytes, bytearray)) else None},
        )
    return bytes(addr)


def require_amount(n: int) -> int:
    """Ensure `n` is an integer amount in [0, 2**256-1]."""
    if not isinstance(n, int) or isinstance(n, bool) or n < 0 or n > U256_MAX:
        raise InvalidAmount("amount must be an int in [0, 2**256-1]", context={"value": repr(n)})
    return n


from .ledger import TokenInterface, TokenLedger  # noqa: E402

__all__ = [
    "ADDRESS_BYTES",
    "U256_MAX",
    "EVT_TRANSFER",
    "EVT_APPROVAL",
    "require_address",
    "require_amount",
    "TokenInterface",
    "TokenLedger",
]
