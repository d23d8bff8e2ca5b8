# -*- coding: utf-8 -*-
"""
ledger_token.balances
=====================

BalanceLedger: per-address balances, one slot per address at
`balance_key(address)`. Absent slots read as zero.

`credit` and `debit` are internal primitives for the transfer engine. They
do not re-validate: the engine proves a debit cannot underflow and a credit
cannot overflow before it calls either one. Checked math still backs them, so
a broken caller faults instead of wrapping.
"""

from __future__ import annotations

from typing import Optional

from ledger_vm.runtime.storage_api import SlotStore, read_u256, write_u256

from .keys import balance_key
from .safe_uint import u256_add, u256_sub


class BalanceLedger:
    def __init__(self, store: SlotStore) -> None:
        self._store = store

    def get(self, address: bytes) -> int:
        return read_u256(self._store, balance_key(address))

    def credit(self, address: bytes, amount: int, *, current: Optional[int] = None) -> int:
        """Write back `old + amount`; returns the new balance."""
        key = balance_key(address)
        old = read_u256(self._store, key) if current is None else current
        new = u256_add(old, amount)
        write_u256(self._store, key, new)
        return new

    def debit(self, address: bytes, amount: int, *, current: Optional[int] = None) -> int:
        """Write back `old - amount`; returns the new balance."""
        key = balance_key(address)
        old = read_u256(self._store, key) if current is None else current
        new = u256_sub(old, amount)
        write_u256(self._store, key, new)
        return new


__all__ = ["BalanceLedger"]
