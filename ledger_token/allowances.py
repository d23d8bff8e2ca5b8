# -*- coding: utf-8 -*-
"""
ledger_token.allowances
=======================

AllowanceLedger: delegated-spend accounting, one slot per ordered
(owner, spender) pair at `allowance_key(owner, spender)`.

`set` is a flat overwrite: a later approval fully replaces an earlier one,
even while a delegated spend is outstanding. Callers that need to avoid the
well-known approve race must set the allowance to zero first.
"""

from __future__ import annotations

from typing import Optional

from ledger_vm.runtime.storage_api import SlotStore, read_u256, write_u256

from . import require_amount
from .keys import allowance_key
from .safe_uint import u256_sub


class AllowanceLedger:
    def __init__(self, store: SlotStore) -> None:
        self._store = store

    def get(self, owner: bytes, spender: bytes) -> int:
        return read_u256(self._store, allowance_key(owner, spender))

    def set(self, owner: bytes, spender: bytes, amount: int) -> None:
        write_u256(self._store, allowance_key(owner, spender), require_amount(amount))

    def decrease(self, owner: bytes, spender: bytes, amount: int, *, current: Optional[int] = None) -> int:
        """Write back `old - amount`; the caller has already proven no underflow."""
        key = allowance_key(owner, spender)
        old = read_u256(self._store, key) if current is None else current
        new = u256_sub(old, amount)
        write_u256(self._store, key, new)
        return new


__all__ = ["AllowanceLedger"]
