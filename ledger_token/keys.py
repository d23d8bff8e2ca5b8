# -*- coding: utf-8 -*-
"""
ledger_token.keys
=================

Slot key derivation. Pure functions, no storage I/O.

Key families
------------
- fixed slots : TAG || 31 zero bytes           (total supply = 0x02, owner = 0x03)
- balances    : 0x01 || 11 zero bytes || addr  (address zero-extended, tag in byte 0)
- allowances  : keccak256(b"allowance_key" || owner || spender)

A balance key can never equal a fixed slot: the fixed slots have tags 2 and 3
in byte 0 while every balance key has tag 1. Allowance keys are hashes, so
`allowance_key(a, b) != allowance_key(b, a)` and collisions with any other
family are cryptographically infeasible.
"""

from __future__ import annotations

from typing import Final

from ledger_vm.runtime.hash_api import hash_concat_keccak256
from ledger_vm.runtime.storage_api import SLOT_BYTES

from . import ADDRESS_BYTES, require_address

BALANCE_TAG: Final[int] = 0x01
TOTAL_SUPPLY_TAG: Final[int] = 0x02
OWNER_TAG: Final[int] = 0x03

ALLOWANCE_LABEL: Final[bytes] = b"allowance_key"


def _fixed_key(tag: int) -> bytes:
    return bytes([tag]) + b"\x00" * (SLOT_BYTES - 1)


TOTAL_SUPPLY_KEY: Final[bytes] = _fixed_key(TOTAL_SUPPLY_TAG)
OWNER_KEY: Final[bytes] = _fixed_key(OWNER_TAG)


def balance_key(address: bytes) -> bytes:
    addr = require_address(address)
    key = bytearray(SLOT_BYTES - ADDRESS_BYTES) + addr
    key[0] = BALANCE_TAG
    return bytes(key)


def allowance_key(owner: bytes, spender: bytes) -> bytes:
    return hash_concat_keccak256(ALLOWANCE_LABEL, require_address(owner), require_address(spender))


__all__ = [
    "BALANCE_TAG",
    "TOTAL_SUPPLY_TAG",
    "OWNER_TAG",
    "ALLOWANCE_LABEL",
    "TOTAL_SUPPLY_KEY",
    "OWNER_KEY",
    "balance_key",
    "allowance_key",
]
