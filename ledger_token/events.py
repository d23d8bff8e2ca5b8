# -*- coding: utf-8 -*-
"""
ledger_token.events
===================

Exact bytes of the two notifications.

    topics = [keccak256(signature), word(indexed_1), word(indexed_2)]
    data   = word(value)

where `word(address)` left-pads the 20 address bytes to 32 and
`word(amount)` is the 32-byte big-endian amount.

Signatures:
  Transfer(address,address,uint256)  topic0 = 0xddf252ad…b3ef
  Approval(address,address,uint256)  topic0 = 0x8c5be1e5…b925
"""

from __future__ import annotations

from typing import Final

from ledger_vm.runtime.events_api import WORD_BYTES, LogEvent
from ledger_vm.runtime.hash_api import keccak256

from . import EVT_APPROVAL, EVT_TRANSFER, require_address, require_amount

TRANSFER_TOPIC: Final[bytes] = keccak256(EVT_TRANSFER)
APPROVAL_TOPIC: Final[bytes] = keccak256(EVT_APPROVAL)


def address_word(addr: bytes) -> bytes:
    return require_address(addr).rjust(WORD_BYTES, b"\x00")


def u256_word(n: int) -> bytes:
    return require_amount(n).to_bytes(WORD_BYTES, "big")


def transfer_log(ledger: bytes, from_: bytes, to: bytes, value: int) -> LogEvent:
    return LogEvent(
        address=ledger,
        topics=(TRANSFER_TOPIC, address_word(from_), address_word(to)),
        data=u256_word(value),
    )


def approval_log(ledger: bytes, owner: bytes, spender: bytes, value: int) -> LogEvent:
    return LogEvent(
        address=ledger,
        topics=(APPROVAL_TOPIC, address_word(owner), address_word(spender)),
        data=u256_word(value),
    )


__all__ = [
    "TRANSFER_TOPIC",
    "APPROVAL_TOPIC",
    "address_word",
    "u256_word",
    "transfer_log",
    "approval_log",
]
