# -*- coding: utf-8 -*-
"""
Fixed-supply fungible token ledger
==================================

`TokenLedger` is the single concrete ledger type: it holds a handle to the
host slot store and log sink and implements the seven public operations.

Public interface
----------------
# one-time
construct(creator: bytes, total_supply: int) -> None

# views (pure)
balance_of(addr: bytes) -> int
total_supply() -> int
allowance(owner: bytes, spender: bytes) -> int
owner() -> bytes                       (informational, not on the ABI)

# state-changing (explicit caller)
transfer(sender: bytes, to: bytes, amount: int) -> bool
approve(owner: bytes, spender: bytes, value: int) -> bool
transfer_from(caller: bytes, from_: bytes, to: bytes, amount: int) -> bool

Call model
----------
Every mutating call runs Validate → Apply → Emit. Validate does all reads and
checks; Apply only writes; Emit asks the sink to record the log. A failed
check returns ``False`` before the first write, so a rejection leaves every
slot and the log untouched. The caller is not told which check failed.

Rejections
----------
- transfer:      amount == 0, balance < amount, to == sender
- transfer_from: allowance < amount, amount == 0, balance < amount, to == from
Zero-amount and self-transfers are rejected rather than treated as no-op
successes.

Faults
------
`ArithmeticFault` is raised for a credit that would overflow, before any
write. With a conserved total supply it is unreachable.
`PreconditionFault` is raised for a second `construct` or a mutating call
before `construct`.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from ledger_vm.errors import PreconditionFault
from ledger_vm.runtime.context import ZERO_ADDRESS
from ledger_vm.runtime.events_api import EventSink
from ledger_vm.runtime.storage_api import SlotStore, read_u256, read_word, write_u256

from . import ADDRESS_BYTES, require_address, require_amount
from .allowances import AllowanceLedger
from .balances import BalanceLedger
from .events import address_word, approval_log, transfer_log
from .keys import OWNER_KEY, TOTAL_SUPPLY_KEY
from .safe_uint import require_add_fits

log = logging.getLogger(__name__)


@runtime_checkable
class TokenInterface(Protocol):
    def construct(self, creator: bytes, total_supply: int) -> None: ...
    def balance_of(self, address: bytes) -> int: ...
    def total_supply(self) -> int: ...
    def transfer(self, sender: bytes, to: bytes, amount: int) -> bool: ...
    def transfer_from(self, caller: bytes, from_: bytes, to: bytes, amount: int) -> bool: ...
    def approve(self, owner: bytes, spender: bytes, value: int) -> bool: ...
    def allowance(self, owner: bytes, spender: bytes) -> int: ...


class TokenLedger:
    def __init__(
        self,
        store: SlotStore,
        sink: EventSink,
        ledger_address: bytes = ZERO_ADDRESS,
        *,
        constructed: bool = False,
    ) -> None:
        self._store = store
        self._sink = sink
        self._address = require_address(ledger_address)
        self._constructed = constructed
        self.balances = BalanceLedger(store)
        self.allowances = AllowanceLedger(store)

    @classmethod
    def attach(cls, store: SlotStore, sink: EventSink, ledger_address: bytes = ZERO_ADDRESS) -> "TokenLedger":
        """Bind to a store whose construction already ran."""
        return cls(store, sink, ledger_address, constructed=True)

    @property
    def address(self) -> bytes:
        return self._address

    @property
    def constructed(self) -> bool:
        return self._constructed

    def _require_constructed(self, op: str) -> None:
        if not self._constructed:
            raise PreconditionFault("ledger not constructed", context={"op": op})

    # ------------------------------------------------------------------
    # Construction (one-time)
    # ------------------------------------------------------------------

    def construct(self, creator: bytes, total_supply: int) -> None:
        if self._constructed:
            raise PreconditionFault("ledger already constructed", context={"op": "construct"})
        creator = require_address(creator)
        require_amount(total_supply)

        write_u256(self._store, TOTAL_SUPPLY_KEY, total_supply)
        self._store.set(OWNER_KEY, address_word(creator))
        self.balances.credit(creator, total_supply, current=0)
        self._constructed = True
        log.debug("constructed ledger creator=%s supply=%d", creator.hex(), total_supply)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def balance_of(self, address: bytes) -> int:
        return self.balances.get(address)

    def total_supply(self) -> int:
        return read_u256(self._store, TOTAL_SUPPLY_KEY)

    def allowance(self, owner: bytes, spender: bytes) -> int:
        return self.allowances.get(owner, spender)

    def owner(self) -> bytes:
        return read_word(self._store, OWNER_KEY)[-ADDRESS_BYTES:]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def transfer(self, sender: bytes, to: bytes, amount: int) -> bool:
        self._require_constructed("transfer")
        sender = require_address(sender)
        to = require_address(to)
        require_amount(amount)

        # Validate
        sender_bal = self.balances.get(sender)
        to_bal = self.balances.get(to)
        if amount == 0 or sender_bal < amount or to == sender:
            log.debug("transfer rejected sender=%s to=%s amount=%d", sender.hex(), to.hex(), amount)
            return False
        require_add_fits(to_bal, amount)

        # Apply
        self.balances.debit(sender, amount, current=sender_bal)
        self.balances.credit(to, amount, current=to_bal)

        # Emit
        self._sink.emit(transfer_log(self._address, sender, to, amount))
        log.debug("transfer sender=%s to=%s amount=%d", sender.hex(), to.hex(), amount)
        return True

    def approve(self, owner: bytes, spender: bytes, value: int) -> bool:
        self._require_constructed("approve")
        owner = require_address(owner)
        spender = require_address(spender)
        require_amount(value)

        self.allowances.set(owner, spender, value)
        self._sink.emit(approval_log(self._address, owner, spender, value))
        log.debug("approve owner=%s spender=%s value=%d", owner.hex(), spender.hex(), value)
        return True

    def transfer_from(self, caller: bytes, from_: bytes, to: bytes, amount: int) -> bool:
        """
        `caller` moves `amount` from `from_` to `to`, spending allowance(from_, caller).
        """
        self._require_constructed("transfer_from")
        caller = require_address(caller)
        from_ = require_address(from_)
        to = require_address(to)
        require_amount(amount)

        # Validate
        allowed = self.allowances.get(from_, caller)
        from_bal = self.balances.get(from_)
        to_bal = self.balances.get(to)
        if allowed < amount or amount == 0 or from_bal < amount or to == from_:
            log.debug(
                "transfer_from rejected caller=%s from=%s to=%s amount=%d",
                caller.hex(), from_.hex(), to.hex(), amount,
            )
            return False
        require_add_fits(to_bal, amount)

        # Apply
        self.allowances.decrease(from_, caller, amount, current=allowed)
        self.balances.debit(from_, amount, current=from_bal)
        self.balances.credit(to, amount, current=to_bal)

        # Emit
        self._sink.emit(transfer_log(self._address, from_, to, amount))
        log.debug("transfer_from caller=%s from=%s to=%s amount=%d", caller.hex(), from_.hex(), to.hex(), amount)
        return True


__all__ = ["TokenInterface", "TokenLedger"]
