"""
ledger_vm.runtime.abi - Solidity-compatible calldata and call dispatch.

Wire format
-----------
- selector  = keccak256(signature)[:4], e.g. "transfer(address,uint256)"
- arguments = concatenation of 32-byte words, in declared order
    address : 12 zero bytes || 20 address bytes (non-zero padding rejected)
    uint256 : 32-byte big-endian
- returns   = one 32-byte word (uint256, or bool as 0/1)
- constructor calldata carries arguments only (no selector)

Two halves, mirroring a generated endpoint/client pair:

- `Endpoint` receives calldata, routes it by selector to the ledger core and
  encodes the result. Each call runs in a journal checkpoint and a log-sink
  call scope; any exception reverts both and propagates. Every call,
  views included, faults until the ledger has been deployed.
- `Client` builds calldata for every method and decodes return words, so
  tests and the CLI speak the same format as external callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, Sequence, Tuple, runtime_checkable

from ledger_token import TokenLedger
from ledger_vm.errors import AbiError, ContextError, PreconditionFault

from .context import ZERO_ADDRESS, AddressLike, CallEnv, to_address
from .events_api import EventSink
from .hash_api import keccak256
from .journal import JournaledStore
from .storage_api import U256_MAX, SlotStore

log = logging.getLogger(__name__)

WORD = 32
SELECTOR_BYTES = 4


# ──────────────────────────────────────────────────────────────────────────────
# Word codec
# ──────────────────────────────────────────────────────────────────────────────

def encode_address(value: AddressLike) -> bytes:
    return to_address(value).rjust(WORD, b"\x00")


def encode_uint256(value: int) -> bytes:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0 or value > U256_MAX:
        raise AbiError("uint256 out of range", context={"value": repr(value)})
    return value.to_bytes(WORD, "big")


def encode_bool(value: bool) -> bytes:
    return encode_uint256(1 if value else 0)


def _word(data: bytes, what: str) -> bytes:
    if len(data) != WORD:
        raise AbiError(f"{what} must be one 32-byte word", context={"len": len(data)})
    return bytes(data)


def decode_address(word: bytes) -> bytes:
    w = _word(word, "address")
    if any(w[: WORD - 20]):
        raise AbiError("address word has non-zero padding", context={"word": w.hex()})
    return w[WORD - 20 :]


def decode_uint256(word: bytes) -> int:
    return int.from_bytes(_word(word, "uint256"), "big")


def decode_bool(word: bytes) -> bool:
    n = decode_uint256(word)
    if n > 1:
        raise AbiError("bool word must be 0 or 1", context={"value": n})
    return n == 1


_ENCODERS: Dict[str, Callable[[Any], bytes]] = {
    "address": encode_address,
    "uint256": encode_uint256,
    "bool": encode_bool,
}
_DECODERS: Dict[str, Callable[[bytes], Any]] = {
    "address": decode_address,
    "uint256": decode_uint256,
    "bool": decode_bool,
}


def encode_args(types: Sequence[str], values: Sequence[Any]) -> bytes:
    if len(types) != len(values):
        raise AbiError("argument count mismatch", context={"expected": len(types), "got": len(values)})
    return b"".join(_ENCODERS[t](v) for t, v in zip(types, values))


def decode_args(types: Sequence[str], payload: bytes) -> Tuple[Any, ...]:
    if len(payload) != WORD * len(types):
        raise AbiError(
            "calldata length mismatch",
            context={"expected": WORD * len(types), "got": len(payload)},
        )
    return tuple(_DECODERS[t](payload[i * WORD : (i + 1) * WORD]) for i, t in enumerate(types))


# ──────────────────────────────────────────────────────────────────────────────
# Method table
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MethodSpec:
    name: str
    inputs: Tuple[str, ...]
    output: str
    constant: bool

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return selector(self.signature)


def selector(signature: str) -> bytes:
    return keccak256(signature.encode("ascii"))[:SELECTOR_BYTES]


CONSTRUCTOR_INPUTS: Tuple[str, ...] = ("uint256",)

METHODS: Tuple[MethodSpec, ...] = (
    MethodSpec("balanceOf", ("address",), "uint256", True),
    MethodSpec("totalSupply", (), "uint256", True),
    MethodSpec("transfer", ("address", "uint256"), "bool", False),
    MethodSpec("transferFrom", ("address", "address", "uint256"), "bool", False),
    MethodSpec("approve", ("address", "uint256"), "bool", False),
    MethodSpec("allowance", ("address", "address"), "uint256", True),
)

METHODS_BY_NAME: Dict[str, MethodSpec] = {m.name: m for m in METHODS}
METHODS_BY_SELECTOR: Dict[bytes, MethodSpec] = {m.selector: m for m in METHODS}


def encode_call(name: str, *args: Any) -> bytes:
    meth = METHODS_BY_NAME.get(name)
    if meth is None:
        raise AbiError("unknown method", context={"name": name})
    return meth.selector + encode_args(meth.inputs, args)


def decode_return(name: str, data: bytes) -> Any:
    meth = METHODS_BY_NAME.get(name)
    if meth is None:
        raise AbiError("unknown method", context={"name": name})
    return _DECODERS[meth.output](data)


def encode_constructor(total_supply: int) -> bytes:
    return encode_args(CONSTRUCTOR_INPUTS, (total_supply,))


# ──────────────────────────────────────────────────────────────────────────────
# Endpoint
# ──────────────────────────────────────────────────────────────────────────────

@runtime_checkable
class ScopedEventSink(Protocol):
    def open_call(self) -> int: ...
    def close_call(self) -> None: ...
    def rollback(self, mark: int) -> None: ...


class Endpoint:
    """Entry point for external calls against one ledger instance."""

    def __init__(
        self,
        store: SlotStore,
        sink: EventSink,
        ledger_address: AddressLike = ZERO_ADDRESS,
        *,
        deployed: bool = False,
    ) -> None:
        self._journal = JournaledStore(store)
        self._sink = sink
        self._address = to_address(ledger_address)
        self._ledger = TokenLedger(self._journal, sink, self._address, constructed=deployed)
        self._handlers: Dict[str, Callable[[CallEnv, Tuple[Any, ...]], Any]] = {
            "balanceOf": lambda env, a: self._ledger.balance_of(a[0]),
            "totalSupply": lambda env, a: self._ledger.total_supply(),
            "transfer": lambda env, a: self._ledger.transfer(env.sender, a[0], a[1]),
            "transferFrom": lambda env, a: self._ledger.transfer_from(env.sender, a[0], a[1], a[2]),
            "approve": lambda env, a: self._ledger.approve(env.sender, a[0], a[1]),
            "allowance": lambda env, a: self._ledger.allowance(a[0], a[1]),
        }

    @classmethod
    def attach(cls, store: SlotStore, sink: EventSink, ledger_address: AddressLike = ZERO_ADDRESS) -> "Endpoint":
        """Rebind to a store that was already deployed."""
        return cls(store, sink, ledger_address, deployed=True)

    @property
    def address(self) -> bytes:
        return self._address

    @property
    def ledger(self) -> TokenLedger:
        return self._ledger

    def _check_env(self, env: CallEnv) -> None:
        if env.ledger != self._address:
            raise ContextError(
                "call routed to a different ledger",
                context={"expected": self._address.hex(), "got": env.ledger.hex()},
            )

    def _run(self, fn: Callable[[], Any]) -> Any:
        mark: Optional[int] = self._sink.open_call() if isinstance(self._sink, ScopedEventSink) else None
        self._journal.begin()
        try:
            out = fn()
        except Exception:
            self._journal.revert()
            if mark is not None:
                self._sink.rollback(mark)  # type: ignore[attr-defined]
            log.debug("call aborted; writes and logs rolled back")
            raise
        self._journal.commit()
        if mark is not None:
            self._sink.close_call()  # type: ignore[attr-defined]
        return out

    def deploy(self, env: CallEnv, calldata: bytes) -> None:
        self._check_env(env)
        (total_supply,) = decode_args(CONSTRUCTOR_INPUTS, bytes(calldata))
        self._run(lambda: self._ledger.construct(env.sender, total_supply))
        log.info("deployed ledger %s supply=%d", self._address.hex(), total_supply)

    def call(self, env: CallEnv, calldata: bytes) -> bytes:
        self._check_env(env)
        data = bytes(calldata)
        if len(data) < SELECTOR_BYTES:
            raise AbiError("calldata shorter than a selector", context={"len": len(data)})
        meth = METHODS_BY_SELECTOR.get(data[:SELECTOR_BYTES])
        if meth is None:
            raise AbiError("unknown selector", context={"selector": data[:SELECTOR_BYTES].hex()})
        args = decode_args(meth.inputs, data[SELECTOR_BYTES:])
        if not self._ledger.constructed:
            raise PreconditionFault("ledger not deployed", context={"op": meth.name})
        handler = self._handlers[meth.name]
        out = self._run(lambda: handler(env, args))
        return _ENCODERS[meth.output](out)


# ──────────────────────────────────────────────────────────────────────────────
# Client
# ──────────────────────────────────────────────────────────────────────────────

class Client:
    """
    Calls an `Endpoint` through real calldata.

        client = Client(endpoint, sender)
        client.transfer(to, 1000)          # -> True / False
        client.with_sender(spender).transfer_from(owner, to, 5)
    """

    def __init__(self, endpoint: Endpoint, sender: AddressLike) -> None:
        self._endpoint = endpoint
        self._env = CallEnv(sender=to_address(sender), ledger=endpoint.address)

    @property
    def sender(self) -> bytes:
        return self._env.sender

    def with_sender(self, sender: AddressLike) -> "Client":
        return Client(self._endpoint, sender)

    def deploy(self, total_supply: int) -> None:
        self._endpoint.deploy(self._env, encode_constructor(total_supply))

    def call(self, name: str, *args: Any) -> Any:
        ret = self._endpoint.call(self._env, encode_call(name, *args))
        return decode_return(name, ret)

    def balance_of(self, owner: AddressLike) -> int:
        return self.call("balanceOf", owner)

    def total_supply(self) -> int:
        return self.call("totalSupply")

    def transfer(self, to: AddressLike, amount: int) -> bool:
        return self.call("transfer", to, amount)

    def transfer_from(self, from_: AddressLike, to: AddressLike, amount: int) -> bool:
        return self.call("transferFrom", from_, to, amount)

    def approve(self, spender: AddressLike, value: int) -> bool:
        return self.call("approve", spender, value)

    def allowance(self, owner: AddressLike, spender: AddressLike) -> int:
        return self.call("allowance", owner, spender)


__all__ = [
    "WORD",
    "SELECTOR_BYTES",
    "encode_address",
    "encode_uint256",
    "encode_bool",
    "decode_address",
    "decode_uint256",
    "decode_bool",
    "encode_args",
    "decode_args",
    "MethodSpec",
    "selector",
    "METHODS",
    "METHODS_BY_NAME",
    "METHODS_BY_SELECTOR",
    "CONSTRUCTOR_INPUTS",
    "encode_call",
    "decode_return",
    "encode_constructor",
    "ScopedEventSink",
    "Endpoint",
    "Client",
]
