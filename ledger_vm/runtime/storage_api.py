"""
ledger_vm.runtime.storage_api - host slot store (32-byte key → 32-byte value).

The ledger core is written against the tiny `SlotStore` protocol below; the
host decides what actually backs it. This module ships the default in-process
backend used by tests and the CLI.

Design goals
------------
- Deterministic: pure functions over (key, value) with no wall-clock or I/O.
- Strict shape: keys and values are exactly 32 bytes.
- Absent slots read as zero through the typed helpers.
- Pluggable: any object with get/set/exists satisfies the protocol.

Public API
----------
- SlotStore                       (protocol)
- MemoryStore                     (thread-safe dict-backed store)
- read_u256(store, key) -> int    (absent -> 0)
- write_u256(store, key, value)   (32-byte big-endian)
- read_word(store, key) -> bytes  (absent -> 32 zero bytes)
"""

from __future__ import annotations

import threading
from typing import Dict, Mapping, Optional, Protocol, runtime_checkable

from ledger_vm.errors import ArithmeticFault, StorageError

SLOT_BYTES = 32
ZERO_WORD = b"\x00" * SLOT_BYTES
U256_MAX = (1 << 256) - 1


# ---------------------------- Backend API ---------------------------- #


@runtime_checkable
class SlotStore(Protocol):
    """Minimal interface of the external key-value store."""

    def get(self, key: bytes) -> Optional[bytes]: ...
    def set(self, key: bytes, value: bytes) -> None: ...
    def exists(self, key: bytes) -> bool: ...


def check_key(key: bytes) -> bytes:
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise StorageError("slot key must be bytes", context={"py_type": type(key).__name__})
    b = bytes(key)
    if len(b) != SLOT_BYTES:
        raise StorageError("slot key must be 32 bytes", context={"len": len(b)})
    return b


def check_value(value: bytes) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise StorageError("slot value must be bytes", context={"py_type": type(value).__name__})
    b = bytes(value)
    if len(b) != SLOT_BYTES:
        raise StorageError("slot value must be 32 bytes", context={"len": len(b)})
    return b


class MemoryStore:
    """Thread-safe in-memory slot store for local runs and tests."""

    def __init__(self, initial: Optional[Mapping[bytes, bytes]] = None) -> None:
        self._slots: Dict[bytes, bytes] = {}
        self._lock = threading.RLock()
        for k, v in (initial or {}).items():
            self.set(k, v)

    def get(self, key: bytes) -> Optional[bytes]:
        k = check_key(key)
        with self._lock:
            return self._slots.get(k)

    def set(self, key: bytes, value: bytes) -> None:
        k = check_key(key)
        v = check_value(value)
        with self._lock:
            self._slots[k] = v

    def exists(self, key: bytes) -> bool:
        k = check_key(key)
        with self._lock:
            return k in self._slots

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def snapshot(self) -> Dict[bytes, bytes]:
        """Copy of every written slot."""
        with self._lock:
            return dict(self._slots)

    def export_hex(self) -> Dict[str, str]:
        """Export as {key_hex: value_hex}, sorted by key."""
        with self._lock:
            return {k.hex(): self._slots[k].hex() for k in sorted(self._slots)}

    @classmethod
    def import_hex(cls, data: Mapping[str, str]) -> "MemoryStore":
        store = cls()
        for k_hex, v_hex in data.items():
            if not isinstance(k_hex, str) or not isinstance(v_hex, str):
                raise StorageError("slot dump entries must be hex strings", context={"key": repr(k_hex)})
            try:
                k = bytes.fromhex(k_hex[2:] if k_hex.startswith("0x") else k_hex)
                v = bytes.fromhex(v_hex[2:] if v_hex.startswith("0x") else v_hex)
            except ValueError as e:
                raise StorageError("invalid hex in slot dump", context={"key": k_hex}) from e
            store.set(k, v)
        return store


# ------------------------------ Typed helpers ----------------------------- #


def read_word(store: SlotStore, key: bytes) -> bytes:
    """Raw 32-byte value at `key`; absent slots read as all-zero."""
    raw = store.get(check_key(key))
    return ZERO_WORD if raw is None else raw


def read_u256(store: SlotStore, key: bytes) -> int:
    """Big-endian unsigned integer at `key`; absent slots read as 0."""
    return int.from_bytes(read_word(store, key), "big", signed=False)


def write_u256(store: SlotStore, key: bytes, value: int) -> None:
    """Store `value` as a 32-byte big-endian word. Enforces 0 <= value <= 2^256-1."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise StorageError("write_u256 value must be int")
    if value < 0 or value > U256_MAX:
        raise ArithmeticFault("value does not fit in 256 bits", context={"value": value})
    store.set(check_key(key), value.to_bytes(SLOT_BYTES, "big"))


__all__ = [
    "SLOT_BYTES",
    "ZERO_WORD",
    "U256_MAX",
    "SlotStore",
    "MemoryStore",
    "check_key",
    "check_value",
    "read_word",
    "read_u256",
    "write_u256",
]
