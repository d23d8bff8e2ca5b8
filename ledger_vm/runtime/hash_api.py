"""
ledger_vm.runtime.hash_api - deterministic hashing wrappers.

Strictly bytes-in, bytes-out. Keccak-256 (the pre-SHA3 padding used by
Ethereum-style ledgers) comes from PyCryptodome.

Provided APIs
-------------
- keccak256(data) -> bytes
- hash_concat_keccak256(*chunks) -> bytes
"""

from __future__ import annotations

from Crypto.Hash import keccak as _keccak

from ledger_vm.errors import LedgerError


def _ensure_bytes(buf: object, name: str) -> bytes:
    if isinstance(buf, (bytes, bytearray, memoryview)):
        return bytes(buf)
    raise LedgerError(f"{name} must be bytes-like (got {type(buf).__name__})", code="hash_invalid")


def _new_keccak256():
    return _keccak.new(digest_bits=256)


def keccak256(data: bytes | bytearray | memoryview) -> bytes:
    h = _new_keccak256()
    h.update(_ensure_bytes(data, "data"))
    return h.digest()


def hash_concat_keccak256(*chunks: bytes | bytearray | memoryview) -> bytes:
    """Keccak-256 over the plain concatenation of `chunks` (no separators)."""
    h = _new_keccak256()
    for i, c in enumerate(chunks):
        h.update(_ensure_bytes(c, f"chunk[{i}]"))
    return h.digest()


__all__ = [
    "keccak256",
    "hash_concat_keccak256",
]
