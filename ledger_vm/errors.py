"""
ledger_vm.errors - structured exceptions for the ledger host and core.

Every error carries a short machine-readable ``code``, a human message and an
optional ``context`` mapping, so the dispatch layer and the CLI can render
failures uniformly via ``to_dict()``.

Hierarchy
---------
LedgerError (base)
 ├─ ArithmeticFault   : U256 overflow/underflow; aborts the whole call
 ├─ PreconditionFault : double construction, call before construction
 ├─ InvalidAddress    : not a 20-byte address (also ValueError)
 ├─ InvalidAmount     : not an int in [0, 2**256-1] (also ValueError)
 ├─ StorageError      : malformed slot key/value
 ├─ EventError        : malformed log or per-call log cap exceeded
 ├─ AbiError          : unknown selector, bad calldata length or padding
 └─ ContextError      : caller identity could not be coerced

Rejected transfers/approvals are *not* errors: the core reports them by
returning ``False``.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class LedgerError(Exception):
    """
    Base error.

    Call patterns:

        LedgerError("simple message")
        LedgerError("message", code="some_code", context={...})
    """

    default_code = "ledger_error"

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = str(message)
        self.code = str(code) if code is not None else self.default_code
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        if self.context:
            return f"{self.code}: {self.message} ({self.context})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }


class ArithmeticFault(LedgerError):
    default_code = "arith_fault"


class PreconditionFault(LedgerError):
    default_code = "precondition"


class InvalidAddress(LedgerError, ValueError):
    default_code = "invalid_input"


class InvalidAmount(LedgerError, ValueError):
    default_code = "invalid_input"


class StorageError(LedgerError):
    default_code = "storage_invalid"


class EventError(LedgerError):
    default_code = "event_invalid"


class AbiError(LedgerError):
    default_code = "abi_invalid"


class ContextError(LedgerError):
    default_code = "context_invalid"


__all__ = [
    "LedgerError",
    "ArithmeticFault",
    "PreconditionFault",
    "InvalidAddress",
    "InvalidAmount",
    "StorageError",
    "EventError",
    "AbiError",
    "ContextError",
]
