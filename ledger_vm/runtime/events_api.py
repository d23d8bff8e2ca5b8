"""
ledger_vm.runtime.events_api - log records and pluggable log sinks.

The ledger core decides the exact bytes of each notification (topics and
data); delivering them is the host's job. This module defines the record
type, the sink protocol, and the in-memory sink used by tests and the CLI.

Conventions
-----------
* `address` is the emitting ledger's 20-byte address.
* `topics` are an ordered tuple of 32-byte values; topic 0 is the event
  signature hash.
* `data` is a concatenation of 32-byte words.

Call scoping
------------
`open_call()` returns a mark and starts counting logs against the per-call
cap (`max_logs_per_call` from config). `close_call()` ends the scope and
`rollback(mark)` drops everything emitted since the mark, so a call that
aborts leaves the log untouched.
Outside a call scope no cap applies.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from ledger_vm.config import load_config
from ledger_vm.errors import EventError

from .context import ADDRESS_BYTES

log = logging.getLogger(__name__)

WORD_BYTES = 32


def _b2h(b: bytes) -> str:
    return "0x" + b.hex()


@dataclass(frozen=True)
class LogEvent:
    """A single emitted log: (address, topics, data)."""

    address: bytes
    topics: Tuple[bytes, ...]
    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.address, (bytes, bytearray)) or len(self.address) != ADDRESS_BYTES:
            raise EventError("log address must be 20 bytes")
        topics = tuple(bytes(t) for t in self.topics)
        if not topics:
            raise EventError("log needs at least the signature topic")
        for i, t in enumerate(topics):
            if len(t) != WORD_BYTES:
                raise EventError("topic must be 32 bytes", context={"index": i, "len": len(t)})
        data = bytes(self.data)
        if len(data) % WORD_BYTES:
            raise EventError("log data must be whole 32-byte words", context={"len": len(data)})
        object.__setattr__(self, "address", bytes(self.address))
        object.__setattr__(self, "topics", topics)
        object.__setattr__(self, "data", data)

    @property
    def signature(self) -> bytes:
        return self.topics[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": _b2h(self.address),
            "topics": [_b2h(t) for t in self.topics],
            "data": _b2h(self.data),
        }


@runtime_checkable
class EventSink(Protocol):
    def emit(self, event: LogEvent) -> None:
        """Record one log in emission order."""


class InMemoryEventSink:
    """Ordered, RAM-only log sink."""

    def __init__(self, max_logs_per_call: Optional[int] = None) -> None:
        self._logs: List[LogEvent] = []
        self._lock = threading.RLock()
        self._call_start: Optional[int] = None
        self._cap = max_logs_per_call if max_logs_per_call is not None else load_config().max_logs_per_call

    # --- call scoping -------------------------------------------------------

    def open_call(self) -> int:
        with self._lock:
            self._call_start = len(self._logs)
            return self._call_start

    def close_call(self) -> None:
        with self._lock:
            self._call_start = None

    def rollback(self, mark: int) -> None:
        with self._lock:
            dropped = len(self._logs) - mark
            del self._logs[mark:]
            self._call_start = None
        if dropped:
            log.debug("dropped %d log(s) from aborted call", dropped)

    # --- EventSink ----------------------------------------------------------

    def emit(self, event: LogEvent) -> None:
        if not isinstance(event, LogEvent):
            raise EventError("sink accepts LogEvent only", context={"py_type": type(event).__name__})
        with self._lock:
            if self._call_start is not None and len(self._logs) - self._call_start >= self._cap:
                raise EventError("too many logs in one call", context={"cap": self._cap})
            self._logs.append(event)

    # --- queries ------------------------------------------------------------

    def get_logs(self, *, signature: Optional[bytes] = None) -> List[LogEvent]:
        with self._lock:
            if signature is None:
                return list(self._logs)
            return [e for e in self._logs if e.signature == signature]

    def __len__(self) -> int:
        with self._lock:
            return len(self._logs)

    def clear(self) -> None:
        with self._lock:
            self._logs.clear()
            self._call_start = None


def logs_to_json(logs: Sequence[LogEvent]) -> List[Dict[str, Any]]:
    return [e.to_dict() for e in logs]


__all__ = [
    "LogEvent",
    "EventSink",
    "InMemoryEventSink",
    "logs_to_json",
    "WORD_BYTES",
]
