"""
Token ledger host - runtime package

Host-facing collaborators the ledger core is written against:

- storage_api : 32-byte slot store protocol + in-memory backend
- journal     : checkpoint/commit/revert overlay over a slot store
- events_api  : LogEvent record, sink protocol, in-memory sink
- hash_api    : keccak-256 / sha3-256 wrappers
- context     : CallEnv (caller identity) and address coercion
- abi         : Solidity-compatible Endpoint / Client

`abi` depends on the ledger core, so it is not imported here; use
`from ledger_vm.runtime.abi import Endpoint, Client`.
"""

from __future__ import annotations

from ..version import __version__
from .context import CallEnv
from .events_api import InMemoryEventSink, LogEvent
from .journal import JournaledStore
from .storage_api import MemoryStore, SlotStore

__all__ = [
    "__version__",
    "CallEnv",
    "InMemoryEventSink",
    "LogEvent",
    "JournaledStore",
    "MemoryStore",
    "SlotStore",
]
