"""
ledger_vm - host runtime for the fixed-supply token ledger.

Small, stable façade:

- __version__
- deploy(total_supply, deployer, *, store=None, sink=None, ledger_address=ZERO) -> Endpoint
    Fresh (or given) store and sink, constructor run once as `deployer`.
- attach(store, sink, ledger_address=ZERO) -> Endpoint
    Rebind to an already-deployed store.

Imports of the dispatch layer are lazy so the core and runtime stay importable
in either order.
"""

from __future__ import annotations

import importlib
from typing import Any, Optional

from .version import __version__


def deploy(
    total_supply: int,
    deployer: Any,
    *,
    store: Optional[Any] = None,
    sink: Optional[Any] = None,
    ledger_address: Any = b"\x00" * 20,
) -> Any:
    """Deploy a ledger and return its Endpoint."""
    abi = importlib.import_module(".runtime.abi", __name__)
    rt = importlib.import_module(".runtime", __name__)
    endpoint = abi.Endpoint(
        store if store is not None else rt.MemoryStore(),
        sink if sink is not None else rt.InMemoryEventSink(),
        ledger_address,
    )
    abi.Client(endpoint, deployer).deploy(total_supply)
    return endpoint


def attach(store: Any, sink: Any, ledger_address: Any = b"\x00" * 20) -> Any:
    abi = importlib.import_module(".runtime.abi", __name__)
    return abi.Endpoint.attach(store, sink, ledger_address)


__all__ = ["__version__", "deploy", "attach"]
