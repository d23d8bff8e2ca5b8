"""
ledger_vm.runtime.journal - journaled slot writes with nested checkpoints.

`JournaledStore` layers a stack of overlays on top of any `SlotStore`.
Writes go to the top overlay; reads consult overlays from top → base.
`commit()` merges the top overlay into the next layer (or the base store if
it is the last one). `revert()` discards the top overlay.

Intended usage
--------------
    j = JournaledStore(base)
    j.begin()
    j.set(key, value)
    j.commit()          # or j.revert()

The dispatch layer opens one checkpoint per call. The journal does not
enforce ledger rules; callers validate before writing.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .storage_api import SlotStore, check_key, check_value


class JournaledStore:
    def __init__(self, base: SlotStore) -> None:
        self._base = base
        self._layers: List[Dict[bytes, bytes]] = []

    # --------------------------------------------------------------------- #
    # Checkpointing
    # --------------------------------------------------------------------- #

    def begin(self) -> int:
        """Start a new checkpoint. Returns the new depth."""
        self._layers.append({})
        return len(self._layers)

    def commit(self) -> None:
        if not self._layers:
            raise RuntimeError("commit without an open checkpoint")
        top = self._layers.pop()
        if self._layers:
            self._layers[-1].update(top)
            return
        for k in sorted(top):
            self._base.set(k, top[k])

    def revert(self) -> None:
        if not self._layers:
            raise RuntimeError("revert without an open checkpoint")
        self._layers.pop()

    # --------------------------------------------------------------------- #
    # SlotStore surface
    # --------------------------------------------------------------------- #

    def get(self, key: bytes) -> Optional[bytes]:
        k = check_key(key)
        for layer in reversed(self._layers):
            if k in layer:
                return layer[k]
        return self._base.get(k)

    def set(self, key: bytes, value: bytes) -> None:
        k = check_key(key)
        v = check_value(value)
        if not self._layers:
            self._base.set(k, v)
            return
        self._layers[-1][k] = v

    def exists(self, key: bytes) -> bool:
        k = check_key(key)
        return any(k in layer for layer in self._layers) or self._base.exists(k)


__all__ = ["JournaledStore"]
