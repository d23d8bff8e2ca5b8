from __future__ import annotations

import pytest

from ledger_vm.config import load_config
from ledger_vm.runtime.events_api import InMemoryEventSink
from ledger_vm.runtime.storage_api import MemoryStore

DEPLOYER = "0xea674fdde714fd979de3edf0f56aa9716b898ec8"
SAM = "0xdb6fd484cfa46eeeb73c71edee823e4812f9e2e1"
CAROL = "0x" + "cc" * 20


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Every test starts from default config; env tweaks stay local to it."""
    for name in ("LEDGER_VM_LOG_LEVEL", "LEDGER_VM_MAX_LOGS_PER_CALL"):
        monkeypatch.delenv(name, raising=False)
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sink() -> InMemoryEventSink:
    return InMemoryEventSink()
