# -*- coding: utf-8 -*-
"""
ledger_token.tests.conftest
===========================

Fixtures for the ledger core: a fresh in-memory slot store and log sink per
test, a ledger bound to both, and stable 20-byte addresses.
"""
from __future__ import annotations

import hashlib

import pytest

from ledger_token import TokenLedger
from ledger_vm.runtime.events_api import InMemoryEventSink
from ledger_vm.runtime.storage_api import MemoryStore

OWNER = bytes.fromhex("ea674fdde714fd979de3edf0f56aa9716b898ec8")
SAM = bytes.fromhex("db6fd484cfa46eeeb73c71edee823e4812f9e2e1")
ZERO = b"\x00" * 20


def det_address(tag: str) -> bytes:
    """Stable 20-byte address derived from a tag."""
    return hashlib.sha3_256(tag.encode("utf-8")).digest()[:20]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sink() -> InMemoryEventSink:
    return InMemoryEventSink()


@pytest.fixture
def ledger(store: MemoryStore, sink: InMemoryEventSink) -> TokenLedger:
    return TokenLedger(store, sink)


@pytest.fixture
def funded(ledger: TokenLedger) -> TokenLedger:
    """Ledger constructed by OWNER with a supply of 10000."""
    ledger.construct(OWNER, 10000)
    return ledger
