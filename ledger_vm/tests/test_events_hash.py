from __future__ import annotations

import pytest

from ledger_vm.errors import EventError, LedgerError
from ledger_vm.runtime.events_api import EventSink, InMemoryEventSink, LogEvent, logs_to_json
from ledger_vm.runtime.hash_api import hash_concat_keccak256, keccak256

ADDR = b"\x11" * 20
T0 = b"\x01" * 32
T1 = b"\x02" * 32


def _ev(n: int = 0) -> LogEvent:
    return LogEvent(address=ADDR, topics=(T0, T1), data=n.to_bytes(32, "big"))


# ---------------------------- hashing ----------------------------------------


def test_keccak_vectors():
    assert keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    assert keccak256(b"Transfer(address,address,uint256)").hex() == (
        "ddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
    )
    assert keccak256(b"Approval(address,address,uint256)").hex() == (
        "8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"
    )


def test_concat_has_no_separator():
    assert hash_concat_keccak256(b"ab", b"c") == keccak256(b"abc")
    assert hash_concat_keccak256() == keccak256(b"")


def test_hash_rejects_non_bytes():
    with pytest.raises(LedgerError) as ei:
        keccak256("abc")  # type: ignore[arg-type]
    assert ei.value.code == "hash_invalid"


# ---------------------------- LogEvent ---------------------------------------


def test_log_event_shape_checks():
    with pytest.raises(EventError):
        LogEvent(address=b"\x11" * 19, topics=(T0,), data=b"")
    with pytest.raises(EventError):
        LogEvent(address=ADDR, topics=(), data=b"")
    with pytest.raises(EventError):
        LogEvent(address=ADDR, topics=(b"\x01" * 31,), data=b"")
    with pytest.raises(EventError):
        LogEvent(address=ADDR, topics=(T0,), data=b"\x00" * 33)


def test_log_event_to_dict():
    ev = _ev(1000)
    d = ev.to_dict()
    assert d["address"] == "0x" + "11" * 20
    assert d["data"].endswith("03e8")
    assert d["topics"] == ["0x" + "01" * 32, "0x" + "02" * 32]
    assert ev.signature == T0


# ---------------------------- sink -------------------------------------------


def test_sink_orders_and_filters(sink):
    assert isinstance(sink, EventSink)
    other = LogEvent(address=ADDR, topics=(T1,), data=b"")
    sink.emit(_ev(1))
    sink.emit(other)
    sink.emit(_ev(2))
    assert [e.data[-1] for e in sink.get_logs(signature=T0)] == [1, 2]
    assert sink.get_logs()[1] is other
    assert len(logs_to_json(sink.get_logs())) == 3
    sink.clear()
    assert len(sink) == 0


def test_sink_rejects_non_events(sink):
    with pytest.raises(EventError):
        sink.emit({"topics": []})  # type: ignore[arg-type]


def test_cap_applies_inside_call_only():
    s = InMemoryEventSink(max_logs_per_call=2)
    for i in range(5):
        s.emit(_ev(i))
    s.open_call()
    s.emit(_ev(5))
    s.emit(_ev(6))
    with pytest.raises(EventError):
        s.emit(_ev(7))
    s.close_call()
    s.emit(_ev(8))
    assert len(s) == 8


def test_cap_defaults_from_config(monkeypatch):
    from ledger_vm.config import load_config

    monkeypatch.setenv("LEDGER_VM_MAX_LOGS_PER_CALL", "1")
    load_config.cache_clear()
    s = InMemoryEventSink()
    s.open_call()
    s.emit(_ev())
    with pytest.raises(EventError):
        s.emit(_ev())


def test_rollback_drops_call_logs(sink):
    sink.emit(_ev(1))
    mark = sink.open_call()
    sink.emit(_ev(2))
    sink.emit(_ev(3))
    sink.rollback(mark)
    assert [e.data[-1] for e in sink.get_logs()] == [1]
