from __future__ import annotations

import pytest

from ledger_vm.errors import ArithmeticFault, ContextError, InvalidAmount, LedgerError
from ledger_vm.runtime.context import ZERO_ADDRESS, CallEnv, to_address, to_hex

from .conftest import SAM


def test_to_address_accepts_hex_and_bytes():
    raw = bytes.fromhex(SAM[2:])
    assert to_address(SAM) == raw
    assert to_address(SAM[2:].upper()) == raw
    assert to_address(bytearray(raw)) == raw
    assert to_hex(raw) == SAM


@pytest.mark.parametrize("bad", ["0x1234", "zz" * 20, b"\x00" * 19, 12345, None])
def test_to_address_rejects(bad):
    with pytest.raises(ContextError):
        to_address(bad)  # type: ignore[arg-type]


def test_call_env():
    env = CallEnv(sender=SAM)
    assert env.ledger == ZERO_ADDRESS
    assert env.sender == bytes.fromhex(SAM[2:])
    other = CallEnv(sender=b"\xab" * 20, ledger="0x" + "cd" * 20)
    assert other.ledger == b"\xcd" * 20
    with pytest.raises(ContextError):
        CallEnv(sender="0x1234")


def test_error_rendering():
    e = ArithmeticFault("overflow", context={"x": 1})
    assert e.code == "arith_fault"
    assert str(e) == "arith_fault: overflow ({'x': 1})"
    assert e.to_dict() == {"code": "arith_fault", "message": "overflow", "context": {"x": 1}}
    assert isinstance(InvalidAmount("bad"), ValueError)
    assert LedgerError("x", code="custom").code == "custom"


def test_version_env_override(monkeypatch):
    from ledger_vm import __version__
    from ledger_vm.version import BASE_VERSION, compute_version

    assert isinstance(__version__, str) and __version__
    monkeypatch.setenv("LEDGER_VM_VERSION", "9.9.9")
    compute_version.cache_clear()
    try:
        assert compute_version() == "9.9.9"
    finally:
        compute_version.cache_clear()
    monkeypatch.delenv("LEDGER_VM_VERSION")
    assert compute_version().startswith(BASE_VERSION)
