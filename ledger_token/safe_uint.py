# -*- coding: utf-8 -*-
"""
ledger_token.safe_uint
======================

Checked unsigned 256-bit arithmetic. Every operation either returns an exact
result in [0, U256_MAX] or raises `ArithmeticFault`; nothing wraps.
"""

from __future__ import annotations

from ledger_vm.errors import ArithmeticFault

from . import U256_MAX, require_amount


def u256_add(x: int, y: int) -> int:
    """Checked add: fault on overflow."""
    require_amount(x)
    require_amount(y)
    s = x + y
    if s > U256_MAX:
        raise ArithmeticFault("u256 addition overflow", context={"x": x, "y": y})
    return s


def u256_sub(x: int, y: int) -> int:
    """Checked sub: fault on underflow (y > x)."""
    require_amount(x)
    require_amount(y)
    if y > x:
        raise ArithmeticFault("u256 subtraction underflow", context={"x": x, "y": y})
    return x - y


def require_add_fits(x: int, y: int) -> None:
    """Fault now if `x + y` would overflow; used to check credits before any write."""
    u256_add(x, y)


__all__ = ["u256_add", "u256_sub", "require_add_fits"]
