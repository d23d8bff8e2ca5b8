# -*- coding: utf-8 -*-
"""
tests.property package bootstrap.

Shared Hypothesis configuration and strategies for the ledger property tests.

On import:
- Registers named profiles (dev/ci/fast/stress).
- Selects the active profile from HYPOTHESIS_PROFILE, otherwise "ci" when the
  CI env var is truthy and "dev" locally.
- Exposes small strategies for addresses and amounts.

Usage in tests:
    from . import given, st, addresses, amounts

Environment knobs:
- HYPOTHESIS_PROFILE=dev|ci|fast|stress
- CI=true
"""
from __future__ import annotations

import os
from typing import Final, List, Tuple

from hypothesis import HealthCheck, Verbosity, given, settings
from hypothesis import strategies as st

from ledger_token import U256_MAX

# ---- profile registry --------------------------------------------------------


def _hc(*items: HealthCheck) -> Tuple[HealthCheck, ...]:
    return items


settings.register_profile(
    "dev",
    settings(
        max_examples=100,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow),
        verbosity=Verbosity.normal,
        derandomize=False,
    ),
)

settings.register_profile(
    "ci",
    settings(
        max_examples=300,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow),
        verbosity=Verbosity.verbose,
        derandomize=True,
    ),
)

settings.register_profile(
    "fast",
    settings(max_examples=25, deadline=None, suppress_health_check=_hc(HealthCheck.too_slow)),
)

settings.register_profile(
    "stress",
    settings(
        max_examples=2000,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow, HealthCheck.data_too_large),
        derandomize=True,
    ),
)


def _env_truthy(name: str) -> bool:
    v = os.getenv(name)
    return (v or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _env_truthy("CI") else "dev")
settings.load_profile(_active)


def active_profile() -> str:
    return _active


# ---- ledger strategies -------------------------------------------------------

# A small pool makes collisions (self-transfers, repeated spenders) common.
ADDRESS_POOL: Final[List[bytes]] = [bytes([i]) * 20 for i in range(1, 6)]


def addresses():
    return st.sampled_from(ADDRESS_POOL)


def amounts(max_value: int = 5_000):
    return st.integers(min_value=0, max_value=max_value)


def u256():
    return st.integers(min_value=0, max_value=U256_MAX)


__all__ = [
    "st",
    "given",
    "settings",
    "active_profile",
    "ADDRESS_POOL",
    "addresses",
    "amounts",
    "u256",
]
