"""
ledger_vm.config - logging level and per-call log cap.

Configuration precedence:
  1) Environment variables (LEDGER_VM_*)
  2) Hardcoded safe defaults below

Env vars:
  - LEDGER_VM_LOG_LEVEL           (str)  default: WARNING
  - LEDGER_VM_MAX_LOGS_PER_CALL   (int)  default: 16     (clamped 1..1024)

Usage:
    from ledger_vm.config import load_config
    CFG = load_config()
    sink = InMemoryEventSink(CFG.max_logs_per_call)

`load_config()` is cached; tests that tweak the environment call
`load_config.cache_clear()` first.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


def _env_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper()
    return raw if raw in _LEVELS else default


@dataclass(frozen=True)
class LedgerConfig:
    log_level: str
    max_logs_per_call: int


@lru_cache(maxsize=1)
def load_config() -> LedgerConfig:
    """Build and cache a LedgerConfig from environment + safe defaults."""
    return LedgerConfig(
        log_level=_env_level("LEDGER_VM_LOG_LEVEL", "WARNING"),
        max_logs_per_call=_env_int("LEDGER_VM_MAX_LOGS_PER_CALL", 16, min_v=1, max_v=1024),
    )


__all__ = ["LedgerConfig", "load_config"]
