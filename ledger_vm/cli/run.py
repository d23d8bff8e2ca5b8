#!/usr/bin/env python3
"""
ledger-run

Deploy a token ledger in-process and replay a script of calls against it
through real calldata.

Script (JSON):
  {
    "deployer": "0x…40 hex…",
    "total_supply": 10000,
    "ledger": "0x…",                     # optional, default zero address
    "calls": [
      {"sender": "0x…", "method": "transfer", "args": ["0x…", 1000]},
      {"sender": "0x…", "method": "balanceOf", "args": ["0x…"]}
    ]
  }

Examples:
  python -m ledger_vm.cli.run --script calls.json
  python -m ledger_vm.cli.run --script more.json --state state.json --dump-state

With --state, the ledger is attached to a previously dumped slot map instead of
being deployed, and "deployer"/"total_supply" are ignored.

Exit codes:
  0 on success, 1 on a ledger fault, 2 on bad input.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Tuple

from ledger_vm.config import load_config
from ledger_vm.errors import AbiError, ContextError, LedgerError, StorageError
from ledger_vm.runtime.abi import METHODS_BY_NAME, Client, Endpoint
from ledger_vm.runtime.context import ZERO_ADDRESS, to_address, to_hex
from ledger_vm.runtime.events_api import InMemoryEventSink, logs_to_json
from ledger_vm.runtime.storage_api import MemoryStore

log = logging.getLogger("ledger_vm.cli.run")


class InputError(Exception):
    """Malformed script, state file or argument."""


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InputError(f"cannot read {path}: {e}") from e
    if not isinstance(obj, dict):
        raise InputError(f"{path} must hold a JSON object")
    return obj


def _coerce_arg(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return to_address(value)
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError as e:
            raise InputError(f"not an integer: {value!r}") from e
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise InputError(f"not an integer: {value!r}")


def _render(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return to_hex(value)
    return value


def run_script(
    script: Dict[str, Any], state: Dict[str, Any] | None = None
) -> Tuple[Dict[str, Any], MemoryStore]:
    """Execute `script`; returns the JSON-ready report and the final store."""
    sink = InMemoryEventSink()
    if state is not None:
        ledger_addr = to_address(state.get("ledger", to_hex(ZERO_ADDRESS)))
        slots = state.get("slots", {})
        if not isinstance(slots, dict):
            raise InputError("state 'slots' must be a JSON object")
        store = MemoryStore.import_hex(slots)
        endpoint = Endpoint.attach(store, sink, ledger_addr)
    else:
        ledger_addr = to_address(script.get("ledger", to_hex(ZERO_ADDRESS)))
        if "deployer" not in script or "total_supply" not in script:
            raise InputError("script needs 'deployer' and 'total_supply' (or pass --state)")
        store = MemoryStore()
        endpoint = Endpoint(store, sink, ledger_addr)
        Client(endpoint, script["deployer"]).deploy(_coerce_arg("uint256", script["total_supply"]))

    calls = script.get("calls", [])
    if not isinstance(calls, list):
        raise InputError("script 'calls' must be a JSON list")

    results: List[Dict[str, Any]] = []
    for i, call in enumerate(calls):
        try:
            method = call["method"]
            sender = call["sender"]
            raw_args = list(call.get("args", []))
        except (KeyError, TypeError) as e:
            raise InputError(f"call #{i} is malformed: {e}") from e
        meth = METHODS_BY_NAME.get(method)
        if meth is None:
            raise InputError(f"call #{i}: unknown method {method!r}")
        if len(raw_args) != len(meth.inputs):
            raise InputError(f"call #{i}: {method} takes {len(meth.inputs)} argument(s)")
        args = [_coerce_arg(t, v) for t, v in zip(meth.inputs, raw_args)]
        out = Client(endpoint, sender).call(method, *args)
        log.info("call #%d %s -> %r", i, meth.signature, out)
        results.append({"method": method, "sender": to_hex(to_address(sender)), "result": _render(out)})

    report = {
        "ok": True,
        "ledger": to_hex(ledger_addr),
        "results": results,
        "logs": logs_to_json(sink.get_logs()),
    }
    return report, store


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="ledger-run", description="Replay a call script against a token ledger.")
    p.add_argument("--script", "-s", required=True, help="Path to the JSON call script")
    p.add_argument("--state", help="Attach to a previously dumped state JSON instead of deploying")
    p.add_argument("--dump-state", action="store_true", help="Include the final slot map in the output")
    p.add_argument("--format", choices=("text", "json"), default="json", help="Output format")
    p.add_argument("--log-level", default=None, help="Override LEDGER_VM_LOG_LEVEL")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    level = (args.log_level or load_config().log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), stream=sys.stderr)

    try:
        script = _load_json(args.script)
        state = _load_json(args.state) if args.state else None
        report, store = run_script(script, state)
    except (InputError, AbiError, ContextError, StorageError) as e:
        print(json.dumps({"ok": False, "error": str(e)}, indent=2))
        return 2
    except LedgerError as e:
        log.error("ledger fault: %s", e)
        print(json.dumps({"ok": False, "error": e.to_dict()}, indent=2))
        return 1

    if args.dump_state:
        report["state"] = {"ledger": report["ledger"], "slots": store.export_hex()}

    if args.format == "json":
        print(json.dumps(report, indent=2))
    else:
        for r in report["results"]:
            print(f"{r['sender']} {r['method']} -> {r['result']}")
        print(f"{len(report['logs'])} log(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
