"""
CLI Query Commands

Read-only views of a ledger file.

Usage:
    airdrop query config [--ledger ledger.json] [--json]
    airdrop query state
    airdrop query user ADDRESS [--now T]
    airdrop query root
"""

from __future__ import annotations

import sys
import time
from argparse import Namespace
from typing import Any

from airdrop_cli.commands.execute import CommandInputError, open_state_machine
from airdrop_cli.output import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_json,
    print_rejection,
)
from core.schemas.errors import AirdropException
from distributor.queries import (
    get_active_root,
    get_config,
    get_global_state,
    get_user_state,
)
from distributor.store import LedgerSnapshot, LedgerStoreError


def _snapshot(args: Namespace) -> LedgerSnapshot:
    return open_state_machine(args).snapshot()


def _print(args: Namespace, data: dict[str, Any]) -> None:
    if args.json:
        print_json(data)
        return
    for key, value in data.items():
        if isinstance(value, list):
            print(f"{key}:")
            for item in value:
                print(f"  {item}")
        else:
            print(f"{key}: {value}")


def _query(args: Namespace, view) -> int:
    try:
        data = view(_snapshot(args))
    except AirdropException as e:
        return print_rejection(e, as_json=args.json)
    except (CommandInputError, LedgerStoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    _print(args, data)
    return EXIT_SUCCESS


def query_config_cmd(args: Namespace) -> int:
    return _query(args, lambda ledger: get_config(ledger).model_dump(mode="json"))


def query_state_cmd(args: Namespace) -> int:
    return _query(args, lambda ledger: get_global_state(ledger).model_dump(mode="json"))


def query_root_cmd(args: Namespace) -> int:
    return _query(args, lambda ledger: {"merkle_root": get_active_root(ledger)})


def query_user_cmd(args: Namespace) -> int:
    now = args.now if args.now is not None else int(time.time())
    return _query(
        args,
        lambda ledger: get_user_state(ledger, args.address, now).model_dump(mode="json"),
    )
