"""
CLI Exec Commands

Apply one operation to a ledger file. Each invocation is a single
transaction: either the whole operation is written or nothing is.

Usage:
    airdrop exec init --sender admin --token tok --expiry 1000 --schedule schedule.json
    airdrop exec register-root --sender admin --claims claims.json
    airdrop exec participate --sender A --claims claims.json
    airdrop exec claim --sender A [--now T]
    airdrop exec withdraw --sender admin --recipient R
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from airdrop_cli.commands.schedule import load_schedule
from airdrop_cli.output import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_json,
    print_rejection,
)
from core.schemas.errors import AirdropException
from core.schemas.messages import (
    InitializeRequest,
    OperationResult,
    ParticipateRequest,
    RegisterMerkleRootRequest,
    UpdateConfigRequest,
    WithdrawRequest,
)
from distributor.context import ExecutionContext
from distributor.state_machine import ClaimStateMachine
from distributor.store import LedgerStore, LedgerStoreError


logger = logging.getLogger(__name__)


class CommandInputError(Exception):
    """Bad or missing command-line input detected before touching the ledger."""
    pass


def resolve_ledger_path(args: Namespace) -> Path:
    """--ledger, else store.path from the runtime config."""
    if getattr(args, "ledger", None):
        return Path(args.ledger)
    config = getattr(args, "runtime_config", None)
    if config is not None and config.store.path:
        return Path(config.store.path)
    raise CommandInputError(
        "No ledger file: pass --ledger or set store.path / AIRDROP_LEDGER_PATH"
    )


def open_state_machine(args: Namespace) -> ClaimStateMachine:
    return ClaimStateMachine(store=LedgerStore(resolve_ledger_path(args)))


def build_context(args: Namespace) -> ExecutionContext:
    if args.now is None:
        return ExecutionContext.at_current_time(args.sender)
    return ExecutionContext(sender=args.sender, now=args.now)


def _load_claims_file(path: str) -> dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# Message builders (argparse Namespace -> request model)
# ---------------------------------------------------------------------------

def _initialize_request(args: Namespace) -> InitializeRequest:
    return InitializeRequest(
        admin=args.admin,
        token_reference=args.token,
        expiry=args.expiry,
        distribution_schedule=load_schedule(Path(args.schedule)),
    )


def _update_config_request(args: Namespace) -> UpdateConfigRequest:
    return UpdateConfigRequest(
        admin=args.admin,
        expiry=args.expiry,
        distribution_schedule=load_schedule(Path(args.schedule)) if args.schedule else None,
    )


def _register_root_request(args: Namespace) -> RegisterMerkleRootRequest:
    root, total = args.root, args.total
    if args.claims:
        claims = _load_claims_file(args.claims)
        root = root or claims["merkle_root"]
        total = total if total is not None else int(claims["total_amount"])
    if root is None or total is None:
        raise CommandInputError("register-root needs --root and --total, or --claims")
    return RegisterMerkleRootRequest(merkle_root=root, total_amount=total)


def _participate_request(args: Namespace) -> ParticipateRequest:
    amount, proof = args.amount, args.proof
    if args.claims:
        entry = _load_claims_file(args.claims).get("claims", {}).get(args.sender)
        if entry is None:
            raise CommandInputError(f"{args.sender} is not in claims file {args.claims}")
        amount = amount if amount is not None else int(entry["amount"])
        proof = proof if proof is not None else list(entry["proof"])
    if amount is None:
        raise CommandInputError("participate needs --amount, or --claims")
    return ParticipateRequest(amount=amount, proof=proof or [])


def _withdraw_request(args: Namespace) -> WithdrawRequest:
    return WithdrawRequest(recipient=args.recipient)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def print_result_human(result: OperationResult) -> None:
    print(f"action: {result.action}")
    for key, value in result.attributes.items():
        print(f"{key}: {value}")
    if result.transfer is not None:
        print(
            f"transfer: {result.transfer.amount} {result.transfer.token} "
            f"-> {result.transfer.recipient}"
        )


def _run(
    args: Namespace,
    operation: Callable[[ClaimStateMachine, ExecutionContext], OperationResult],
) -> int:
    """Shared driver: open the ledger, apply the operation, report the outcome."""
    try:
        machine = open_state_machine(args)
        ctx = build_context(args)
        result = operation(machine, ctx)
    except AirdropException as e:
        return print_rejection(e, as_json=args.json)
    except (CommandInputError, LedgerStoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (OSError, KeyError, ValueError, yaml.YAMLError) as e:
        # pydantic ValidationError is a ValueError
        print(f"Error: invalid input: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print_json({"ok": True, "result": result.to_dict()})
    else:
        print_result_human(result)
    return EXIT_SUCCESS


def exec_init_cmd(args: Namespace) -> int:
    return _run(args, lambda m, ctx: m.initialize(ctx, _initialize_request(args)))


def exec_update_config_cmd(args: Namespace) -> int:
    return _run(args, lambda m, ctx: m.update_config(ctx, _update_config_request(args)))


def exec_register_root_cmd(args: Namespace) -> int:
    return _run(args, lambda m, ctx: m.register_merkle_root(ctx, _register_root_request(args)))


def exec_participate_cmd(args: Namespace) -> int:
    return _run(args, lambda m, ctx: m.participate(ctx, _participate_request(args)))


def exec_claim_cmd(args: Namespace) -> int:
    return _run(args, lambda m, ctx: m.claim(ctx))


def exec_withdraw_cmd(args: Namespace) -> int:
    return _run(args, lambda m, ctx: m.withdraw(ctx, _withdraw_request(args)))


def exec_migrate_cmd(args: Namespace) -> int:
    return _run(args, lambda m, ctx: m.migrate(ctx))


__all__ = [
    "CommandInputError",
    "build_context",
    "exec_claim_cmd",
    "exec_init_cmd",
    "exec_migrate_cmd",
    "exec_participate_cmd",
    "exec_register_root_cmd",
    "exec_update_config_cmd",
    "exec_withdraw_cmd",
    "open_state_machine",
    "resolve_ledger_path",
]
