"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m airdrop_cli tree build <csv> [--out PATH] [--json]
    python -m airdrop_cli tree verify --address A --amount N --root HEX --proof HEX ...
    python -m airdrop_cli schedule validate <schedule> [--json]
    python -m airdrop_cli schedule claimable --schedule F --assigned N --now T [--claimed N] [--last-claim T]
    python -m airdrop_cli exec {init,update-config,register-root,participate,claim,withdraw,migrate} --sender S ...
    python -m airdrop_cli query {config,state,user,root} ...
    python -m airdrop_cli config --init

Environment Variables:
    AIRDROP_LEDGER_PATH         Ledger file used by exec/query (default: none)
    AIRDROP_LOG_LEVEL           Log level (default: INFO)
    AIRDROP_LOG_FILE            Additional log file
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from airdrop_cli.commands import execute, query, schedule, tree
from airdrop_cli.output import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, print_json
from core.config.runtime import RuntimeConfig, get_default_config_template


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tracebacks and detailed output",
    )


def _add_ledger_flags(parser: argparse.ArgumentParser, sender: bool = True) -> None:
    parser.add_argument(
        "--ledger",
        type=str,
        default=None,
        help="Ledger file (default: store.path from config or AIRDROP_LEDGER_PATH)",
    )
    if sender:
        parser.add_argument("--sender", type=str, required=True, help="Identity performing the operation")
    parser.add_argument(
        "--now",
        type=int,
        default=None,
        help="Operation time in unix seconds (default: current time)",
    )
    _add_output_flags(parser)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="airdrop",
        description="Merkle Airdrop CLI - Build claim trees, check schedules, and operate a ledger.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./airdrop.json or ~/.config/airdrop/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- tree command ---
    tree_parser = subparsers.add_parser(
        "tree",
        help="Build or check Merkle claim trees",
        description="Build a claims file from a recipients CSV, or verify a single proof.",
    )
    tree_sub = tree_parser.add_subparsers(dest="tree_command", help="Tree operation")

    tree_build = tree_sub.add_parser("build", help="Build root and proofs from a CSV (address,amount)")
    tree_build.add_argument("csv_path", type=str, help="Recipients CSV with header address,amount")
    tree_build.add_argument("--out", "-o", type=str, default=None, help="Write claims JSON here")
    _add_output_flags(tree_build)
    tree_build.set_defaults(func=tree.tree_build_cmd)

    tree_verify = tree_sub.add_parser("verify", help="Verify one proof against a root")
    tree_verify.add_argument("--address", type=str, required=True, help="Recipient identity")
    tree_verify.add_argument("--amount", type=int, default=None, help="Allotment")
    tree_verify.add_argument("--root", type=str, default=None, help="Merkle root hex")
    tree_verify.add_argument("--proof", type=str, nargs="*", default=None, help="Sibling hashes, bottom-up")
    tree_verify.add_argument("--claims", type=str, default=None, help="Take root and proof from a claims file")
    _add_output_flags(tree_verify)
    tree_verify.set_defaults(func=tree.tree_verify_cmd)

    tree_parser.set_defaults(func=lambda args: tree_parser.print_help() or EXIT_SUCCESS)

    # --- schedule command ---
    schedule_parser = subparsers.add_parser(
        "schedule",
        help="Validate schedules and compute vesting",
        description="Offline distribution schedule tooling.",
    )
    schedule_sub = schedule_parser.add_subparsers(dest="schedule_command", help="Schedule operation")

    schedule_validate = schedule_sub.add_parser("validate", help="Validate a schedule file")
    schedule_validate.add_argument("schedule_path", type=str, help="Schedule file (JSON or YAML)")
    _add_output_flags(schedule_validate)
    schedule_validate.set_defaults(func=schedule.schedule_validate_cmd)

    schedule_claimable = schedule_sub.add_parser("claimable", help="Compute a claimable amount")
    schedule_claimable.add_argument("--schedule", type=str, required=True, help="Schedule file")
    schedule_claimable.add_argument("--assigned", type=int, required=True, help="Assigned amount")
    schedule_claimable.add_argument("--now", type=int, required=True, help="Evaluation time")
    schedule_claimable.add_argument("--claimed", type=int, default=0, help="Already claimed (default: 0)")
    schedule_claimable.add_argument("--last-claim", type=int, default=0, help="Last claim time (default: 0)")
    _add_output_flags(schedule_claimable)
    schedule_claimable.set_defaults(func=schedule.schedule_claimable_cmd)

    schedule_parser.set_defaults(func=lambda args: schedule_parser.print_help() or EXIT_SUCCESS)

    # --- exec command ---
    exec_parser = subparsers.add_parser(
        "exec",
        help="Apply one operation to a ledger file",
        description="Run a single state machine operation as one transaction.",
    )
    exec_sub = exec_parser.add_subparsers(dest="exec_command", help="Operation")

    exec_init = exec_sub.add_parser("init", help="Initialize the airdrop")
    exec_init.add_argument("--token", type=str, required=True, help="Payout token reference")
    exec_init.add_argument("--expiry", type=int, required=True, help="Participation deadline")
    exec_init.add_argument("--schedule", type=str, required=True, help="Schedule file")
    exec_init.add_argument("--admin", type=str, default=None, help="Admin (default: sender)")
    _add_ledger_flags(exec_init)
    exec_init.set_defaults(func=execute.exec_init_cmd)

    exec_update = exec_sub.add_parser("update-config", help="Change admin, expiry or schedule")
    exec_update.add_argument("--admin", type=str, default=None)
    exec_update.add_argument("--expiry", type=int, default=None)
    exec_update.add_argument("--schedule", type=str, default=None, help="Schedule file")
    _add_ledger_flags(exec_update)
    exec_update.set_defaults(func=execute.exec_update_config_cmd)

    exec_root = exec_sub.add_parser("register-root", help="Register the Merkle root")
    exec_root.add_argument("--root", type=str, default=None, help="Merkle root hex")
    exec_root.add_argument("--total", type=int, default=None, help="Total commitment")
    exec_root.add_argument("--claims", type=str, default=None, help="Take root and total from a claims file")
    _add_ledger_flags(exec_root)
    exec_root.set_defaults(func=execute.exec_register_root_cmd)

    exec_participate = exec_sub.add_parser("participate", help="Prove and record an allotment")
    exec_participate.add_argument("--amount", type=int, default=None)
    exec_participate.add_argument("--proof", type=str, nargs="*", default=None)
    exec_participate.add_argument("--claims", type=str, default=None, help="Take amount and proof from a claims file")
    _add_ledger_flags(exec_participate)
    exec_participate.set_defaults(func=execute.exec_participate_cmd)

    exec_claim = exec_sub.add_parser("claim", help="Claim vested tokens")
    _add_ledger_flags(exec_claim)
    exec_claim.set_defaults(func=execute.exec_claim_cmd)

    exec_withdraw = exec_sub.add_parser("withdraw", help="Withdraw the unclaimed balance after expiry")
    exec_withdraw.add_argument("--recipient", type=str, required=True)
    _add_ledger_flags(exec_withdraw)
    exec_withdraw.set_defaults(func=execute.exec_withdraw_cmd)

    exec_migrate = exec_sub.add_parser("migrate", help="Restamp the ledger version")
    _add_ledger_flags(exec_migrate)
    exec_migrate.set_defaults(func=execute.exec_migrate_cmd)

    exec_parser.set_defaults(func=lambda args: exec_parser.print_help() or EXIT_SUCCESS)

    # --- query command ---
    query_parser = subparsers.add_parser(
        "query",
        help="Read a ledger file",
        description="Read-only views of the committed ledger.",
    )
    query_sub = query_parser.add_subparsers(dest="query_command", help="View")

    query_config = query_sub.add_parser("config", help="Show the configuration")
    _add_ledger_flags(query_config, sender=False)
    query_config.set_defaults(func=query.query_config_cmd)

    query_state = query_sub.add_parser("state", help="Show global totals")
    _add_ledger_flags(query_state, sender=False)
    query_state.set_defaults(func=query.query_state_cmd)

    query_user = query_sub.add_parser("user", help="Show one recipient")
    query_user.add_argument("address", type=str)
    _add_ledger_flags(query_user, sender=False)
    query_user.set_defaults(func=query.query_user_cmd)

    query_root = query_sub.add_parser("root", help="Show the active Merkle root")
    _add_ledger_flags(query_root, sender=False)
    query_root.set_defaults(func=query.query_root_cmd)

    query_parser.set_defaults(func=lambda args: query_parser.print_help() or EXIT_SUCCESS)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="airdrop.json",
        help="Path for config file (default: airdrop.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (AIRDROP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print_json(args.runtime_config.to_dict())
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: airdrop config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=rejected operation or failed verification)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = RuntimeConfig.load(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
