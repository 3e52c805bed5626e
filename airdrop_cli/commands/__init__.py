"""
CLI command modules.
"""

from airdrop_cli.commands import execute, query, schedule, tree

__all__ = ["execute", "query", "schedule", "tree"]
