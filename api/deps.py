"""
API Dependencies

Dependency injection for the API.
Provides the shared state machine and the per-request execution context.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Header

from api.errors import InvalidRequestError, MissingSenderError
from core.config.runtime import get_default_config
from distributor.context import ExecutionContext
from distributor.state_machine import ClaimStateMachine
from distributor.store import LedgerStore

logger = logging.getLogger(__name__)


_state_machine: Optional[ClaimStateMachine] = None


def get_state_machine() -> ClaimStateMachine:
    """
    Shared state machine over the configured ledger.

    The ledger path comes from RuntimeConfig (config file, then
    AIRDROP_LEDGER_PATH). Without a path the ledger is in-memory.
    """
    global _state_machine
    if _state_machine is None:
        config = get_default_config()
        if config.store.path:
            logger.info(f"Using ledger file {config.store.path}")
        else:
            logger.warning("No ledger path configured; ledger is in-memory only")
        _state_machine = ClaimStateMachine(store=LedgerStore(config.store.path))
    return _state_machine


def set_state_machine(machine: Optional[ClaimStateMachine]) -> None:
    """Replace (or reset with None) the shared state machine."""
    global _state_machine
    _state_machine = machine


def get_block_time(x_block_time: Optional[int] = Header(default=None)) -> Optional[int]:
    if x_block_time is not None and x_block_time < 0:
        raise InvalidRequestError("X-Block-Time must be non-negative")
    return x_block_time


def get_execution_context(
    x_sender: Optional[str] = Header(default=None),
    x_block_time: Optional[int] = Header(default=None),
) -> ExecutionContext:
    """
    Build the caller context from headers.

    X-Sender is required. X-Block-Time pins the operation time; without it
    the server clock is used.
    """
    if not x_sender:
        raise MissingSenderError()

    block_time = get_block_time(x_block_time)
    if block_time is None:
        return ExecutionContext.at_current_time(x_sender)
    return ExecutionContext(sender=x_sender, now=block_time)
