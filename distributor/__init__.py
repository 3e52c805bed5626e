"""
Distributor

Ledger storage and the claim state machine that drives register,
participate, claim, withdraw and reconfigure against it.
"""

from distributor.context import ExecutionContext
from distributor.queries import (
    get_active_root,
    get_config,
    get_global_state,
    get_user_state,
)
from distributor.state_machine import (
    CONTRACT_NAME,
    CONTRACT_VERSION,
    ClaimStateMachine,
)
from distributor.store import LedgerSnapshot, LedgerStore, LedgerStoreError

__all__ = [
    "CONTRACT_NAME",
    "CONTRACT_VERSION",
    "ClaimStateMachine",
    "ExecutionContext",
    "LedgerSnapshot",
    "LedgerStore",
    "LedgerStoreError",
    "get_active_root",
    "get_config",
    "get_global_state",
    "get_user_state",
]
