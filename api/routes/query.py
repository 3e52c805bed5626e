"""
Query Routes

Read-only views of the committed ledger.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_block_time, get_state_machine
from core.schemas.ledger import Config, GlobalState
from core.schemas.messages import UserStateResponse
from distributor.context import ExecutionContext
from distributor.queries import (
    get_active_root,
    get_config,
    get_global_state,
    get_user_state,
)
from distributor.state_machine import ClaimStateMachine


router = APIRouter(prefix="/query", tags=["query"])


@router.get("/config", response_model=Config)
def read_config(machine: ClaimStateMachine = Depends(get_state_machine)) -> Config:
    return get_config(machine.snapshot())


@router.get("/state", response_model=GlobalState)
def read_state(machine: ClaimStateMachine = Depends(get_state_machine)) -> GlobalState:
    return get_global_state(machine.snapshot())


@router.get("/merkle_root")
def read_merkle_root(machine: ClaimStateMachine = Depends(get_state_machine)) -> dict[str, str]:
    return {"merkle_root": get_active_root(machine.snapshot())}


@router.get("/user/{address}", response_model=UserStateResponse)
def read_user(
    address: str,
    now: Optional[int] = Query(default=None, ge=0, description="Evaluation time (default: X-Block-Time or server clock)"),
    block_time: Optional[int] = Depends(get_block_time),
    machine: ClaimStateMachine = Depends(get_state_machine),
) -> UserStateResponse:
    """Allotment, claimed amount and what is claimable at the given time."""
    at = now if now is not None else block_time
    if at is None:
        at = ExecutionContext.at_current_time(address).now
    return get_user_state(machine.snapshot(), address, at)
