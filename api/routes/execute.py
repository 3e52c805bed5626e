"""
Execute Routes

One endpoint per ledger operation. Each request is a single transition;
rejections surface through the AirdropException handler.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_execution_context, get_state_machine
from api.models.requests import (
    InitializeRequest,
    ParticipateRequest,
    RegisterMerkleRootRequest,
    UpdateConfigRequest,
    WithdrawRequest,
)
from api.models.responses import ExecuteResponse
from distributor.context import ExecutionContext
from distributor.state_machine import ClaimStateMachine


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/execute", tags=["execute"])


@router.post("/initialize", response_model=ExecuteResponse)
def initialize(
    body: InitializeRequest,
    ctx: ExecutionContext = Depends(get_execution_context),
    machine: ClaimStateMachine = Depends(get_state_machine),
) -> ExecuteResponse:
    return ExecuteResponse(result=machine.initialize(ctx, body))


@router.post("/update_config", response_model=ExecuteResponse)
def update_config(
    body: UpdateConfigRequest,
    ctx: ExecutionContext = Depends(get_execution_context),
    machine: ClaimStateMachine = Depends(get_state_machine),
) -> ExecuteResponse:
    return ExecuteResponse(result=machine.update_config(ctx, body))


@router.post("/register_merkle_root", response_model=ExecuteResponse)
def register_merkle_root(
    body: RegisterMerkleRootRequest,
    ctx: ExecutionContext = Depends(get_execution_context),
    machine: ClaimStateMachine = Depends(get_state_machine),
) -> ExecuteResponse:
    return ExecuteResponse(result=machine.register_merkle_root(ctx, body))


@router.post("/participate", response_model=ExecuteResponse)
def participate(
    body: ParticipateRequest,
    ctx: ExecutionContext = Depends(get_execution_context),
    machine: ClaimStateMachine = Depends(get_state_machine),
) -> ExecuteResponse:
    return ExecuteResponse(result=machine.participate(ctx, body))


@router.post("/claim", response_model=ExecuteResponse)
def claim(
    ctx: ExecutionContext = Depends(get_execution_context),
    machine: ClaimStateMachine = Depends(get_state_machine),
) -> ExecuteResponse:
    """Claim whatever has vested; a zero-amount claim is a successful no-op."""
    return ExecuteResponse(result=machine.claim(ctx))


@router.post("/withdraw", response_model=ExecuteResponse)
def withdraw(
    body: WithdrawRequest,
    ctx: ExecutionContext = Depends(get_execution_context),
    machine: ClaimStateMachine = Depends(get_state_machine),
) -> ExecuteResponse:
    return ExecuteResponse(result=machine.withdraw(ctx, body))


@router.post("/migrate", response_model=ExecuteResponse)
def migrate(
    ctx: ExecutionContext = Depends(get_execution_context),
    machine: ClaimStateMachine = Depends(get_state_machine),
) -> ExecuteResponse:
    return ExecuteResponse(result=machine.migrate(ctx))
