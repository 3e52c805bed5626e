"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.messages import OperationResult
from core.schemas.verification import CheckResult


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-airdrop-api"
    version: str = "v1"


class ExecuteResponse(BaseModel):
    """Response for POST /execute/* endpoints."""

    ok: bool = Field(default=True)
    result: OperationResult = Field(..., description="Applied transition")


class ProofCheckResponse(BaseModel):
    """Response for POST /verify/proof."""

    ok: bool = Field(..., description="Whether the proof resolves to the root")
    merkle_root: str = Field(..., description="Root the proof was checked against")
    check: CheckResult


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
