"""
API Request Models

Operation payloads are the engine's own message models; this module adds
the request shapes that only exist at the HTTP boundary.
"""

from pydantic import BaseModel, ConfigDict, Field

from core.schemas.ledger import Uint128
from core.schemas.messages import (
    InitializeRequest,
    ParticipateRequest,
    RegisterMerkleRootRequest,
    UpdateConfigRequest,
    WithdrawRequest,
)


class ProofCheckRequest(BaseModel):
    """Request body for POST /verify/proof."""

    model_config = ConfigDict(extra="forbid")

    address: str = Field(..., min_length=1, description="Recipient identity")
    amount: Uint128 = Field(..., description="Allotment to check")
    proof: list[str] = Field(default_factory=list, description="Hex sibling hashes")
    merkle_root: str | None = Field(
        default=None,
        description="Root to check against (default: the active root)",
    )


__all__ = [
    "InitializeRequest",
    "ParticipateRequest",
    "ProofCheckRequest",
    "RegisterMerkleRootRequest",
    "UpdateConfigRequest",
    "WithdrawRequest",
]
