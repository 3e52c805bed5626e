"""
Schemas & Errors
File: messages.py

Purpose: Inbound operation payloads and outbound results of the claim
state machine. The same models back the HTTP API and the CLI.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .ledger import RecipientStatus, Segment, Timestamp, Uint128


class InitializeRequest(BaseModel):
    """Create the Config. admin defaults to the sender."""

    model_config = ConfigDict(extra="forbid")

    admin: str | None = Field(default=None)
    token_reference: str = Field(..., description="Payout token handle")
    expiry: Timestamp = Field(..., description="Participation deadline (unix seconds)")
    distribution_schedule: list[Segment] = Field(...)


class UpdateConfigRequest(BaseModel):
    """Admin-only partial update; omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    admin: str | None = Field(default=None)
    expiry: Timestamp | None = Field(default=None)
    distribution_schedule: list[Segment] | None = Field(default=None)


class RegisterMerkleRootRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    merkle_root: str = Field(..., description="Hex-encoded 32-byte merkle root")
    total_amount: Uint128 = Field(..., description="Total commitment attested by the root")


class ParticipateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: Uint128 = Field(..., description="Allotment claimed by the sender")
    proof: list[str] = Field(
        default_factory=list,
        description="Hex-encoded sibling hashes, bottom-up",
    )


class WithdrawRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    recipient: str = Field(..., min_length=1, description="Receiver of the unclaimed balance")


class TransferInstruction(BaseModel):
    """Outbound instruction for the token-holding collaborator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    token: str
    recipient: str
    amount: Uint128


class OperationResult(BaseModel):
    """
    Outcome of one successful state machine transition.

    attributes mirrors the key/value event log of the transition;
    transfer is set only by Claim and Withdraw.
    """

    model_config = ConfigDict(extra="forbid")

    action: str
    attributes: dict[str, str] = Field(default_factory=dict)
    transfer: TransferInstruction | None = Field(default=None)

    def attribute(self, key: str) -> str | None:
        return self.attributes.get(key)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class UserStateResponse(BaseModel):
    user: str
    assigned_amount: int
    claimed_amount: int
    claimable_amount: int
    last_claim_time: int
    status: RecipientStatus
