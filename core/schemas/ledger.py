"""
Schemas & Errors
File: ledger.py

Purpose: Durable records of the airdrop ledger.

- Segment / Config: admin-owned configuration and the vesting timetable
- GlobalState: running totals across all recipients
- MerkleRootRecord: the single active root and the commitment it attests
- UserAccount: per-recipient allotment and claim progress
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


UINT128_MAX = 2**128 - 1

Uint128 = Annotated[int, Field(ge=0, le=UINT128_MAX)]
Timestamp = Annotated[int, Field(ge=0)]


class Segment(BaseModel):
    """
    One interval of the distribution schedule.

    Accepts either a mapping or the positional form [start, end, fraction].
    The invariants across segments are enforced by
    core.vesting.schedule.validate_distribution_schedule, not here.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: Timestamp = Field(..., description="Segment start (unix seconds)")
    end: Timestamp = Field(..., description="Segment end (unix seconds)")
    fraction: Decimal = Field(
        ...,
        description="Share of the allotment released by this segment",
    )

    @model_validator(mode="before")
    @classmethod
    def _from_positional(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise ValueError("segment must be [start, end, fraction]")
            start, end, fraction = data
            return {"start": start, "end": end, "fraction": fraction}
        return data

    @property
    def is_instant(self) -> bool:
        """A zero-length segment unlocks its whole share at once."""
        return self.start == self.end

    def as_tuple(self) -> tuple[int, int, str]:
        return (self.start, self.end, str(self.fraction))


class Config(BaseModel):
    """Admin-owned singleton configuration."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    admin: str = Field(..., min_length=1, description="Admin identity")
    token_reference: str = Field(
        ...,
        min_length=1,
        description="Opaque handle of the payout token",
    )
    expiry: Timestamp = Field(..., description="Participation deadline (unix seconds)")
    distribution_schedule: list[Segment] = Field(
        ...,
        description="Ordered vesting segments",
    )


class GlobalState(BaseModel):
    """Running totals. Intended: total_released <= total_assigned <= total_commitment."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    total_commitment: int = Field(default=0, ge=0)
    total_assigned: int = Field(default=0, ge=0)
    total_released: int = Field(default=0, ge=0)


class MerkleRootRecord(BaseModel):
    """The single active root. Re-registering replaces it outright."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    merkle_root: str = Field(
        ...,
        description="Hex-encoded 32-byte root",
        pattern=r"^[0-9a-f]{64}$",
    )
    total_commitment: Uint128 = Field(..., description="Sum attested by this root")


class ContractVersion(BaseModel):
    """Name/version stamp written at initialization, checked on migrate."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    contract: str
    version: str


class RecipientStatus(str, Enum):
    NOT_PARTICIPATING = "not_participating"
    PARTICIPATED = "participated"
    PARTIALLY_CLAIMED = "partially_claimed"
    FULLY_CLAIMED = "fully_claimed"


class UserAccount(BaseModel):
    """
    Per-recipient record.

    assigned_amount is None until a proof is accepted; after that it is
    write-once. claimed_amount only grows, and only through Claim.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    user: str = Field(..., min_length=1)
    assigned_amount: Uint128 | None = Field(default=None)
    claimed_amount: Uint128 = Field(default=0)
    last_claim_time: Timestamp = Field(default=0)

    @property
    def has_participated(self) -> bool:
        return self.assigned_amount is not None

    @property
    def remaining_amount(self) -> int:
        return (self.assigned_amount or 0) - self.claimed_amount

    @property
    def status(self) -> RecipientStatus:
        if self.assigned_amount is None:
            return RecipientStatus.NOT_PARTICIPATING
        if self.claimed_amount == 0:
            return RecipientStatus.PARTICIPATED
        if self.claimed_amount < self.assigned_amount:
            return RecipientStatus.PARTIALLY_CLAIMED
        return RecipientStatus.FULLY_CLAIMED
