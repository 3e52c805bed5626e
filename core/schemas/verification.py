"""
Schemas & Errors
File: verification.py

Purpose: Outcome of a check that reports instead of raising. Used for
schedule validation (`airdrop schedule validate`) and offline proof checks
(`airdrop tree verify`, POST /verify/proof).
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# A passing check is informational; a failing one is an error. Airdrop
# checks have no soft-failure level.
CheckSeverity = Literal["info", "error"]


class CheckResult(BaseModel):
    """
    Outcome of one named check, e.g. "distribution_schedule" or
    "merkle_proof".

    The raising validators (validate_distribution_schedule,
    MerkleVerifier.verify) stay the source of truth; this model only
    carries their verdict to the CLI and API.
    """

    model_config = ConfigDict(extra="forbid")

    check_id: str = Field(
        ...,
        description="Name of the check, stable across releases",
        min_length=1,
    )
    ok: bool = Field(
        ...,
        description="True when the schedule or proof was accepted",
    )
    severity: CheckSeverity = Field(
        ...,
        description="'info' when ok, 'error' otherwise",
    )
    message: str = Field(
        ...,
        description="Operator-facing summary, e.g. the violated schedule rule",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Context such as segment_index, sum or merkle_root",
    )

    @property
    def is_error(self) -> bool:
        return not self.ok and self.severity == "error"

    @classmethod
    def passed(
        cls,
        check_id: str,
        message: str = "Check passed",
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(
            check_id=check_id,
            ok=True,
            severity="info",
            message=message,
            details=details or {},
        )

    @classmethod
    def failed(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        """Rejected schedule or proof; message says which rule failed."""
        return cls(
            check_id=check_id,
            ok=False,
            severity="error",
            message=message,
            details=details or {},
        )
