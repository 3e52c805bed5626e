"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for the airdrop engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every rejection is raised before the ledger is touched, so callers can
treat any AirdropException as "nothing was written".
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine."""

    # Authorization
    UNAUTHORIZED = "UNAUTHORIZED"

    # Input & Encoding Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_SCHEDULE = "INVALID_SCHEDULE"
    ENCODING_ERROR = "ENCODING_ERROR"

    # Ledger State Errors
    NOT_INITIALIZED = "NOT_INITIALIZED"
    ALREADY_INITIALIZED = "ALREADY_INITIALIZED"
    ROOT_NOT_REGISTERED = "ROOT_NOT_REGISTERED"
    ALREADY_PARTICIPATED = "ALREADY_PARTICIPATED"
    CANNOT_MIGRATE = "CANNOT_MIGRATE"

    # Time & Window Errors
    EXPIRED = "EXPIRED"
    NOT_YET_EXPIRED = "NOT_YET_EXPIRED"

    # Merkle Errors
    VERIFICATION_FAILED = "VERIFICATION_FAILED"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the HTTP and CLI layers to serialize a rejected operation
    without re-raising it.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.UNAUTHORIZED],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "AirdropException":
        """Convert this error model to a raised exception."""
        return AirdropException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all airdrop engine errors.

    This exception carries structured error information and can be
    converted to/from AirdropError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class UnauthorizedException(AirdropException):
    """Raised when a non-admin calls an admin-only operation."""

    def __init__(
        self,
        message: str = "Unauthorized",
        sender: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if sender is not None:
            full_details["sender"] = sender
        super().__init__(
            message=message,
            code=ErrorCodes.UNAUTHORIZED,
            details=full_details,
        )


class InvalidInputException(AirdropException):
    """Raised for malformed caller input (bad hex, bad amounts, empty fields)."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.INVALID_INPUT,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=code,
            details=full_details,
        )


class InvalidScheduleException(InvalidInputException):
    """Raised when a distribution schedule violates its invariants."""

    def __init__(
        self,
        message: str,
        segment_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if segment_index is not None:
            full_details["segment_index"] = segment_index
        super().__init__(
            message=message,
            field_path="distribution_schedule",
            details=full_details,
            code=ErrorCodes.INVALID_SCHEDULE,
        )


class EncodingException(AirdropException):
    """Raised when a proof element or root does not decode to exactly 32 bytes."""

    def __init__(
        self,
        message: str,
        expected_length: int = 32,
        actual_length: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["expected_length"] = expected_length
        if actual_length is not None:
            full_details["actual_length"] = actual_length
        super().__init__(
            message=message,
            code=ErrorCodes.ENCODING_ERROR,
            details=full_details,
        )


class NotInitializedException(AirdropException):
    """Raised when an operation needs a Config that was never created."""

    def __init__(self, message: str = "Airdrop is not initialized") -> None:
        super().__init__(message=message, code=ErrorCodes.NOT_INITIALIZED)


class AlreadyInitializedException(AirdropException):
    """Raised when Initialize runs against a configured ledger."""

    def __init__(self, message: str = "Airdrop is already initialized") -> None:
        super().__init__(message=message, code=ErrorCodes.ALREADY_INITIALIZED)


class RootNotRegisteredException(AirdropException):
    """Raised when Participate runs before any Merkle root is registered."""

    def __init__(self, message: str = "No merkle root registered") -> None:
        super().__init__(message=message, code=ErrorCodes.ROOT_NOT_REGISTERED)


class AlreadyParticipatedException(AirdropException):
    """Raised when a recipient already has an assigned amount."""

    def __init__(
        self,
        user: str,
        assigned_amount: int,
        message: str = "Already participated",
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.ALREADY_PARTICIPATED,
            details={"user": user, "assigned_amount": assigned_amount},
        )


class ExpiredException(AirdropException):
    """Raised when Participate runs at or after the expiry time."""

    def __init__(self, expiry: int, now: int) -> None:
        super().__init__(
            message=f"Airdrop expired at {expiry}",
            code=ErrorCodes.EXPIRED,
            details={"expiry": expiry, "now": now},
        )


class NotYetExpiredException(AirdropException):
    """Raised when Withdraw runs before the expiry time."""

    def __init__(self, expiry: int, now: int) -> None:
        super().__init__(
            message=f"Airdrop not expired yet (expires at {expiry})",
            code=ErrorCodes.NOT_YET_EXPIRED,
            details={"expiry": expiry, "now": now},
        )


class VerificationFailedException(AirdropException):
    """Raised when a Merkle proof does not resolve to the active root."""

    def __init__(
        self,
        message: str = "Verification failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.VERIFICATION_FAILED,
            details=details,
        )


class CannotMigrateException(AirdropException):
    """Raised when migrating a ledger written by a different contract."""

    def __init__(self, previous_contract: str) -> None:
        super().__init__(
            message=f"Cannot migrate from different contract type: {previous_contract}",
            code=ErrorCodes.CANNOT_MIGRATE,
            details={"previous_contract": previous_contract},
        )


class CanonicalizationException(AirdropException):
    """Raised when a ledger record cannot be canonically serialized."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )
