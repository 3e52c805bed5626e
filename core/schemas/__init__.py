"""
Schemas & Errors
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    AirdropError,
    AirdropException,
    AlreadyInitializedException,
    AlreadyParticipatedException,
    CanonicalizationException,
    CannotMigrateException,
    EncodingException,
    ErrorCodes,
    ExpiredException,
    InvalidInputException,
    InvalidScheduleException,
    NotInitializedException,
    NotYetExpiredException,
    RootNotRegisteredException,
    UnauthorizedException,
    VerificationFailedException,
)

# Ledger records
from .ledger import (
    UINT128_MAX,
    Config,
    ContractVersion,
    GlobalState,
    MerkleRootRecord,
    RecipientStatus,
    Segment,
    UserAccount,
)

# Operation payloads and results
from .messages import (
    InitializeRequest,
    OperationResult,
    ParticipateRequest,
    RegisterMerkleRootRequest,
    TransferInstruction,
    UpdateConfigRequest,
    UserStateResponse,
    WithdrawRequest,
)

# Verification results
from .verification import CheckResult, CheckSeverity

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "loads_canonical",
    # Errors
    "AirdropError",
    "AirdropException",
    "AlreadyInitializedException",
    "AlreadyParticipatedException",
    "CanonicalizationException",
    "CannotMigrateException",
    "EncodingException",
    "ErrorCodes",
    "ExpiredException",
    "InvalidInputException",
    "InvalidScheduleException",
    "NotInitializedException",
    "NotYetExpiredException",
    "RootNotRegisteredException",
    "UnauthorizedException",
    "VerificationFailedException",
    # Ledger
    "UINT128_MAX",
    "Config",
    "ContractVersion",
    "GlobalState",
    "MerkleRootRecord",
    "RecipientStatus",
    "Segment",
    "UserAccount",
    # Messages
    "InitializeRequest",
    "OperationResult",
    "ParticipateRequest",
    "RegisterMerkleRootRequest",
    "TransferInstruction",
    "UpdateConfigRequest",
    "UserStateResponse",
    "WithdrawRequest",
    # Verification
    "CheckResult",
    "CheckSeverity",
]
