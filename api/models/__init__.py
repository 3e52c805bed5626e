"""API request and response models."""

from api.models.requests import ProofCheckRequest
from api.models.responses import (
    ErrorDetail,
    ErrorResponse,
    ExecuteResponse,
    HealthResponse,
    ProofCheckResponse,
)

__all__ = [
    "ProofCheckRequest",
    "ErrorDetail",
    "ErrorResponse",
    "ExecuteResponse",
    "HealthResponse",
    "ProofCheckResponse",
]
