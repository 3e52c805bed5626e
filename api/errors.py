"""
API Error Handling

Standardized error handling for the API. Engine rejections
(AirdropException) are rendered with their own code and details.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import AirdropException, ErrorCodes

logger = logging.getLogger(__name__)


# Engine error code -> HTTP status; anything unlisted is a 400
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.UNAUTHORIZED: 403,
    ErrorCodes.NOT_INITIALIZED: 409,
    ErrorCodes.ALREADY_INITIALIZED: 409,
    ErrorCodes.ROOT_NOT_REGISTERED: 409,
    ErrorCodes.ALREADY_PARTICIPATED: 409,
    ErrorCodes.EXPIRED: 409,
    ErrorCodes.NOT_YET_EXPIRED: 409,
    ErrorCodes.CANNOT_MIGRATE: 409,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class MissingSenderError(APIError):
    """Caller identity header not provided."""

    def __init__(self, message: str = "X-Sender header is required"):
        super().__init__(
            code="MISSING_SENDER",
            message=message,
            status_code=401,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def airdrop_error_handler(request: Request, exc: AirdropException) -> JSONResponse:
    """Handle rejected ledger operations."""
    status_code = STATUS_BY_CODE.get(exc.code, 400)
    logger.info(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(mode="json"),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
