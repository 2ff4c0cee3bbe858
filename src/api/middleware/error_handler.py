"""
Error handling middleware for API

FastAPI calls these handlers for exceptions raised anywhere in a request
and each returns the standard ErrorResponse envelope:
- Validation errors (bad request format)         422
- Domain errors (busy strip, bad schedule, ...)  their own status
- Anything else                                  500
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas.error import ErrorResponse, ErrorDetail, ValidationErrorResponse
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class AnimationBusyError(DomainError):
    """Another animation already holds the strip"""
    def __init__(self, running: Optional[str] = None):
        super().__init__(
            code="ANIMATION_BUSY",
            message="Another animation is already running",
            details={"running": running},
            status_code=409
        )


class InvalidScheduleError(DomainError):
    """Schedule entry failed domain validation"""
    def __init__(self, day: str, reason: str):
        super().__init__(
            code="INVALID_SCHEDULE",
            message=f"Invalid schedule for '{day}': {reason}",
            details={"day": day, "reason": reason},
            status_code=422
        )


class HardwareError(DomainError):
    """LED strip unavailable or failed mid-animation"""
    def __init__(self, message: str):
        super().__init__(
            code="HARDWARE_ERROR",
            message=message,
            status_code=503
        )


def _json(model) -> dict:
    return json.loads(model.model_dump_json())


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (bad JSON structure)"""
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(f"Validation error: {len(errors)} errors", path=request.url.path, request_id=request_id)

        validation_errors = []
        for error in errors:
            field = ".".join(str(x) for x in error["loc"][1:])  # Skip "body"
            validation_errors.append({
                "field": field,
                "message": error["msg"],
                "type": error["type"]
            })

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)},
            ),
            validation_errors=validation_errors,
            request_id=request_id
        )
        return JSONResponse(status_code=422, content=_json(response))

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        """Handle domain-specific business logic errors"""
        request_id = str(uuid.uuid4())

        log.warn(f"Domain error: {exc.code} - {exc.message}", path=request.url.path, request_id=request_id)

        response = ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
            request_id=request_id
        )
        return JSONResponse(status_code=exc.status_code, content=_json(response))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors"""
        request_id = str(uuid.uuid4())

        log.error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            path=request.url.path,
            request_id=request_id,
        )

        response = ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred. Please try again.",
                details={"request_id": request_id},
                timestamp=datetime.now(timezone.utc),
            ),
            request_id=request_id
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_json(response))
