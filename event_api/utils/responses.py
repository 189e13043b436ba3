"""
Standardized error responses
"""

from typing import Any, Optional
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from event_api.core.errors import ApiError, ValidationError
from event_api.schemas.common import ErrorResponse

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        message=message,
        error_code=error_code,
        details=details
    )
    return JSONResponse(
        content=jsonable_encoder(response.dict()),
        status_code=status_code
    )

async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render any ``ApiError`` with its own status code"""
    return error_response(
        message=exc.message,
        error_code=exc.error_code,
        status_code=exc.status_code
    )

async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 Bad Request"""
    # ctx may hold exception instances that do not serialize
    errors = [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]
    return error_response(
        message="Validation failed",
        error_code=ValidationError.error_code,
        details=errors,
        status_code=ValidationError.status_code
    )
