"""
Error kinds raised by the service and security layers.

Every operation either returns its result or raises exactly one of the
classes below. The HTTP layer renders them through a single exception
handler, so each kind maps to one stable status code.
"""

from fastapi import status


class ApiError(Exception):
    """Base class for errors surfaced to API clients"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "API_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Malformed or missing input"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class AuthError(ApiError):
    """Missing or invalid credentials"""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"


class ForbiddenError(ApiError):
    """Authenticated, but the role lacks the required permission"""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class CreateFailed(ApiError):
    """The store rejected an insert"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "CREATE_FAILED"


class UpdateFailed(ApiError):
    """The store rejected an update"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "UPDATE_FAILED"


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"
