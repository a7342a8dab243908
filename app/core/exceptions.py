# app/core/exceptions.py
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class APIError(HTTPException):
    """Base class for errors rendered with a stable error_code"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"
    default_detail: str = "Unexpected error"

    def __init__(
        self,
        detail: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )
        self.details = details


class ValidationError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"
    default_detail = "Invalid request"


class AuthenticationError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTH_ERROR"
    default_detail = "Could not validate credentials"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
    default_detail = "Not enough permissions"


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_detail = "Resource not found"


class ConflictError(APIError):
    # Shares 400 with validation errors; clients tell them apart by error_code
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "CONFLICT"
    default_detail = "Request conflicts with the current state"


class InternalError(APIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"
    default_detail = "The server encountered an unexpected error"
