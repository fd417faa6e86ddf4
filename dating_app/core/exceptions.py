"""
Domain errors raised by services and rendered by the API layer
"""
from typing import Dict, Optional

from fastapi import status


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP status"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ServiceError):
    """Missing or malformed input, with optional per-field messages"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"

    def __init__(self, detail: Optional[str] = None, errors: Optional[Dict[str, str]] = None):
        self.errors = errors or {}
        if detail is None and self.errors:
            detail = ", ".join(self.errors.values())
        super().__init__(detail)


class EmptyText(ValidationError):
    default_detail = "Message text cannot be empty."


class UnsupportedType(ValidationError):
    default_detail = "Invalid file type. Only image files are allowed!"


class Conflict(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Conflict"


class SelfTarget(Conflict):
    default_detail = "You cannot send a dating request to yourself."


class DuplicatePending(Conflict):
    default_detail = "A pending request already exists with this user."


class AlreadyMatched(Conflict):
    default_detail = "You are already matched with this user."


class InvalidState(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This request is no longer pending."


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid credentials."


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "No token, authorization denied."


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class UpstreamFailure(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Server error during image upload."
