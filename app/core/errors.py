"""Errors raised by the admin user operations.

Every error carries a machine-readable ``kind`` and a human-readable
``message``; the HTTP layer renders both as-is with ``status_code``.
"""

from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional

from fastapi import status


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    AUTHORIZATION = "AUTHORIZATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORE_FAILURE = "STORE_FAILURE"


class UserAdminError(Exception):
    """Base exception for all admin user errors."""

    kind = ErrorKind.STORE_FAILURE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}


class ValidationError(UserAdminError):
    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_400_BAD_REQUEST


class AuthorizationError(UserAdminError):
    """Raised for unauthenticated (401) and non-admin (403) callers."""

    kind = ErrorKind.AUTHORIZATION
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(UserAdminError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(UserAdminError):
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_409_CONFLICT


class StoreFailure(UserAdminError):
    kind = ErrorKind.STORE_FAILURE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def describe_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Flatten pydantic-style error entries into ``loc: msg`` pairs."""
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'input'}: {error['msg']}"
        for error in errors
    )
