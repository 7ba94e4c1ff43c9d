"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
entire domain layer. All domain exceptions should inherit from DomainException
to enable centralized exception handling in the presentation layer.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Authentication Errors (401)
    UNAUTHENTICATED = "UNAUTHENTICATED"

    # Not Found Errors (404)
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"

    # Security Errors (500)
    KEY_NOT_CONFIGURED = "KEY_NOT_CONFIGURED"
    MISSING_KEY = "MISSING_KEY"
    INVALID_KEY_LENGTH = "INVALID_KEY_LENGTH"
    ENCRYPTION_FAILED = "ENCRYPTION_FAILED"

    # Persistence Errors (500)
    STORE_WRITE_FAILED = "STORE_WRITE_FAILED"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    This exception provides structured error information that can be
    used by the presentation layer to generate consistent API responses.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class AuthenticationError(DomainException):
    """Raised when the caller cannot be identified."""

    def __init__(
        self,
        message: str = "Unauthorized - please login first",
        code: ErrorCode = ErrorCode.UNAUTHENTICATED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class PersistenceError(DomainException):
    """Raised when the record store rejects a write."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.STORE_WRITE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
