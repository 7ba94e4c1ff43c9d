"""Security domain exceptions."""

from typing import Any

from fieldvault.domain.shared.exceptions import DomainException, ErrorCode


class SecurityDomainError(DomainException):
    """Base exception for security domain."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class KeyNotConfiguredError(SecurityDomainError):
    """Raised when no key material exists for the requested version."""

    def __init__(self, version: int):
        super().__init__(
            "Encryption key not configured",
            ErrorCode.KEY_NOT_CONFIGURED,
            {"version": version},
        )
        self.version = version


class MissingKeyError(SecurityDomainError):
    """Raised when the encryptor is handed an empty key string."""

    def __init__(self) -> None:
        super().__init__("Encryption key is empty", ErrorCode.MISSING_KEY)


class InvalidKeyLengthError(SecurityDomainError):
    """Raised when imported key material is not exactly 32 bytes."""

    def __init__(self, byte_length: int):
        super().__init__(
            "Encryption key must be exactly 32 bytes",
            ErrorCode.INVALID_KEY_LENGTH,
            {"byte_length": byte_length},
        )
        self.byte_length = byte_length


class EncryptionError(SecurityDomainError):
    """Raised when encryption fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.ENCRYPTION_FAILED, details)
