"""FieldVault Auth - Generic bearer token infrastructure.

This package provides token handling that is independent of the
field encryption domain. It handles:
- JWT token creation and verification

Architecture:
    fieldvault_auth/
    ├── services/           # Pure logic (JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from fieldvault_auth import JWTService, InvalidTokenError
"""

from fieldvault_auth.exceptions import AuthError, InvalidTokenError
from fieldvault_auth.schemas import TokenPayload
from fieldvault_auth.services import JWTService

__all__ = [
    # Services
    "JWTService",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
]
