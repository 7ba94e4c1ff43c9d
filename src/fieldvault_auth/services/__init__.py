"""Authentication services.

Provides bearer token verification.
"""

from fieldvault_auth.services.jwt_service import JWTService

__all__ = [
    "JWTService",
]
