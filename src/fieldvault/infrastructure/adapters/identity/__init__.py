"""Adapters from identity services to the CurrentUser port."""

from fieldvault.infrastructure.adapters.identity.jwt_identity_provider import (
    JWTIdentityProvider,
)
from fieldvault.infrastructure.adapters.identity.remote_identity_provider import (
    RemoteIdentityProvider,
)

__all__ = ["JWTIdentityProvider", "RemoteIdentityProvider"]
