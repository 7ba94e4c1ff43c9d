"""FastAPI dependency injection for the FieldVault API.

Provides dependencies for:
- Database sessions
- Authentication (current user from the bearer credential)
- Repository factory scoped to the current user
- Key ring and field encryptor (process-wide, built once)
"""

import logging
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from fieldvault.application.ports.identity import CurrentUser, IdentityProvider
from fieldvault.application.services import AuthenticationGate
from fieldvault.domain.security.services import FieldEncryptor, KeyResolver
from fieldvault.infrastructure.adapters.identity import (
    JWTIdentityProvider,
    RemoteIdentityProvider,
)
from fieldvault.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from fieldvault.infrastructure.security import AesGcmFieldEncryptor, KeyRing
from fieldvault_auth import JWTService
from fieldvault_config.settings import (
    Settings,
    get_settings,
    resolve_env_file_path,
)

logger = logging.getLogger(__name__)

# Security scheme for bearer tokens; a missing header is handled by the gate
security = HTTPBearer(auto_error=False)


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_settings().database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Encryption (process-wide, read-only after startup)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_key_ring() -> KeyResolver:
    """
    Get the key ring built from the environment and the configured .env file.

    Loaded once; key configuration is read-only for the life of the process.
    """
    return KeyRing.from_environment(resolve_env_file_path())


@lru_cache(maxsize=1)
def get_field_encryptor() -> FieldEncryptor:
    """Get the AES-GCM field encryptor."""
    return AesGcmFieldEncryptor()


KeyResolverDep = Annotated[KeyResolver, Depends(get_key_ring)]
FieldEncryptorDep = Annotated[FieldEncryptor, Depends(get_field_encryptor)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_identity_provider() -> IdentityProvider:
    """
    Get the identity provider selected by ``identity_provider``.

    Raises
    ------
    ValueError
        If the selected provider is missing its configuration
    """
    settings = get_settings()

    if settings.identity_provider == "remote":
        return RemoteIdentityProvider(
            base_url=settings.identity_service_url,
            api_key=settings.identity_service_api_key.get_secret_value(),
            timeout=settings.identity_service_timeout,
        )

    return JWTIdentityProvider(
        JWTService(
            secret_key=settings.jwt_secret_key.get_secret_value(),
            audience=settings.jwt_audience,
        )
    )


def get_authentication_gate(
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthenticationGate:
    """Get the gate that resolves callers through the identity provider."""
    return AuthenticationGate(identity_provider)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    gate: AuthenticationGate = Depends(get_authentication_gate),
) -> CurrentUser:
    """
    FastAPI dependency to get the current authenticated user.

    Raises
    ------
    AuthenticationError
        If the credential is missing or rejected (rendered as 401)
    """
    token = credentials.credentials if credentials is not None else None
    return await gate.authenticate(token)


# Type alias for injected current user
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]


# -----------------------------------------------------------------------------
# Repository Factory
# -----------------------------------------------------------------------------


async def get_repository_factory(
    current_user: CurrentUserDep,
    session: DBSession,
) -> SQLAlchemyRepositoryFactory:
    """
    Get repository factory for the current user.

    The caller is authenticated before a session is opened.
    """
    return SQLAlchemyRepositoryFactory(session=session, current_user=current_user)


# Type alias for injected repository factory
RepoFactory = Annotated[SQLAlchemyRepositoryFactory, Depends(get_repository_factory)]
