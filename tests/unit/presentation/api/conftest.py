"""Fixtures for API tests.

The app runs against a file-backed SQLite database; bearer tokens are real
JWTs verified with a test secret.
"""

import asyncio
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from fieldvault.infrastructure.adapters.identity import JWTIdentityProvider
from fieldvault.infrastructure.persistence.sqlalchemy.models import (
    Base,
    BankingRecordModel,
)
from fieldvault.infrastructure.security import KeyRing
from fieldvault.presentation.api.app import API_V1_PREFIX, create_app
from fieldvault.presentation.api.dependencies import (
    get_db_session,
    get_identity_provider,
    get_key_ring,
)
from fieldvault_auth import JWTService
from fieldvault_config.settings import Settings, get_settings
from tests.shared.fixtures.database import TEST_USER_EMAIL, TEST_USER_ID
from tests.shared.fixtures.keys import ZERO_KEY_B64

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only-0123456789"


def run_sync(coro):
    """Run a coroutine in a fresh event loop (outside TestClient's loop)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def api_v1_prefix() -> str:
    return API_V1_PREFIX


@pytest.fixture
def encrypt_url(api_v1_prefix: str) -> str:
    return f"{api_v1_prefix}/banking/encrypt"


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        postgres_password=SecretStr("test-password"),
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        encryption_key_version=1,
    )


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(TEST_JWT_SECRET)


@pytest.fixture
def auth_headers(jwt_service: JWTService) -> dict:
    token = jwt_service.create_access_token(TEST_USER_ID, TEST_USER_EMAIL)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_engine(tmp_path):
    """SQLite engine with the schema created."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        poolclass=NullPool,
    )

    async def _setup():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    run_sync(_setup())
    yield engine
    run_sync(engine.dispose())


@pytest.fixture
def seed_record(test_engine) -> Callable[..., None]:
    """Insert banking record rows before a request."""
    session_maker = async_sessionmaker(test_engine, expire_on_commit=False)

    def _seed(*models: BankingRecordModel) -> None:
        async def _insert():
            async with session_maker() as session:
                session.add_all(models)
                await session.commit()

        run_sync(_insert())

    return _seed


@pytest.fixture
def load_record(test_engine) -> Callable[[str], Optional[BankingRecordModel]]:
    """Read a banking record row back after a request."""
    session_maker = async_sessionmaker(test_engine, expire_on_commit=False)

    def _load(record_id: str = "rec-1") -> Optional[BankingRecordModel]:
        async def _select():
            async with session_maker() as session:
                result = await session.execute(
                    select(BankingRecordModel).where(BankingRecordModel.id == record_id)
                )
                return result.scalar_one_or_none()

        return run_sync(_select())

    return _load


@pytest.fixture
def key_ring() -> KeyRing:
    return KeyRing({1: ZERO_KEY_B64})


@pytest.fixture
def sessions_opened() -> list[AsyncSession]:
    return []


@pytest.fixture
def test_client(
    api_settings: Settings,
    jwt_service: JWTService,
    test_engine,
    key_ring: KeyRing,
    sessions_opened: list,
):
    """Create a test client with SQLite and test keys."""
    app = create_app(settings=api_settings)

    test_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db_session():
        async with test_session_maker() as session:
            sessions_opened.append(session)
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_settings] = lambda: api_settings
    app.dependency_overrides[get_identity_provider] = lambda: JWTIdentityProvider(
        jwt_service
    )
    app.dependency_overrides[get_key_ring] = lambda: key_ring

    return TestClient(app)
