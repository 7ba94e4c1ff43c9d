"""FastAPI application factory.

Creates and configures the FastAPI application with routers, middleware and
exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fieldvault.infrastructure.adapters.identity import RemoteIdentityProvider
from fieldvault.presentation.api.dependencies import (
    get_engine,
    get_identity_provider,
    get_key_ring,
)
from fieldvault.presentation.api.exception_handlers import setup_exception_handlers
from fieldvault.presentation.api.routers import banking_router
from fieldvault_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the fieldvault application with:
    - Console output with timestamps and module names
    - Configurable log level for fieldvault modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("fieldvault").setLevel(log_level)
    logging.getLogger("fieldvault_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Banking",
        "description": """Field-level encryption of payout banking details.

**Protected fields:**
- `account_number`, `bank_code`, `bank_name`, `business_name`, `email`

**Envelopes:**
- AES-256-GCM, random 96-bit IV, 128-bit tag
- Stored as `{"ciphertext", "iv", "authTag", "version"}`
- A field that already has an envelope is never encrypted again
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]

# Headers sent by the web clients of the encryption endpoint
CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting FieldVault API v%s...", API_VERSION)
    # Read key configuration once, at startup
    get_key_ring()
    yield

    logger.info("Shutting down FieldVault API...")
    # Only close a provider that requests actually created
    if get_identity_provider.cache_info().currsize:
        identity_provider = get_identity_provider()
        if isinstance(identity_provider, RemoteIdentityProvider):
            await identity_provider.close()
    await get_engine().dispose()
    logger.info("Database connections closed")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()
    v1_router.include_router(banking_router, prefix="/banking", tags=["Banking"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="**Field-level envelope encryption** for stored banking records.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Unversioned for load balancer/monitoring compatibility.
        """
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{settings.app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "encrypt": f"{API_V1_PREFIX}/banking/encrypt",
            },
        }

    return app


def main() -> None:
    """Run the API with uvicorn (console script ``fieldvault-api``)."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "fieldvault.presentation.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )


# Application instance for uvicorn
app = create_app()
