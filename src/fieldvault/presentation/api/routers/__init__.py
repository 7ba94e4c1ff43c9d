"""API routers."""

from fieldvault.presentation.api.routers.banking import router as banking_router

__all__ = ["banking_router"]
