"""Repository factory protocol for application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from fieldvault.domain.banking.repositories import BankingRecordRepository

if TYPE_CHECKING:
    from fieldvault.application.ports.identity import CurrentUser


class RepositoryFactory(Protocol):
    """Protocol for creating user-scoped repositories."""

    @property
    def current_user(self) -> CurrentUser:
        """Get the current user for repository scoping."""
        ...

    @property
    def session(self) -> Any:
        """Get the database session for transaction management.

        The type is intentionally `Any` to avoid coupling the
        application layer to specific database implementations.
        Use this for commit/rollback at the presentation layer.
        """
        ...

    def banking_record_repository(self) -> BankingRecordRepository:
        """Get banking record repository."""
        ...
