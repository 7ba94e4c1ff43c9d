"""SQLAlchemy repository factory for creating user-scoped repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from fieldvault.infrastructure.persistence.sqlalchemy.repositories.banking import (
    BankingRecordRepositorySQLAlchemy,
)

if TYPE_CHECKING:
    from fieldvault.application.ports.identity import CurrentUser


class SQLAlchemyRepositoryFactory:
    """SQLAlchemy implementation of the RepositoryFactory Protocol."""

    def __init__(self, session: AsyncSession, current_user: CurrentUser):
        self._session = session
        self._current_user = current_user

        # Cached instances (created on demand)
        self._banking_record_repo: BankingRecordRepositorySQLAlchemy | None = None

    @property
    def current_user(self) -> CurrentUser:
        return self._current_user

    @property
    def session(self) -> AsyncSession:
        return self._session

    def banking_record_repository(self) -> BankingRecordRepositorySQLAlchemy:
        if self._banking_record_repo is None:
            self._banking_record_repo = BankingRecordRepositorySQLAlchemy(
                self._session,
                self._current_user,
            )
        return self._banking_record_repo
