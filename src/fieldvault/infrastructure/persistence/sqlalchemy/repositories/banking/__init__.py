from fieldvault.infrastructure.persistence.sqlalchemy.repositories.banking.banking_record_repository_sqlalchemy import (  # noqa: E501
    BankingRecordRepositorySQLAlchemy,
)

__all__ = ["BankingRecordRepositorySQLAlchemy"]
