from fieldvault.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)

__all__ = ["SQLAlchemyRepositoryFactory"]
