from fieldvault.infrastructure.persistence.sqlalchemy.models.banking_record_model import (
    BankingRecordModel,
)
from fieldvault.infrastructure.persistence.sqlalchemy.models.base import Base

__all__ = ["Base", "BankingRecordModel"]
