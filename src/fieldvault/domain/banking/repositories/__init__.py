from fieldvault.domain.banking.repositories.banking_record_repository import (
    BankingRecordRepository,
)

__all__ = ["BankingRecordRepository"]
