from fieldvault.domain.banking.entities.banking_record import BankingRecord

__all__ = ["BankingRecord"]
