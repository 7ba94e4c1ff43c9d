from fieldvault.application.commands.banking.protect_banking_record_command import (
    ProtectBankingRecordCommand,
)

__all__ = ["ProtectBankingRecordCommand"]
