from fieldvault.application.commands.banking import ProtectBankingRecordCommand

__all__ = ["ProtectBankingRecordCommand"]
