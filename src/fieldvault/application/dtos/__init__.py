from fieldvault.application.dtos.protection_result import ProtectionResult

__all__ = ["ProtectionResult"]
