"""Sensitive attributes of a banking record and their storage slots."""

from dataclasses import dataclass
from enum import Enum


class SensitiveField(str, Enum):
    """Attributes of a banking record that must be stored encrypted."""

    ACCOUNT_NUMBER = "account_number"
    BANK_CODE = "bank_code"
    BANK_NAME = "bank_name"
    BUSINESS_NAME = "business_name"
    EMAIL = "email"


class RecordStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class SensitiveFieldDescriptor:
    """Where a sensitive attribute keeps its plaintext and its envelope."""

    field: SensitiveField
    plaintext_column: str
    envelope_column: str


# One row per protected attribute; the workflow and the persistence mapping
# both iterate this table.
SENSITIVE_FIELDS: tuple[SensitiveFieldDescriptor, ...] = (
    SensitiveFieldDescriptor(
        SensitiveField.ACCOUNT_NUMBER, "account_number", "encrypted_account_number"
    ),
    SensitiveFieldDescriptor(
        SensitiveField.BANK_CODE, "bank_code", "encrypted_bank_code"
    ),
    SensitiveFieldDescriptor(
        SensitiveField.BANK_NAME, "bank_name", "encrypted_bank_name"
    ),
    SensitiveFieldDescriptor(
        SensitiveField.BUSINESS_NAME, "business_name", "encrypted_business_name"
    ),
    SensitiveFieldDescriptor(SensitiveField.EMAIL, "email", "encrypted_email"),
)
