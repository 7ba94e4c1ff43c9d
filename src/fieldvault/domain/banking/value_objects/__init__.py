from fieldvault.domain.banking.value_objects.sensitive_field import (
    SENSITIVE_FIELDS,
    RecordStatus,
    SensitiveField,
    SensitiveFieldDescriptor,
)

__all__ = [
    "SENSITIVE_FIELDS",
    "RecordStatus",
    "SensitiveField",
    "SensitiveFieldDescriptor",
]
