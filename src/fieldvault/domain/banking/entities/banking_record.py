"""Banking record entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from fieldvault.domain.banking.value_objects import (
    SENSITIVE_FIELDS,
    RecordStatus,
    SensitiveField,
)
from fieldvault.domain.shared.value_objects import SecureString


@dataclass
class BankingRecord:
    """
    A user's payout banking details as held by the record store.

    Each sensitive attribute has two independent slots:
    - plaintext: the legacy/source value (wrapped so it never prints)
    - stored_envelopes: the persisted Envelope JSON, exactly as stored

    Envelopes are kept as stored text; the workflow only needs to know
    whether a slot is filled, and compares stored text byte for byte.
    """

    id: str
    user_id: UUID
    status: RecordStatus
    plaintext: dict[SensitiveField, SecureString] = field(default_factory=dict)
    stored_envelopes: dict[SensitiveField, str] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def plaintext_for(self, sensitive_field: SensitiveField) -> Optional[SecureString]:
        return self.plaintext.get(sensitive_field)

    def is_protected(self, sensitive_field: SensitiveField) -> bool:
        # Empty text in the envelope slot counts as unprotected
        return bool(self.stored_envelopes.get(sensitive_field))

    def unprotected_fields(self) -> list[SensitiveField]:
        return [d.field for d in SENSITIVE_FIELDS if not self.is_protected(d.field)]

    def __repr__(self) -> str:
        protected = [f.value for f in self.stored_envelopes if self.is_protected(f)]
        return (
            f"BankingRecord(id={self.id}, user_id={self.user_id}, "
            f"status={self.status.value}, protected={protected})"
        )
