"""Result of protecting a banking record."""

from dataclasses import dataclass, field

from fieldvault.domain.banking.value_objects import SensitiveField
from fieldvault.domain.security.value_objects import Envelope


@dataclass(frozen=True)
class ProtectionResult:
    """Fields sealed and persisted by one invocation."""

    updated_fields: tuple[SensitiveField, ...] = ()
    envelopes: dict[SensitiveField, Envelope] = field(default_factory=dict)

    @property
    def nothing_to_encrypt(self) -> bool:
        return not self.updated_fields

    @classmethod
    def empty(cls) -> "ProtectionResult":
        return cls()
