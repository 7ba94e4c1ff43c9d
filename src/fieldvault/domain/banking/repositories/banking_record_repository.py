"""Repository interface for banking records - Banking domain."""

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from fieldvault.domain.banking.entities import BankingRecord
from fieldvault.domain.banking.value_objects import SensitiveField
from fieldvault.domain.security.value_objects import Envelope


class BankingRecordRepository(ABC):
    """
    Repository for the current user's banking record.

    Implementations are scoped to one owner; every lookup is filtered by
    the owner's user id.

    It does NOT:
    - Create or delete records (owned by the onboarding flow)
    - Encrypt anything (that's the FieldEncryptor's job)

    It ONLY:
    - Loads the owner's active record
    - Writes envelope slots that are still empty
    """

    @abstractmethod
    async def find_active(self) -> Optional[BankingRecord]:
        """
        Find the current user's active banking record.

        Returns
        -------
        The record, or None when the user has no active record
        """

    @abstractmethod
    async def save_envelopes(
        self,
        record_id: str,
        envelopes: Mapping[SensitiveField, Envelope],
    ) -> dict[SensitiveField, str]:
        """
        Write envelopes into their slots in a single update.

        A slot that is already filled keeps its current value.

        Parameters
        ----------
        record_id
            Id of the record to update
        envelopes
            Newly sealed envelopes by field

        Returns
        -------
        The stored envelope text of every written field after the update,
        which differs from ``envelopes[field].to_json()`` when another
        writer filled the slot first.

        Raises
        ------
        PersistenceError
            If the store rejects the write
        """
