"""Encrypt the still-unprotected sensitive fields of the user's banking record."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Mapping, Optional
from uuid import UUID

from fieldvault.application.dtos import ProtectionResult
from fieldvault.domain.banking.entities import BankingRecord
from fieldvault.domain.banking.exceptions import RecordNotFoundError
from fieldvault.domain.banking.repositories import BankingRecordRepository
from fieldvault.domain.banking.value_objects import SensitiveField
from fieldvault.domain.security.exceptions import KeyNotConfiguredError
from fieldvault.domain.security.services import FieldEncryptor, KeyResolver
from fieldvault.domain.security.value_objects import Envelope
from fieldvault.domain.shared.value_objects import SecureString

if TYPE_CHECKING:
    from fieldvault.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class ProtectBankingRecordCommand:
    """Seal plaintext banking details into envelopes, in place.

    Idempotent: a field whose envelope slot is already filled is never
    encrypted again, so re-running with the same (or no) input changes
    nothing and does not fail.
    """

    def __init__(
        self,
        record_repository: BankingRecordRepository,
        key_resolver: KeyResolver,
        field_encryptor: FieldEncryptor,
        owner_id: UUID,
        key_version: int = 1,
    ):
        self._repo = record_repository
        self._key_resolver = key_resolver
        self._encryptor = field_encryptor
        self._owner_id = owner_id
        self._key_version = key_version

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        key_resolver: KeyResolver,
        field_encryptor: FieldEncryptor,
        key_version: int = 1,
    ) -> ProtectBankingRecordCommand:
        return cls(
            record_repository=factory.banking_record_repository(),
            key_resolver=key_resolver,
            field_encryptor=field_encryptor,
            owner_id=factory.current_user.user_id,
            key_version=key_version,
        )

    async def execute(
        self,
        overrides: Optional[Mapping[SensitiveField, str]] = None,
    ) -> ProtectionResult:
        """
        Protect the owner's active record.

        Parameters
        ----------
        overrides
            Caller-supplied plaintext per field. A present override wins over
            the record's plaintext slot, even when it is empty.

        Returns
        -------
        The fields sealed and persisted by this call with their envelopes

        Raises
        ------
        RecordNotFoundError
            If the owner has no active record
        KeyNotConfiguredError
            If a field needs sealing but no key exists for the version
        """
        overrides = overrides or {}

        record = await self._repo.find_active()
        if record is None:
            logger.warning("No banking record found for user: %s", self._owner_id)
            raise RecordNotFoundError(self._owner_id)

        pending = self._collect_pending(record, overrides)
        if not pending:
            logger.info("No fields to encrypt for user: %s", self._owner_id)
            return ProtectionResult.empty()

        key_string = self._key_resolver.resolve_key(self._key_version)
        if not key_string:
            logger.error("Encryption key not configured (version %d)", self._key_version)
            raise KeyNotConfiguredError(self._key_version)

        envelopes = await self._seal_all(pending, key_string)
        stored = await self._repo.save_envelopes(record.id, envelopes)

        updated = {
            sensitive_field: envelope
            for sensitive_field, envelope in envelopes.items()
            if stored.get(sensitive_field) == envelope.to_json()
        }
        lost = [f.value for f in envelopes if f not in updated]
        if lost:
            logger.warning(
                "Fields already protected by a concurrent request for user %s: %s",
                self._owner_id,
                lost,
            )

        logger.info(
            "Successfully encrypted fields for user %s: %s",
            self._owner_id,
            [f.value for f in updated],
        )
        return ProtectionResult(updated_fields=tuple(updated), envelopes=updated)

    @staticmethod
    def _collect_pending(
        record: BankingRecord,
        overrides: Mapping[SensitiveField, str],
    ) -> dict[SensitiveField, SecureString]:
        pending: dict[SensitiveField, SecureString] = {}

        for sensitive_field in record.unprotected_fields():
            if sensitive_field in overrides:
                source = SecureString.from_optional(overrides[sensitive_field])
            else:
                source = record.plaintext_for(sensitive_field)

            if source is not None:
                pending[sensitive_field] = source

        return pending

    async def _seal_all(
        self,
        pending: dict[SensitiveField, SecureString],
        key_string: str,
    ) -> dict[SensitiveField, Envelope]:
        fields = list(pending)
        for sensitive_field in fields:
            logger.info("Encrypting %s...", sensitive_field.value)

        # Independent per field; the write-back waits for all of them
        sealed = await asyncio.gather(
            *(
                asyncio.to_thread(
                    self._encryptor.encrypt_field,
                    pending[sensitive_field].get_value(),
                    key_string,
                    self._key_version,
                )
                for sensitive_field in fields
            )
        )
        return dict(zip(fields, sealed, strict=True))
