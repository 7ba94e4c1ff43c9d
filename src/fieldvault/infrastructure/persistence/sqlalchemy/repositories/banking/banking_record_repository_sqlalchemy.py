"""SQLAlchemy implementation of BankingRecordRepository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldvault.domain.banking.entities import BankingRecord
from fieldvault.domain.banking.repositories import BankingRecordRepository
from fieldvault.domain.banking.value_objects import (
    SENSITIVE_FIELDS,
    RecordStatus,
    SensitiveField,
)
from fieldvault.domain.security.value_objects import Envelope
from fieldvault.domain.shared.exceptions import PersistenceError
from fieldvault.domain.shared.time import utc_now
from fieldvault.domain.shared.value_objects import SecureString
from fieldvault.infrastructure.persistence.sqlalchemy.models import (
    BankingRecordModel,
)

if TYPE_CHECKING:
    from fieldvault.application.ports.identity import CurrentUser

logger = logging.getLogger(__name__)

_DESCRIPTORS = {d.field: d for d in SENSITIVE_FIELDS}


class BankingRecordRepositorySQLAlchemy(BankingRecordRepository):
    """SQLAlchemy implementation scoped to one record owner."""

    def __init__(self, session: AsyncSession, current_user: CurrentUser):
        self._session = session
        self._user_id = current_user.user_id

    async def find_active(self) -> Optional[BankingRecord]:
        stmt = (
            select(BankingRecordModel)
            .where(
                BankingRecordModel.user_id == self._user_id,
                BankingRecordModel.status == RecordStatus.ACTIVE.value,
            )
            .order_by(BankingRecordModel.created_at)
            .execution_options(populate_existing=True)
        )

        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if not model:
            return None

        return self._model_to_entity(model)

    async def save_envelopes(
        self,
        record_id: str,
        envelopes: Mapping[SensitiveField, Envelope],
    ) -> dict[SensitiveField, str]:
        if not envelopes:
            return {}

        columns = {
            sensitive_field: getattr(
                BankingRecordModel, _DESCRIPTORS[sensitive_field].envelope_column
            )
            for sensitive_field in envelopes
        }

        # Fill a slot only while it is still empty: a concurrent writer that
        # got there first keeps its envelope.
        values = {
            _DESCRIPTORS[sensitive_field].envelope_column: func.coalesce(
                func.nullif(column, ""),
                envelopes[sensitive_field].to_json(),
            )
            for sensitive_field, column in columns.items()
        }

        stmt = (
            update(BankingRecordModel)
            .where(
                BankingRecordModel.id == record_id,
                BankingRecordModel.user_id == self._user_id,
            )
            .values(**values, updated_at=utc_now())
            .returning(*columns.values())
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self._session.execute(stmt)
            row = result.one_or_none()
        except SQLAlchemyError as e:
            logger.error("Failed updating encrypted fields: %s", type(e).__name__)
            msg = "Failed to save encrypted data"
            raise PersistenceError(msg, details={"record_id": record_id}) from e

        if row is None:
            msg = "Failed to save encrypted data"
            raise PersistenceError(
                msg,
                details={"record_id": record_id, "reason": "record vanished"},
            )

        return dict(zip(columns.keys(), row, strict=True))

    @staticmethod
    def _model_to_entity(model: BankingRecordModel) -> BankingRecord:
        plaintext: dict[SensitiveField, SecureString] = {}
        stored_envelopes: dict[SensitiveField, str] = {}

        for descriptor in SENSITIVE_FIELDS:
            value = SecureString.from_optional(
                getattr(model, descriptor.plaintext_column)
            )
            if value is not None:
                plaintext[descriptor.field] = value

            envelope_text = getattr(model, descriptor.envelope_column)
            if envelope_text is not None:
                stored_envelopes[descriptor.field] = envelope_text

        return BankingRecord(
            id=model.id,
            user_id=model.user_id,
            status=RecordStatus(model.status),
            plaintext=plaintext,
            stored_envelopes=stored_envelopes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
