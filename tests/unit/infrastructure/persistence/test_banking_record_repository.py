"""Tests for BankingRecordRepositorySQLAlchemy on SQLite."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from fieldvault.domain.banking.value_objects import RecordStatus, SensitiveField
from fieldvault.domain.security.value_objects import Envelope
from fieldvault.domain.shared.exceptions import ErrorCode, PersistenceError
from fieldvault.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from tests.shared.fixtures.database import (
    TEST_USER,
    TEST_USER_2,
    TEST_USER_ID_2,
    make_record_model,
)

EXISTING = Envelope.seal(b"old", bytes(12), bytes(16), version=1)
FRESH = Envelope.seal(b"new", bytes(12), bytes(16), version=1)
OTHER = Envelope.seal(b"other", bytes(12), bytes(16), version=2)


def _repo(session, user=TEST_USER):
    return SQLAlchemyRepositoryFactory(session, user).banking_record_repository()


class TestFindActive:
    @pytest.mark.asyncio
    async def test_maps_row_to_entity(self, sqlite_session):
        sqlite_session.add(
            make_record_model(
                account_number="0123456789",
                bank_code="",
                encrypted_bank_code=EXISTING.to_json(),
            )
        )
        await sqlite_session.commit()

        record = await _repo(sqlite_session).find_active()

        assert record is not None
        assert record.id == "rec-1"
        assert record.user_id == TEST_USER.user_id
        assert record.status == RecordStatus.ACTIVE
        assert record.plaintext_for(SensitiveField.ACCOUNT_NUMBER).get_value() == (
            "0123456789"
        )
        # Empty plaintext is treated as absent
        assert record.plaintext_for(SensitiveField.BANK_CODE) is None
        assert record.stored_envelopes[SensitiveField.BANK_CODE] == EXISTING.to_json()
        assert record.unprotected_fields() == [
            SensitiveField.ACCOUNT_NUMBER,
            SensitiveField.BANK_NAME,
            SensitiveField.BUSINESS_NAME,
            SensitiveField.EMAIL,
        ]

    @pytest.mark.asyncio
    async def test_ignores_inactive_records(self, sqlite_session):
        sqlite_session.add(make_record_model(status="inactive"))
        await sqlite_session.commit()

        assert await _repo(sqlite_session).find_active() is None

    @pytest.mark.asyncio
    async def test_is_scoped_to_the_current_user(self, sqlite_session):
        sqlite_session.add(make_record_model(user_id=TEST_USER_ID_2))
        await sqlite_session.commit()

        assert await _repo(sqlite_session).find_active() is None
        assert await _repo(sqlite_session, TEST_USER_2).find_active() is not None

    @pytest.mark.asyncio
    async def test_oldest_active_record_wins(self, sqlite_session):
        sqlite_session.add_all(
            [
                make_record_model(record_id="rec-new", created_offset=10),
                make_record_model(record_id="rec-old", created_offset=0),
            ]
        )
        await sqlite_session.commit()

        record = await _repo(sqlite_session).find_active()

        assert record.id == "rec-old"


class TestSaveEnvelopes:
    @pytest.mark.asyncio
    async def test_fills_empty_slots(self, sqlite_session):
        sqlite_session.add(make_record_model(account_number="0123456789"))
        await sqlite_session.commit()
        repo = _repo(sqlite_session)

        stored = await repo.save_envelopes(
            "rec-1",
            {SensitiveField.ACCOUNT_NUMBER: FRESH},
        )
        await sqlite_session.commit()

        assert stored == {SensitiveField.ACCOUNT_NUMBER: FRESH.to_json()}
        record = await repo.find_active()
        assert record.stored_envelopes[SensitiveField.ACCOUNT_NUMBER] == FRESH.to_json()
        # Plaintext column is left as it was
        assert record.plaintext_for(SensitiveField.ACCOUNT_NUMBER) is not None

    @pytest.mark.asyncio
    async def test_empty_string_slot_counts_as_empty(self, sqlite_session):
        sqlite_session.add(make_record_model(encrypted_email=""))
        await sqlite_session.commit()

        stored = await _repo(sqlite_session).save_envelopes(
            "rec-1",
            {SensitiveField.EMAIL: FRESH},
        )

        assert stored[SensitiveField.EMAIL] == FRESH.to_json()

    @pytest.mark.asyncio
    async def test_keeps_envelope_written_first(self, sqlite_session):
        sqlite_session.add(make_record_model(encrypted_bank_name=EXISTING.to_json()))
        await sqlite_session.commit()

        stored = await _repo(sqlite_session).save_envelopes(
            "rec-1",
            {SensitiveField.BANK_NAME: OTHER, SensitiveField.EMAIL: FRESH},
        )

        assert stored == {
            SensitiveField.BANK_NAME: EXISTING.to_json(),
            SensitiveField.EMAIL: FRESH.to_json(),
        }

    @pytest.mark.asyncio
    async def test_nothing_to_save(self, sqlite_session):
        assert await _repo(sqlite_session).save_envelopes("rec-1", {}) == {}

    @pytest.mark.asyncio
    async def test_other_users_record_is_not_written(self, sqlite_session):
        sqlite_session.add(make_record_model(user_id=TEST_USER_ID_2))
        await sqlite_session.commit()

        with pytest.raises(PersistenceError) as exc_info:
            await _repo(sqlite_session).save_envelopes(
                "rec-1",
                {SensitiveField.EMAIL: FRESH},
            )

        assert exc_info.value.message == "Failed to save encrypted data"

    @pytest.mark.asyncio
    async def test_vanished_record_is_store_write_failed(self, sqlite_session):
        with pytest.raises(PersistenceError) as exc_info:
            await _repo(sqlite_session).save_envelopes(
                "rec-gone",
                {SensitiveField.ACCOUNT_NUMBER: FRESH},
            )

        assert exc_info.value.code == ErrorCode.STORE_WRITE_FAILED
        assert exc_info.value.details == {
            "record_id": "rec-gone",
            "reason": "record vanished",
        }

    @pytest.mark.asyncio
    async def test_database_error_is_store_write_failed(self, sqlite_session):
        sqlite_session.add(make_record_model(account_number="0123456789"))
        await sqlite_session.commit()
        failure = OperationalError("UPDATE", {}, Exception("disk I/O error"))

        with patch.object(sqlite_session, "execute", side_effect=failure):
            with pytest.raises(PersistenceError) as exc_info:
                await _repo(sqlite_session).save_envelopes(
                    "rec-1",
                    {SensitiveField.ACCOUNT_NUMBER: FRESH},
                )

        assert exc_info.value.code == ErrorCode.STORE_WRITE_FAILED
        assert exc_info.value.__cause__ is failure


class TestRepositoryFactory:
    @pytest.mark.asyncio
    async def test_repository_is_cached(self, sqlite_session):
        factory = SQLAlchemyRepositoryFactory(sqlite_session, TEST_USER)

        assert factory.banking_record_repository() is factory.banking_record_repository()
        assert factory.current_user == TEST_USER
        assert factory.session is sqlite_session
