"""SQLAlchemy model for banking records."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fieldvault.domain.shared.time import utc_now
from fieldvault.infrastructure.persistence.sqlalchemy.models.base import Base


class BankingRecordModel(Base):
    """SQLAlchemy model for a user's payout banking details."""

    __tablename__ = "banking_subaccounts"

    __table_args__ = (
        Index("ix_banking_subaccounts_user_status", "user_id", "status"),
    )

    # Primary Key
    id: Mapped[str] = mapped_column(String, primary_key=True)

    # Ownership (identity lives in the external auth service, no FK)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")

    # Legacy plaintext values (source for encryption)
    account_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    bank_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    bank_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    business_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Envelope JSON: {"ciphertext","iv","authTag","version"}
    encrypted_account_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    encrypted_bank_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    encrypted_bank_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    encrypted_business_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    encrypted_email: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Rows are created by the onboarding flow; only updated_at moves here
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"BankingRecordModel(id={self.id}, user_id={self.user_id}, "
            f"status={self.status})"
        )
