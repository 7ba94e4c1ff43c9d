"""Banking record schemas for API request/response models."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fieldvault.application.dtos import ProtectionResult
from fieldvault.domain.banking.value_objects import SensitiveField
from fieldvault.domain.security.value_objects import Envelope


class ProtectRecordRequest(BaseModel):
    """Optional plaintext overrides; absent or null fields use the stored value."""

    account_number: Optional[str] = Field(default=None, description="Bank account number")
    bank_code: Optional[str] = Field(default=None, description="Bank/sort code")
    bank_name: Optional[str] = Field(default=None, description="Bank name")
    business_name: Optional[str] = Field(
        default=None,
        description="Account holder or business name",
    )
    email: Optional[str] = Field(default=None, description="Contact email")

    model_config = ConfigDict(
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "account_number": "0123456789",
                "bank_code": "058",
            },
        },
    )

    def overrides(self) -> dict[SensitiveField, str]:
        return {
            SensitiveField(name): value
            for name, value in self.model_dump(exclude_none=True).items()
        }

    @classmethod
    def parse_fields(
        cls,
        payload: dict[str, Any],
    ) -> tuple[dict[SensitiveField, str], list[str]]:
        """Validate each field on its own; an invalid value drops only that field.

        Numbers are taken as their string form.

        Returns
        -------
        The overrides, and the names of the fields that were rejected
        """
        overrides: dict[SensitiveField, str] = {}
        rejected: list[str] = []

        for sensitive_field in SensitiveField:
            if sensitive_field.value not in payload:
                continue
            try:
                parsed = cls.model_validate(
                    {sensitive_field.value: payload[sensitive_field.value]}
                )
            except ValidationError:
                rejected.append(sensitive_field.value)
                continue
            overrides.update(parsed.overrides())

        return overrides, rejected


class EnvelopeResponse(BaseModel):
    """Encrypted representation of one field."""

    ciphertext: str = Field(..., description="Base64 ciphertext")
    iv: str = Field(..., description="Base64 12-byte IV")
    auth_tag: str = Field(..., alias="authTag", description="Base64 16-byte tag")
    version: int = Field(..., description="Key version")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_envelope(cls, envelope: Envelope) -> "EnvelopeResponse":
        return cls(
            ciphertext=envelope.ciphertext,
            iv=envelope.iv,
            auth_tag=envelope.auth_tag,
            version=envelope.version,
        )


class ProtectRecordResponse(BaseModel):
    """Response schema for the encryption endpoint."""

    success: bool = Field(default=True)
    updated_fields: list[str] = Field(
        default_factory=list,
        alias="updatedFields",
        description="Fields sealed by this call",
    )
    data: dict[str, EnvelopeResponse] = Field(
        default_factory=dict,
        description="Envelopes produced by this call, by field name",
    )
    message: Optional[str] = Field(default=None)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "success": True,
                "updatedFields": ["account_number"],
                "data": {
                    "account_number": {
                        "ciphertext": "q83vEjRWeJA=",
                        "iv": "AAECAwQFBgcICQoL",
                        "authTag": "AAECAwQFBgcICQoLDA0ODw==",
                        "version": 1,
                    },
                },
            },
        },
    )

    @classmethod
    def from_result(cls, result: ProtectionResult) -> "ProtectRecordResponse":
        if result.nothing_to_encrypt:
            return cls(message="Nothing to encrypt")

        return cls(
            updated_fields=[f.value for f in result.updated_fields],
            data={
                f.value: EnvelopeResponse.from_envelope(envelope)
                for f, envelope in result.envelopes.items()
            },
        )
