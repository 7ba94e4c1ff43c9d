"""Envelope value object - one encrypted field value."""

from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field, field_validator

IV_LENGTH = 12
AUTH_TAG_LENGTH = 16


def _decoded_length(value: str) -> int:
    try:
        return len(base64.b64decode(value, validate=True))
    except (binascii.Error, ValueError) as e:
        msg = "must be standard base64"
        raise ValueError(msg) from e


class Envelope(BaseModel):
    """
    Self-describing AES-GCM ciphertext of a single field value.

    The JSON form is persisted in the record's ``encrypted_*`` columns and must
    stay stable across implementations:

        {"ciphertext": "...", "iv": "...", "authTag": "...", "version": 1}

    All three binary parts are standard (not URL-safe) padded base64.
    ``version`` names the key (``ENCRYPTION_KEY_V<version>``) that sealed it.
    """

    ciphertext: str = Field(..., description="Base64 ciphertext (no tag)")
    iv: str = Field(..., description="Base64 of the 12-byte nonce")
    auth_tag: str = Field(
        ...,
        alias="authTag",
        description="Base64 of the 16-byte GCM authentication tag",
    )
    version: int = Field(..., ge=1, description="Key version used to encrypt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("ciphertext")
    @classmethod
    def validate_ciphertext(cls, v: str) -> str:
        _decoded_length(v)
        return v

    @field_validator("iv")
    @classmethod
    def validate_iv(cls, v: str) -> str:
        if _decoded_length(v) != IV_LENGTH:
            msg = f"iv must decode to {IV_LENGTH} bytes"
            raise ValueError(msg)
        return v

    @field_validator("auth_tag")
    @classmethod
    def validate_auth_tag(cls, v: str) -> str:
        if _decoded_length(v) != AUTH_TAG_LENGTH:
            msg = f"authTag must decode to {AUTH_TAG_LENGTH} bytes"
            raise ValueError(msg)
        return v

    @classmethod
    def seal(
        cls,
        ciphertext: bytes,
        iv: bytes,
        auth_tag: bytes,
        version: int,
    ) -> Envelope:
        """Build an envelope from raw cipher output."""
        return cls(
            ciphertext=base64.b64encode(ciphertext).decode("ascii"),
            iv=base64.b64encode(iv).decode("ascii"),
            authTag=base64.b64encode(auth_tag).decode("ascii"),
            version=version,
        )

    @classmethod
    def from_json(cls, data: str) -> Envelope:
        return cls.model_validate_json(data)

    def to_json(self) -> str:
        """Compact JSON form as stored in the record."""
        return self.model_dump_json(by_alias=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)

    def __repr__(self) -> str:
        return f"Envelope(version={self.version}, iv={self.iv})"
