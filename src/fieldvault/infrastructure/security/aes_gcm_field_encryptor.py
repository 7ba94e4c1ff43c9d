"""AES-256-GCM field encryptor implementation."""

import logging
import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from fieldvault.domain.security.exceptions import (
    EncryptionError,
    InvalidKeyLengthError,
    MissingKeyError,
)
from fieldvault.domain.security.services import FieldEncryptor
from fieldvault.domain.security.value_objects import (
    AUTH_TAG_LENGTH,
    IV_LENGTH,
    Envelope,
)
from fieldvault.infrastructure.security.key_import import (
    AES_256_KEY_LENGTH,
    KeyImportFailure,
    import_key,
)

logger = logging.getLogger(__name__)


class AesGcmFieldEncryptor(FieldEncryptor):
    """Seals field values with AES-256-GCM, a random 96-bit IV and a 128-bit tag.

    No additional authenticated data is bound to the ciphertext.
    """

    def encrypt_field(self, plaintext: str, key_string: str, version: int) -> Envelope:
        if not key_string:
            raise MissingKeyError()

        imported = import_key(key_string)
        if isinstance(imported, KeyImportFailure):
            logger.error(
                "Key length: %d bytes (need %d)",
                imported.utf8_length,
                AES_256_KEY_LENGTH,
            )
            raise InvalidKeyLengthError(imported.utf8_length)

        iv = os.urandom(IV_LENGTH)

        try:
            sealed = AESGCM(imported.material).encrypt(
                iv,
                plaintext.encode("utf-8"),
                None,
            )
        except Exception as e:
            logger.error("Encryption error: %s", type(e).__name__)
            msg = "Encryption failed"
            raise EncryptionError(msg, {"error": type(e).__name__}) from e

        # AESGCM returns ciphertext || tag
        if len(sealed) < AUTH_TAG_LENGTH:
            logger.error("Encryption output too short: %d", len(sealed))
            msg = "Encryption failed: output too short"
            raise EncryptionError(msg, {"output_length": len(sealed)})

        return Envelope.seal(
            ciphertext=sealed[:-AUTH_TAG_LENGTH],
            iv=iv,
            auth_tag=sealed[-AUTH_TAG_LENGTH:],
            version=version,
        )
