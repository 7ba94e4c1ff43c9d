"""Security infrastructure: AES-GCM sealing and key configuration."""

from fieldvault.infrastructure.security.aes_gcm_field_encryptor import (
    AesGcmFieldEncryptor,
)
from fieldvault.infrastructure.security.key_import import (
    ImportedKey,
    KeyEncoding,
    KeyImportFailure,
    forgiving_base64_decode,
    import_key,
)
from fieldvault.infrastructure.security.key_ring import KeyRing

__all__ = [
    "AesGcmFieldEncryptor",
    "ImportedKey",
    "KeyEncoding",
    "KeyImportFailure",
    "KeyRing",
    "forgiving_base64_decode",
    "import_key",
]
