from fieldvault.domain.security.services.field_encryptor import FieldEncryptor
from fieldvault.domain.security.services.key_resolver import KeyResolver

__all__ = ["FieldEncryptor", "KeyResolver"]
