from fieldvault.domain.security.value_objects.envelope import (
    AUTH_TAG_LENGTH,
    IV_LENGTH,
    Envelope,
)

__all__ = ["AUTH_TAG_LENGTH", "IV_LENGTH", "Envelope"]
