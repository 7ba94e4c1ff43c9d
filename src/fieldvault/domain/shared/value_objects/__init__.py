"""Shared value objects."""

from fieldvault.domain.shared.value_objects.secure_string import SecureString

__all__ = ["SecureString"]
