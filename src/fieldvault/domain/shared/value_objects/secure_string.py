"""Secure string value object for sensitive data."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SecureString:
    """
    Value object that wraps sensitive string data.

    Prevents accidental exposure through:
    - String representation (__str__, __repr__)
    - Logging
    - Debugging tools
    - Error messages

    The actual value is only accessible via explicit get_value() call.
    """

    _value: str

    def __post_init__(self):
        """Validate that value is not empty."""
        if not isinstance(self._value, str):
            msg = "SecureString value must be a string"
            raise TypeError(msg)

        if not self._value:
            msg = "SecureString cannot be empty"
            raise ValueError(msg)

    def get_value(self) -> str:
        """
        Get the actual sensitive value.

        This is the ONLY way to access the real value.
        The explicit method name makes it clear that sensitive data is accessed.
        """
        return self._value

    def __str__(self) -> str:
        """Return masked representation."""
        return "*****"

    def __repr__(self) -> str:
        """Return masked representation for debugging."""
        return "SecureString(*****)"

    def __eq__(self, other: object) -> bool:
        """Compare securely without exposing values in error messages."""
        if not isinstance(other, SecureString):
            return False
        return self._value == other._value

    def __hash__(self) -> int:
        """Allow use in sets/dicts."""
        return hash(self._value)

    def __len__(self) -> int:
        """Return length without exposing value."""
        return len(self._value)

    @classmethod
    def from_optional(cls, value: str | None) -> SecureString | None:
        """Wrap a possibly missing value; empty strings count as missing."""
        if not value:
            return None
        return cls(value)
