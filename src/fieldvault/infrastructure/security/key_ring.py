"""Environment-backed key ring.

Key strings are configured under version-stamped names::

    ENCRYPTION_KEY_V1=...
    ENCRYPTION_KEY_V2=...
    ENCRYPTION_KEY=...        # unversioned fallback

The ring is built once at startup from the process environment (merged over
the configured .env file) and is read-only afterwards.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values
from pydantic import SecretStr

from fieldvault.domain.security.services import KeyResolver

logger = logging.getLogger(__name__)

VERSIONED_KEY_PREFIX = "ENCRYPTION_KEY_V"
FALLBACK_KEY_NAME = "ENCRYPTION_KEY"

_VERSIONED_KEY_NAME = re.compile(rf"^{VERSIONED_KEY_PREFIX}([1-9][0-9]*)$")


class KeyRing(KeyResolver):
    """Immutable set of configured key strings, indexed by version."""

    def __init__(
        self,
        versioned_keys: Mapping[int, str] | None = None,
        fallback_key: Optional[str] = None,
    ):
        # Empty strings are treated as not configured
        self._keys: dict[int, SecretStr] = {
            version: SecretStr(value)
            for version, value in (versioned_keys or {}).items()
            if value
        }
        self._fallback = SecretStr(fallback_key) if fallback_key else None

    @classmethod
    def from_environ(cls, environ: Mapping[str, Optional[str]]) -> KeyRing:
        """Collect ``ENCRYPTION_KEY_V<n>`` and ``ENCRYPTION_KEY`` from a mapping."""
        versioned: dict[int, str] = {}
        for name, value in environ.items():
            match = _VERSIONED_KEY_NAME.match(name)
            if match and value:
                versioned[int(match.group(1))] = value

        return cls(versioned_keys=versioned, fallback_key=environ.get(FALLBACK_KEY_NAME))

    @classmethod
    def from_environment(cls, env_file: Path | None = None) -> KeyRing:
        """Build the ring from ``os.environ`` layered over ``env_file``."""
        merged: dict[str, Optional[str]] = {}
        if env_file is not None:
            merged.update(dotenv_values(env_file))
        merged.update(os.environ)

        ring = cls.from_environ(merged)
        logger.info(
            "Key ring loaded: versions=%s, fallback=%s",
            sorted(ring.versions),
            ring.has_fallback,
        )
        return ring

    @property
    def versions(self) -> frozenset[int]:
        return frozenset(self._keys)

    @property
    def has_fallback(self) -> bool:
        return self._fallback is not None

    def resolve_key(self, version: int = 1) -> Optional[str]:
        if version < 1:
            msg = f"Key version must be a positive integer, got {version}"
            raise ValueError(msg)

        secret = self._keys.get(version) or self._fallback
        if secret is None:
            return None
        return secret.get_secret_value()

    def __repr__(self) -> str:
        return (
            f"KeyRing(versions={sorted(self._keys)}, "
            f"fallback={self.has_fallback})"
        )
