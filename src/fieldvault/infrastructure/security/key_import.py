"""Import of AES-256 key material from configured key strings.

Key strings are distributed either as base64 or as a raw 32-character
secret, without a format flag. Import is a two-step parse:

1. base64 (forgiving decoding, see ``forgiving_base64_decode``) yielding
   exactly 32 bytes
2. the UTF-8 bytes of the string, if exactly 32 bytes

Anything else is a length failure. Envelopes written by earlier deployments
depend on this exact order.
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

AES_256_KEY_LENGTH = 32

_ASCII_WHITESPACE = re.compile(r"[\t\n\f\r ]")
_BASE64_ALPHABET = re.compile(r"[A-Za-z0-9+/]*")


class KeyEncoding(str, Enum):
    BASE64 = "base64"
    UTF8 = "utf-8"


@dataclass(frozen=True)
class ImportedKey:
    """32 bytes of key material and the encoding it was read from."""

    material: bytes
    encoding: KeyEncoding

    def __repr__(self) -> str:
        return f"ImportedKey(encoding={self.encoding.value}, material=*****)"


@dataclass(frozen=True)
class KeyImportFailure:
    """Neither reading of the key string produced 32 bytes."""

    utf8_length: int
    base64_length: Optional[int]

    @property
    def reason(self) -> str:
        return (
            f"key is {self.utf8_length} bytes as UTF-8 "
            f"(need {AES_256_KEY_LENGTH})"
        )


KeyImportResult = Union[ImportedKey, KeyImportFailure]


def forgiving_base64_decode(data: str) -> Optional[bytes]:
    """Decode base64 the way web runtimes' ``atob`` does.

    ASCII whitespace is dropped, up to two trailing ``=`` are optional, and
    only the standard alphabet is accepted. Returns None when the input is
    not base64.
    """
    stripped = _ASCII_WHITESPACE.sub("", data)

    if len(stripped) % 4 == 0:
        if stripped.endswith("=="):
            stripped = stripped[:-2]
        elif stripped.endswith("="):
            stripped = stripped[:-1]

    if len(stripped) % 4 == 1:
        return None
    if not _BASE64_ALPHABET.fullmatch(stripped):
        return None

    padded = stripped + "=" * (-len(stripped) % 4)
    return base64.b64decode(padded, validate=True)


def import_key(key_string: str) -> KeyImportResult:
    """Read 32 bytes of AES key material from ``key_string``."""
    decoded = forgiving_base64_decode(key_string)
    if decoded is not None and len(decoded) == AES_256_KEY_LENGTH:
        return ImportedKey(material=decoded, encoding=KeyEncoding.BASE64)

    raw = key_string.encode("utf-8")
    if len(raw) == AES_256_KEY_LENGTH:
        return ImportedKey(material=raw, encoding=KeyEncoding.UTF8)

    return KeyImportFailure(
        utf8_length=len(raw),
        base64_length=len(decoded) if decoded is not None else None,
    )
